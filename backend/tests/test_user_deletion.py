import asyncio

import pytest

from conftest import ADMIN_HEADERS, login, register
from soconnect.application.commands.users import DeleteUserCommand, DeleteUserHandler
from soconnect.domain.entities.message import Message, MessageDraft
from soconnect.domain.entities.user import User
from soconnect.domain.exceptions import EntityNotFoundError, TransientStoreError
from soconnect.domain.value_objects import UserCode
from soconnect.infrastructure.memory import (
    InMemoryMessageRepository,
    InMemorySessionRepository,
    InMemoryStore,
    InMemoryUnitOfWork,
    InMemoryUserRepository,
)

ANN, BOB = UserCode("11111"), UserCode("22222")


def test_admin_deletes_user_and_messages(client, ann, bob):
    client.post("/messages", headers=ann, json={"to": "22222", "text": "hi"})
    client.post("/messages", headers=bob, json={"to": "11111", "text": "hey"})

    res = client.delete("/admin/users/11111", headers=ADMIN_HEADERS)

    assert res.status_code == 200, res.text
    assert res.json() == {"code": "11111", "messages_deleted": 2}
    assert client.get("/conversations", headers=bob).json() == []
    assert client.get("/conversations/11111", headers=bob).json() == []
    assert client.post("/login", json={"code": "11111", "passcode": "p"}).status_code == 401


def test_deleted_user_session_is_revoked(client, ann):
    client.delete("/admin/users/11111", headers=ADMIN_HEADERS)
    assert client.get("/conversations", headers=ann).status_code == 401


def test_deleted_code_can_register_again(client, ann):
    client.delete("/admin/users/11111", headers=ADMIN_HEADERS)
    register(client, "11111", name="New Ann", passcode="p2")
    headers = login(client, "11111", passcode="p2")
    assert client.get("/conversations", headers=headers).json() == []


def test_delete_unknown_user(client):
    res = client.delete("/admin/users/99999", headers=ADMIN_HEADERS)
    assert res.status_code == 404


def test_delete_requires_admin_key(client, ann):
    assert client.delete("/admin/users/11111").status_code == 403
    assert client.delete("/admin/users/11111", headers={"X-Admin-Key": "wrong"}).status_code == 403
    assert client.get("/conversations", headers=ann).status_code == 200


def test_admin_route_hidden_without_configured_key(client, ann, monkeypatch):
    monkeypatch.setattr("soconnect.config.settings.Config.ADMIN_API_KEY", "")
    res = client.delete("/admin/users/11111", headers=ADMIN_HEADERS)
    assert res.status_code == 404


# ==================== TRANSACTION ====================


class _FailingUsers(InMemoryUserRepository):
    async def delete(self, code):
        raise TransientStoreError()


class _FailingMessages(InMemoryMessageRepository):
    async def delete_by_user(self, user_code):
        raise TransientStoreError()


def _seeded_store():
    store = InMemoryStore()

    async def seed():
        users = InMemoryUserRepository(store)
        messages = InMemoryMessageRepository(store)
        await users.add(User.create(ANN, "Ann", "hash"))
        await users.add(User.create(BOB, "Bob", "hash"))
        await messages.append(MessageDraft(sender=ANN, recipient=BOB, text="one"))
        await messages.append(MessageDraft(sender=BOB, recipient=ANN, text="two"))

    asyncio.run(seed())
    return store


def test_failed_message_delete_keeps_user():
    store = _seeded_store()
    uow = InMemoryUnitOfWork(store, messages=_FailingMessages(store))
    handler = DeleteUserHandler(unit_of_work=uow, session_repository=InMemorySessionRepository())

    with pytest.raises(TransientStoreError):
        asyncio.run(handler.execute(DeleteUserCommand(code=ANN)))

    assert "11111" in store.users
    assert len(store.messages) == 2


def test_failed_user_delete_rolls_back_messages():
    store = _seeded_store()
    uow = InMemoryUnitOfWork(store, users=_FailingUsers(store))
    handler = DeleteUserHandler(unit_of_work=uow, session_repository=InMemorySessionRepository())

    with pytest.raises(TransientStoreError):
        asyncio.run(handler.execute(DeleteUserCommand(code=ANN)))

    assert "11111" in store.users
    assert [m.text for m in store.messages] == ["one", "two"]


def test_unknown_user_rolls_back_message_delete():
    store = _seeded_store()
    # stray row for a code without a user row
    stray = MessageDraft(sender=UserCode("33333"), recipient=BOB, text="stray")
    store.messages.append(Message.from_draft(stray, id=store.next_id(), timestamp=store.now()))
    handler = DeleteUserHandler(
        unit_of_work=InMemoryUnitOfWork(store), session_repository=InMemorySessionRepository()
    )

    with pytest.raises(EntityNotFoundError):
        asyncio.run(handler.execute(DeleteUserCommand(code=UserCode("33333"))))

    assert len(store.messages) == 3


def test_successful_delete_leaves_nothing_behind():
    store = _seeded_store()
    handler = DeleteUserHandler(
        unit_of_work=InMemoryUnitOfWork(store), session_repository=InMemorySessionRepository()
    )

    result = asyncio.run(handler.execute(DeleteUserCommand(code=ANN)))

    assert result.messages_deleted == 2
    assert "11111" not in store.users
    assert store.messages == []
    assert "22222" in store.users
