import asyncio
from datetime import timedelta

import pytest

from fakes import T0, FakeSource, RecordingView
from soconnect.application.sync import ConversationState, PollOutcome, SyncEngine
from soconnect.domain.exceptions import (
    EmptyMessageError,
    TransientStoreError,
    UnauthenticatedError,
)


def _setup(on_session_expired=None):
    source = FakeSource()
    view = RecordingView()
    return source, view, SyncEngine(source, on_session_expired), ConversationState(view=view)


def test_poll_without_open_conversation_is_noop():
    source, view, engine, state = _setup()

    outcomes = [asyncio.run(engine.poll(state)) for _ in range(3)]

    assert outcomes == [PollOutcome.IDLE] * 3
    assert source.fetches == 0
    assert view.renders == 0


def test_repeated_polls_do_not_rerender():
    source, view, engine, state = _setup()
    source.add("22222", "hi")
    source.add("22222", "hello", from_user="22222")
    engine.open_conversation(state, "22222")

    async def run():
        first = await engine.poll(state)
        rest = [await engine.poll(state) for _ in range(5)]
        return first, rest

    first, rest = asyncio.run(run())

    assert first is PollOutcome.RELOADED
    assert rest == [PollOutcome.UNCHANGED] * 5
    assert view.renders == 1
    assert view.texts == ["hi", "hello"]


def test_new_message_triggers_full_reload():
    source, view, engine, state = _setup()
    source.add("22222", "one")
    engine.open_conversation(state, "22222")
    asyncio.run(engine.poll(state))

    source.add("22222", "two", from_user="22222")
    outcome = asyncio.run(engine.poll(state))

    assert outcome is PollOutcome.RELOADED
    assert view.renders == 2
    assert view.texts == ["one", "two"]
    assert state.known_ids == {1, 2}


def test_reload_orders_by_timestamp_then_id():
    source, view, engine, state = _setup()
    source.add("22222", "late-b", id=5, at=T0 + timedelta(seconds=10))
    source.add("22222", "late-a", id=3, at=T0 + timedelta(seconds=10))
    source.add("22222", "early", id=9, at=T0)
    engine.open_conversation(state, "22222")

    asyncio.run(engine.poll(state))

    assert view.texts == ["early", "late-a", "late-b"]


def test_open_resets_known_ids_on_every_switch():
    source, view, engine, state = _setup()
    source.add("22222", "to bob")
    source.add("33333", "to cat")

    engine.open_conversation(state, "22222")
    asyncio.run(engine.poll(state))
    assert state.known_ids == {1}

    engine.open_conversation(state, "33333")
    assert state.known_ids == frozenset()
    asyncio.run(engine.poll(state))
    assert view.texts == ["to cat"]

    engine.open_conversation(state, "22222")
    assert state.known_ids == frozenset()
    assert view.rendered == []
    assert asyncio.run(engine.poll(state)) is PollOutcome.RELOADED
    assert view.texts == ["to bob"]


def test_send_polls_immediately():
    source, view, engine, state = _setup()
    engine.open_conversation(state, "22222")
    asyncio.run(engine.poll(state))
    fetches = source.fetches

    message = asyncio.run(engine.send_text(state, "hi"))

    assert source.sent == [("22222", "hi")]
    assert source.fetches == fetches + 1
    assert view.texts == ["hi"]
    assert state.known_ids == {message.id}


def test_failed_send_leaves_state_untouched():
    source, view, engine, state = _setup()
    source.add("22222", "existing")
    engine.open_conversation(state, "22222")
    asyncio.run(engine.poll(state))
    known, renders = state.known_ids, view.renders

    for error in (EmptyMessageError(), TransientStoreError()):
        source.send_error = error
        with pytest.raises(type(error)):
            asyncio.run(engine.send_text(state, "  "))

    assert state.known_ids == known
    assert view.renders == renders
    assert view.texts == ["existing"]


def test_send_succeeds_when_refresh_fails():
    source, view, engine, state = _setup()
    engine.open_conversation(state, "22222")
    source.fetch_errors = [TransientStoreError()]

    message = asyncio.run(engine.send_text(state, "hi"))

    assert message.text == "hi"
    assert source.sent == [("22222", "hi")]
    assert view.texts == []

    outcome = asyncio.run(engine.poll(state))

    assert outcome is PollOutcome.RELOADED
    assert view.texts == ["hi"]
    assert state.known_ids == {message.id}


def test_send_attachment_polls_immediately():
    source, view, engine, state = _setup()
    engine.open_conversation(state, "22222")

    message = asyncio.run(
        engine.send_attachment(state, b"%PDF", "a.pdf", "application/pdf", caption="doc")
    )

    assert source.sent == [("22222", "a.pdf", "application/pdf", "doc")]
    assert message.file_url == "/uploads/a.pdf"
    assert view.rendered == [message]


def test_send_without_open_conversation():
    source, view, engine, state = _setup()
    with pytest.raises(RuntimeError):
        asyncio.run(engine.send_text(state, "hi"))
    assert source.sent == []


def test_response_for_closed_conversation_is_discarded():
    source, view, engine, state = _setup()
    source.add("22222", "hi")
    engine.open_conversation(state, "22222")

    async def run():
        source.gate = asyncio.Event()
        poll = asyncio.create_task(engine.poll(state))
        await asyncio.sleep(0)
        engine.close_conversation(state)
        source.gate.set()
        return await poll

    assert asyncio.run(run()) is PollOutcome.DISCARDED
    assert view.renders == 0
    assert state.known_ids == frozenset()
    assert not state.is_tracking


def test_response_for_switched_conversation_is_discarded():
    source, view, engine, state = _setup()
    source.add("22222", "for bob")
    engine.open_conversation(state, "22222")

    async def run():
        source.gate = asyncio.Event()
        poll = asyncio.create_task(engine.poll(state))
        await asyncio.sleep(0)
        engine.open_conversation(state, "33333")
        source.gate.set()
        return await poll

    assert asyncio.run(run()) is PollOutcome.DISCARDED
    assert view.rendered == []
    assert state.counterparty == "33333"


def test_session_expiry_forces_logout():
    expired = []
    source, view, engine, state = _setup(on_session_expired=lambda: expired.append(True))
    engine.open_conversation(state, "22222")
    source.fetch_errors = [UnauthenticatedError()]

    with pytest.raises(UnauthenticatedError):
        asyncio.run(engine.poll(state))

    assert expired == [True]


def test_transient_poll_error_does_not_force_logout():
    expired = []
    source, view, engine, state = _setup(on_session_expired=lambda: expired.append(True))
    engine.open_conversation(state, "22222")
    source.fetch_errors = [TransientStoreError()]

    with pytest.raises(TransientStoreError):
        asyncio.run(engine.poll(state))

    assert expired == []


def test_windows_do_not_share_state():
    source = FakeSource()
    engine = SyncEngine(source)
    source.add("22222", "bob")
    source.add("33333", "cat")
    left, right = ConversationState(view=RecordingView()), ConversationState(view=RecordingView())

    engine.open_conversation(left, "22222")
    engine.open_conversation(right, "33333")
    asyncio.run(engine.poll(left))
    asyncio.run(engine.poll(right))

    assert left.view.texts == ["bob"]
    assert right.view.texts == ["cat"]
    assert left.known_ids != right.known_ids
