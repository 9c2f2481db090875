import asyncio
import logging
import os

import pytest

from soconnect.application.commands.messages import (
    UploadAttachmentCommand,
    UploadAttachmentHandler,
)
from soconnect.domain.exceptions import TransientStoreError
from soconnect.domain.ports.object_store import ObjectStore
from soconnect.domain.value_objects import UserCode
from soconnect.infrastructure.memory import (
    InMemoryMessageRepository,
    InMemoryStore,
    InMemoryUserRepository,
)
from soconnect.domain.entities.user import User

MAX_UPLOAD_SIZE_IN_BYTE = int(os.getenv("MAX_UPLOAD_MB")) * 1024 * 1024
UPLOAD_DIR = os.environ["UPLOAD_BASE"]


def _stored_files():
    return set(os.listdir(UPLOAD_DIR)) if os.path.isdir(UPLOAD_DIR) else set()


def _upload(client, headers, content, filename="report.pdf", mime="application/pdf", **form):
    return client.post(
        "/upload",
        headers=headers,
        data={"to": "22222", **form},
        files={"file": (filename, content, mime)},
    )


def test_upload_file_size_limit(client, ann, bob):
    before = _stored_files()

    res = _upload(client, ann, b"0" * (15 * 1024 * 1024), filename="big.pdf")

    assert res.status_code == 413, f"Expected 413 Payload Too Large, got {res.status_code}"
    assert res.json()["error"] == "AttachmentTooLarge"
    assert client.get("/conversations/22222", headers=ann).json() == []
    assert client.get("/conversations", headers=ann).json() == []
    assert _stored_files() == before


def test_upload_file_within_limit(client, ann, bob):
    content = b"%PDF-1.4 " + b"0" * (MAX_UPLOAD_SIZE_IN_BYTE - 1000)

    res = _upload(client, ann, content, filename="small.pdf")

    assert res.status_code == 201, f"Expected 201 Created, got {res.status_code}"
    assert res.json()["message"]["file_size"] == len(content)


def test_upload_creates_attachment_message(client, ann, bob):
    content = b"%PDF-1.4 quarterly numbers"

    res = _upload(client, ann, content, caption="see attached")

    assert res.status_code == 201, res.text
    message = res.json()["message"]
    assert message["from_user"] == "11111"
    assert message["to_user"] == "22222"
    assert message["text"] == "see attached"
    assert message["file_name"] == "report.pdf"
    assert message["file_type"] == "application/pdf"
    assert message["file_size"] == len(content)
    assert message["file_url"].startswith("/uploads/")

    history = client.get("/conversations/11111", headers=bob).json()
    assert history == [message]

    download = client.get(message["file_url"])
    assert download.status_code == 200
    assert download.content == content


def test_upload_without_caption_has_no_text(client, ann, bob):
    res = _upload(client, ann, b"hello", filename="note.txt", mime="text/plain; charset=utf-8")

    assert res.status_code == 201, res.text
    message = res.json()["message"]
    assert message["text"] is None
    assert message["file_type"] == "text/plain"


def test_upload_unsupported_type(client, ann, bob):
    before = _stored_files()

    res = _upload(client, ann, b"MZ\x90\x00", filename="tool.exe", mime="application/x-msdownload")

    assert res.status_code == 400
    assert res.json()["error"] == "UnsupportedType"
    assert _stored_files() == before


def test_oversized_unsupported_file_reports_size(client, ann, bob):
    before = _stored_files()

    res = _upload(
        client,
        ann,
        b"0" * (MAX_UPLOAD_SIZE_IN_BYTE + 1),
        filename="tool.exe",
        mime="application/x-msdownload",
    )

    assert res.status_code == 413
    assert res.json()["error"] == "AttachmentTooLarge"
    assert _stored_files() == before


def test_upload_empty_file(client, ann, bob):
    res = _upload(client, ann, b"", filename="empty.txt", mime="text/plain")
    assert res.status_code == 400
    assert res.json()["error"] == "EmptyMessage"


def test_upload_to_unknown_user_stores_nothing(client, ann):
    before = _stored_files()

    res = _upload(client, ann, b"%PDF-1.4")

    assert res.status_code == 404
    assert _stored_files() == before


def test_upload_requires_session(client, bob):
    assert _upload(client, {}, b"%PDF-1.4").status_code == 401


def test_upload_filename_is_sanitized(client, ann, bob):
    res = _upload(client, ann, b"x", filename="../../etc/passwd.txt", mime="text/plain")

    assert res.status_code == 201, res.text
    message = res.json()["message"]
    assert ".." not in message["file_url"]
    assert "/" not in message["file_url"][len("/uploads/"):]


class _RecordingStore(ObjectStore):
    def __init__(self):
        self.stored = []

    async def put(self, content, filename, mime_type):
        self.stored.append(filename)
        return f"/uploads/{filename}"


class _BrokenLog(InMemoryMessageRepository):
    async def append(self, draft):
        raise TransientStoreError()


def test_failed_append_logs_orphaned_object(caplog):
    store = InMemoryStore()
    users = InMemoryUserRepository(store)
    asyncio.run(users.add(User.create(UserCode("22222"), "Bob", "hash")))
    objects = _RecordingStore()
    handler = UploadAttachmentHandler(
        message_repository=_BrokenLog(store),
        user_repository=users,
        object_store=objects,
        allowed_types=["application/pdf"],
        max_bytes=1024,
    )
    command = UploadAttachmentCommand(
        sender=UserCode("11111"),
        recipient=UserCode("22222"),
        content=b"%PDF",
        filename="a.pdf",
        mime_type="application/pdf",
    )

    with caplog.at_level(logging.ERROR, logger="soconnect"):
        with pytest.raises(TransientStoreError):
            asyncio.run(handler.execute(command))

    assert objects.stored == ["a.pdf"]
    assert store.messages == []
    orphan_logs = [r for r in caplog.records if "Orphaned" in r.getMessage()]
    assert orphan_logs and orphan_logs[0].levelno == logging.ERROR
    assert "/uploads/a.pdf" in orphan_logs[0].getMessage()
