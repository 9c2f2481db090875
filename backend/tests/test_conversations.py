"""Conversation index and history, end to end over HTTP."""

from datetime import datetime

from conftest import login, register


def _ts(message):
    return datetime.fromisoformat(message["timestamp"].replace("Z", "+00:00"))


def _send(client, headers, to, text):
    res = client.post("/messages", headers=headers, json={"to": to, "text": text})
    assert res.status_code == 201, res.text
    return res.json()["message"]


def test_ann_and_bob_scenario(client):
    register(client, "11111", name="Ann", passcode="p")
    register(client, "22222", name="Bob", passcode="q")
    ann = login(client, "11111", passcode="p")

    sent = _send(client, ann, "22222", "hi")

    conversations = client.get("/conversations", headers=ann).json()
    assert conversations == [
        {"counterparty_code": "22222", "last_activity_at": sent["timestamp"]}
    ]
    history = client.get("/conversations/22222", headers=ann).json()
    assert len(history) == 1
    assert history[0]["text"] == "hi"


def test_conversation_is_symmetric(client, ann, bob):
    _send(client, ann, "22222", "hello bob")
    _send(client, bob, "11111", "hello ann")
    _send(client, ann, "22222", "how are you")

    from_ann = client.get("/conversations/22222", headers=ann).json()
    from_bob = client.get("/conversations/11111", headers=bob).json()

    assert from_ann == from_bob
    assert [m["text"] for m in from_ann] == ["hello bob", "hello ann", "how are you"]


def test_conversation_is_ordered(client, ann, bob):
    for i in range(10):
        _send(client, ann if i % 2 else bob, "22222" if i % 2 else "11111", f"m{i}")

    history = client.get("/conversations/22222", headers=ann).json()

    keys = [(_ts(m), m["id"]) for m in history]
    assert keys == sorted(keys)
    assert [m["text"] for m in history] == [f"m{i}" for i in range(10)]


def test_conversations_most_recent_first(client, ann, bob):
    register(client, "33333", name="Cat", passcode="c")
    cat = login(client, "33333", passcode="c")

    _send(client, ann, "22222", "to bob")
    _send(client, cat, "11111", "to ann")

    index = client.get("/conversations", headers=ann).json()
    assert [c["counterparty_code"] for c in index] == ["33333", "22222"]

    _send(client, bob, "11111", "bob again")

    index = client.get("/conversations", headers=ann).json()
    assert [c["counterparty_code"] for c in index] == ["22222", "33333"]


def test_no_messages_no_conversations(client, ann):
    assert client.get("/conversations", headers=ann).json() == []
    assert client.get("/conversations/22222", headers=ann).json() == []


def test_other_conversations_stay_private(client, ann, bob):
    register(client, "33333", name="Cat", passcode="c")
    cat = login(client, "33333", passcode="c")
    _send(client, ann, "22222", "secret")

    assert client.get("/conversations", headers=cat).json() == []
    assert client.get("/conversations/11111", headers=cat).json() == []


def test_fetch_page_with_limit_and_before_id(client, ann, bob):
    ids = [_send(client, ann, "22222", f"m{i}")["id"] for i in range(6)]

    newest = client.get("/conversations/22222?limit=2", headers=ann).json()
    assert [m["id"] for m in newest] == ids[-2:]

    older = client.get(
        f"/conversations/22222?limit=3&before_id={ids[-2]}", headers=ann
    ).json()
    assert [m["id"] for m in older] == ids[1:4]


def test_fetch_rejects_bad_limit(client, ann, bob):
    res = client.get("/conversations/22222?limit=0", headers=ann)
    assert res.status_code == 400


def test_fetch_with_yourself(client, ann):
    res = client.get("/conversations/11111", headers=ann)
    assert res.status_code == 400
    assert res.json()["error"] == "SameParticipant"
