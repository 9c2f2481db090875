import pytest


def test_send_message(client, ann, bob):
    res = client.post("/messages", headers=ann, json={"to": "22222", "text": "hi"})

    assert res.status_code == 201, f"Expected 201, got {res.status_code}: {res.text}"
    message = res.json()["message"]
    assert message["from_user"] == "11111"
    assert message["to_user"] == "22222"
    assert message["text"] == "hi"
    assert message["file_url"] is None
    assert message["id"] >= 1
    assert message["timestamp"]


def test_sender_always_comes_from_token(client, ann, bob):
    res = client.post(
        "/messages", headers=ann, json={"to": "22222", "text": "hi", "from": "22222"}
    )
    assert res.json()["message"]["from_user"] == "11111"


def test_message_ids_increase(client, ann, bob):
    ids = [
        client.post("/messages", headers=ann, json={"to": "22222", "text": f"m{i}"}).json()[
            "message"
        ]["id"]
        for i in range(5)
    ]
    assert ids == sorted(ids)
    assert len(set(ids)) == 5


@pytest.mark.parametrize("text", [None, "", "   ", "\n\t"])
def test_empty_message_is_rejected(client, ann, bob, text):
    res = client.post("/messages", headers=ann, json={"to": "22222", "text": text})

    assert res.status_code == 400
    assert res.json()["error"] == "EmptyMessage"
    assert client.get("/conversations/22222", headers=ann).json() == []


def test_message_to_unknown_user(client, ann):
    res = client.post("/messages", headers=ann, json={"to": "54321", "text": "hi"})
    assert res.status_code == 404
    assert res.json()["error"] == "NotFound"


def test_message_to_yourself(client, ann):
    res = client.post("/messages", headers=ann, json={"to": "11111", "text": "hi"})
    assert res.status_code == 400
    assert res.json()["error"] == "SameParticipant"


def test_message_to_malformed_code(client, ann):
    res = client.post("/messages", headers=ann, json={"to": "abc", "text": "hi"})
    assert res.status_code == 400
    assert res.json()["error"] == "InvalidUserCode"


def test_send_requires_session(client, bob):
    res = client.post("/messages", json={"to": "22222", "text": "hi"})
    assert res.status_code == 401
