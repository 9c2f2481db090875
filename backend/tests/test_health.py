def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_correlation_id_is_echoed(client):
    res = client.get("/", headers={"X-Correlation-ID": "abc-123"})
    assert res.status_code == 200
    assert res.headers["X-Correlation-ID"] == "abc-123"


def test_unknown_route_uses_error_body(client):
    res = client.get("/nope")
    assert res.status_code == 404
    assert "error" in res.json()
