from conftest import signup

def test_health(client):
    r = client.get("/healthz")
    assert r.status_code == 200 and r.json()["ok"] is True

def test_ping_is_public(client):
    r = client.get("/ping")
    assert r.status_code == 200
    assert r.json()["message"] == "Pong" and r.json()["user_id"] is None

def test_ping_with_bad_token_is_anonymous(client):
    r = client.get("/ping", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 200 and r.json()["user_id"] is None

def test_ping_resolves_identity(client):
    body = signup(client)
    r = client.get("/ping", headers={"Authorization": f"Bearer {body['token']}"})
    assert r.json()["user_id"] == body["user"]["id"]
