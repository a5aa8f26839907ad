from explorafit.shared.auth import verify_token
from conftest import auth, signup

def test_signup_returns_token_and_fresh_user(client):
    body = signup(client, "New@Example.com")
    user = body["user"]
    assert user["email"] == "new@example.com"
    assert user["credits"] == 3 and user["is_premium"] is False
    assert "password_hash" not in user
    assert verify_token(body["token"]) == user["id"]

def test_signup_then_login_resolve_to_same_user(client):
    first = signup(client, "a@example.com", "pw-one")
    r = client.post("/auth/login", json={"email": "a@example.com", "password": "pw-one"})
    assert r.status_code == 200
    assert verify_token(r.json()["token"]) == verify_token(first["token"]) == first["user"]["id"]

def test_duplicate_email_is_taken(client):
    signup(client, "dup@example.com")
    r = client.post("/auth/signup", json={"email": "DUP@example.com", "password": "x"})
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "email_taken"

def test_login_wrong_password(client):
    signup(client, "b@example.com", "right")
    r = client.post("/auth/login", json={"email": "b@example.com", "password": "wrong"})
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "invalid_credentials"

def test_login_unknown_email(client):
    r = client.post("/auth/login", json={"email": "ghost@example.com", "password": "x"})
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "user_not_found"

def test_signup_rejects_bad_email(client):
    r = client.post("/auth/signup", json={"email": "not-an-email", "password": "x"})
    assert r.status_code == 422
    assert r.json()["error"]["code"] == "validation_error"

def test_oauth2_token_form(client):
    signup(client, "form@example.com", "pw")
    r = client.post("/auth/token", data={"username": "form@example.com", "password": "pw"})
    assert r.status_code == 200 and r.json()["token_type"] == "bearer"
    assert client.get("/auth/me", headers=auth(r.json()["access_token"])).status_code == 200

def test_me_requires_identity(client):
    r = client.get("/auth/me")
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "unauthorized"
    assert r.headers["www-authenticate"] == "Bearer"

def test_me_with_invalid_token_is_unauthorized(client):
    r = client.get("/auth/me", headers=auth("bogus"))
    assert r.status_code == 401

def test_me_accepts_bare_token_header(client):
    body = signup(client)
    r = client.get("/auth/me", headers={"Authorization": body["token"]})
    assert r.status_code == 200
    assert r.json()["user"] == body["user"]
