import os
import tempfile
from pathlib import Path

# must be set before explorafit is imported: settings and engine are built at import
_TMP = Path(tempfile.mkdtemp(prefix="explorafit-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{(_TMP / 'test.db').as_posix()}"
os.environ["JWT_KEY"] = "test-signing-key-not-for-production"
os.environ["ENV"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import update

from explorafit.main import app
from explorafit.shared.db import Base, SessionLocal, engine, init_db
from explorafit.auth.models import User


@pytest.fixture(autouse=True)
def _fresh_db():
    Base.metadata.drop_all(bind=engine)
    init_db()
    yield


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


def signup(client, email="rider@example.com", password="s3cret-pass"):
    r = client.post("/auth/signup", json={"email": email, "password": password})
    assert r.status_code == 201, r.text
    return r.json()


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def set_user(user_id: str, **values):
    # test-only backdoor for balances/premium flags
    with SessionLocal() as s:
        s.execute(update(User).where(User.id == user_id).values(**values))
        s.commit()


def get_user(user_id: str) -> dict:
    with SessionLocal() as s:
        return s.get(User, user_id).public()


ROUTE = {
    "name": "River loop",
    "difficulty": "Moderate",
    "description": "Flat along the river",
    "city": "Lyon",
    "polyline": [{"lat": 0.0, "lng": 0.0}, {"lat": 0.0, "lng": 1.0}],
}
