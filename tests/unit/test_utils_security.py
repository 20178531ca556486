from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi import FastAPI, Depends
from fastapi.testclient import TestClient

from fithub.auth.service import issue_token
from fithub.utils.security import (
    ensure_same_user,
    get_current_user,
    require_admin,
    require_instructor,
    role_satisfies,
)

def _make_app():
    app = FastAPI()

    @app.get("/me")
    def me(user=Depends(get_current_user)):
        return user

    @app.get("/teach")
    def teach(user=Depends(require_instructor)):
        return {"role": user["role"]}

    @app.get("/admin")
    def admin(user=Depends(require_admin)):
        return {"role": user["role"]}

    return app

@pytest.fixture
def sec_client():
    return TestClient(_make_app())

def _bearer(email):
    return {"Authorization": f"Bearer {issue_token({'email': email})}"}

@pytest.mark.parametrize(
    "role,required,expected",
    [
        ("student", "instructor", False),
        ("student", "admin", False),
        ("instructor", "instructor", True),
        ("instructor", "admin", False),
        ("admin", "instructor", True),
        ("admin", "admin", True),
        ("ADMIN", "admin", True),
        (None, "instructor", False),
        ("scanner", "instructor", False),
    ],
)
def test_role_satisfies(role, required, expected):
    assert role_satisfies(role, required) is expected

def test_missing_header_is_401(sec_client):
    r = sec_client.get("/me")
    assert r.status_code == 401

def test_non_bearer_header_is_401(sec_client):
    r = sec_client.get("/me", headers={"Authorization": "Basic abc"})
    assert r.status_code == 401
    r = sec_client.get("/me", headers={"Authorization": "Bearer "})
    assert r.status_code == 401

def test_bad_signature_is_403(sec_client):
    forged = jwt.encode({"email": "student@example.com"}, "another-secret", algorithm="HS256")
    r = sec_client.get("/me", headers={"Authorization": f"Bearer {forged}"})
    assert r.status_code == 403

def test_expired_token_is_403(sec_client):
    past = datetime.now(timezone.utc) - timedelta(hours=1)
    expired = jwt.encode({"email": "student@example.com", "exp": past}, "test-access-key", algorithm="HS256")
    r = sec_client.get("/me", headers={"Authorization": f"Bearer {expired}"})
    assert r.status_code == 403

def test_token_without_email_is_403(sec_client):
    token = jwt.encode({"sub": "x"}, "test-access-key", algorithm="HS256")
    r = sec_client.get("/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 403

def test_valid_token_returns_claims(sec_client):
    r = sec_client.get("/me", headers=_bearer("student@example.com"))
    assert r.status_code == 200
    assert r.json()["email"] == "student@example.com"

@pytest.mark.parametrize(
    "email,teach,admin",
    [
        ("student@example.com", 403, 403),
        ("coach@example.com", 200, 403),
        ("admin@example.com", 200, 200),
        ("unknown@example.com", 403, 403),
    ],
)
def test_role_gate_hierarchy(sec_client, email, teach, admin):
    headers = _bearer(email)
    assert sec_client.get("/teach", headers=headers).status_code == teach
    assert sec_client.get("/admin", headers=headers).status_code == admin

def test_role_is_read_from_store_not_token(sec_client):
    # Une claim 'role' forgée côté client ne donne aucun droit
    token = jwt.encode({"email": "student@example.com", "role": "admin"}, "test-access-key", algorithm="HS256")
    r = sec_client.get("/admin", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 403

def test_role_change_applies_to_existing_token(sec_client, roles):
    headers = _bearer("student@example.com")
    assert sec_client.get("/teach", headers=headers).status_code == 403
    roles["student@example.com"] = "instructor"
    assert sec_client.get("/teach", headers=headers).status_code == 200

def test_ensure_same_user():
    user = {"email": "Student@Example.com"}
    ensure_same_user(user, "student@example.com")
    with pytest.raises(Exception) as exc:
        ensure_same_user(user, "other@example.com")
    assert getattr(exc.value, "status_code", None) == 403
