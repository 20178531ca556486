import os

# Avant l'import de l'app: pas de Redis en tests, secret JWT déterministe
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")
os.environ.setdefault("ACCESS_KEY", "test-access-key")

import pytest
from typing import Any, Dict, Generator
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from fithub import config
from fithub.app import app as fastapi_app
from fithub.utils.security import get_current_user

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)

@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

@pytest.fixture(autouse=True)
def _test_settings(monkeypatch):
    monkeypatch.setattr(config, "ACCESS_KEY", "test-access-key")
    monkeypatch.setattr(config, "STRIPE_VERIFY_INTENTS", False)

@pytest.fixture
def caller() -> Dict[str, Any]:
    """Identité portée par le jeton (modifiable par test)."""
    return {"email": "student@example.com", "name": "Student"}

@pytest.fixture
def roles() -> Dict[str, str]:
    """Rôles en base, relus par la Role Gate à chaque requête."""
    return {
        "student@example.com": "student",
        "coach@example.com": "instructor",
        "admin@example.com": "admin",
    }

# Simuler un appelant authentifié pour les endpoints protégés
@pytest.fixture(autouse=True)
def _override_current_user(app, caller):
    app.dependency_overrides[get_current_user] = lambda: dict(caller)
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_current_user, None)

@pytest.fixture
def anonymous(app):
    """Retire l'override: la vraie chaîne Authenticator s'applique."""
    app.dependency_overrides.pop(get_current_user, None)

# Aucun accès réseau à Supabase; rôles servis depuis la fixture roles
@pytest.fixture(autouse=True)
def mock_db_dependency(monkeypatch, roles):
    monkeypatch.setattr("fithub.infra.supabase_client.get_supabase", lambda: MagicMock())

    def _get_user_by_email(email):
        role = roles.get(email)
        if role is None:
            return None
        return {"id": f"id-{email}", "email": email, "role": role}

    monkeypatch.setattr("fithub.users.repository.get_user_by_email", _get_user_by_email)
