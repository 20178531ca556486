import pytest

from fithub.admin import repository as admin_repository
from fithub.admin import service as admin_service
from fithub.app_setup.errors import NotFoundError, ValidationError
from fithub.instructors import repository as applications_repo
from fithub.users import repository as users_repository

@pytest.fixture
def promotion(monkeypatch, roles):
    """Candidature app1 pour student@example.com; set_user_role agit sur la fixture roles."""
    applications = {"app1": {"id": "app1", "email": "student@example.com", "status": "pending"}}

    def _set_user_role(email, role):
        if email not in roles or roles[email] == role:
            return 0
        roles[email] = role
        return 1

    def _set_status(application_id, status):
        applications[application_id]["status"] = status

    monkeypatch.setattr(applications_repo, "get_application", lambda application_id: applications.get(application_id))
    monkeypatch.setattr(applications_repo, "set_application_status", _set_status)
    monkeypatch.setattr(users_repository, "set_user_role", _set_user_role)
    return applications

def test_promote_to_instructor(promotion, roles):
    result = admin_service.promote("app1", "instructor")

    assert result == {"message": "User role updated successfully"}
    assert roles["student@example.com"] == "instructor"
    assert promotion["app1"]["status"] == "instructor"

def test_promote_unknown_application(promotion, roles):
    with pytest.raises(NotFoundError):
        admin_service.promote("missing", "instructor")
    assert roles["student@example.com"] == "student"

def test_promote_application_without_user(promotion, roles):
    promotion["app1"]["email"] = "ghost@example.com"
    with pytest.raises(NotFoundError):
        admin_service.promote("app1", "instructor")

def test_promote_same_role_reports_unchanged(promotion):
    with pytest.raises(NotFoundError) as exc:
        admin_service.promote("app1", "student")
    assert "unchanged" in exc.value.message
    assert promotion["app1"]["status"] == "pending"

@pytest.mark.parametrize("role", ["", "   ", "superuser"])
def test_promote_requires_known_role(promotion, role):
    with pytest.raises(ValidationError):
        admin_service.promote("app1", role)

def test_reject_application(monkeypatch):
    monkeypatch.setattr(applications_repo, "delete_application", lambda application_id: application_id == "app1")
    assert admin_service.reject_application("app1") == {"deletedCount": 1}
    with pytest.raises(NotFoundError):
        admin_service.reject_application("nope")

def test_admin_stats(monkeypatch):
    counts = {
        ("classes", (("status", "approved"),)): 4,
        ("classes", (("status", "pending"),)): 2,
        ("users", (("role", "instructor"),)): 3,
        ("classes", ()): 7,
        ("enrolled", ()): 11,
    }

    def _count(table_name, **filters):
        return counts[(table_name, tuple(sorted(filters.items())))]

    monkeypatch.setattr(admin_repository, "count_table_rows", _count)
    assert admin_service.admin_stats() == {
        "approvedClasses": 4,
        "pendingClasses": 2,
        "instructors": 3,
        "totalClasses": 7,
        "totalEnrolled": 11,
    }
