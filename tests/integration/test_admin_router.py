import pytest

from fithub.admin import repository as admin_repository
from fithub.instructors import repository as applications_repo
from fithub.users import repository as users_repository

@pytest.fixture
def as_admin(caller):
    caller["email"] = "admin@example.com"

@pytest.fixture
def application(monkeypatch, roles):
    row = {"id": "app1", "email": "student@example.com", "status": "pending"}

    def _set_user_role(email, role):
        if roles.get(email) in (None, role):
            return 0
        roles[email] = role
        return 1

    monkeypatch.setattr(applications_repo, "get_application", lambda application_id: row if application_id == "app1" else None)
    monkeypatch.setattr(applications_repo, "set_application_status", lambda application_id, status: row.update(status=status))
    monkeypatch.setattr(users_repository, "set_user_role", _set_user_role)
    return row

def test_promotion_by_admin(client, as_admin, application, roles):
    r = client.patch("/update-user-role/app1", json={"role": "instructor"})
    assert r.status_code == 200
    assert r.json() == {"message": "User role updated successfully"}
    assert roles["student@example.com"] == "instructor"
    assert application["status"] == "instructor"

def test_promoted_user_passes_instructor_gate(client, as_admin, application, caller, monkeypatch):
    from fithub.classes import repository as classes_repo

    client.patch("/update-user-role/app1", json={"role": "instructor"})
    monkeypatch.setattr(classes_repo, "list_classes_by_instructor", lambda email: [{"id": "k1", "instructor_email": email}])
    caller["email"] = "student@example.com"
    r = client.get("/classes/student@example.com")
    assert r.status_code == 200

def test_promotion_unknown_application(client, as_admin, application):
    r = client.patch("/update-user-role/nope", json={"role": "instructor"})
    assert r.status_code == 404
    assert r.json()["error"] is True

def test_promotion_requires_role(client, as_admin, application):
    r = client.patch("/update-user-role/app1", json={})
    assert r.status_code == 400
    assert r.json() == {"error": True, "message": "Role is required"}

def test_promotion_by_student_is_forbidden(client, application, roles):
    r = client.patch("/update-user-role/app1", json={"role": "admin"})
    assert r.status_code == 403
    assert roles["student@example.com"] == "student"

def test_promotion_by_instructor_is_forbidden(client, caller, application):
    caller["email"] = "coach@example.com"
    r = client.patch("/update-user-role/app1", json={"role": "instructor"})
    assert r.status_code == 403

def test_admin_stats(client, as_admin, monkeypatch):
    monkeypatch.setattr(admin_repository, "count_table_rows", lambda table_name, **filters: 2)
    r = client.get("/admin-stats")
    assert r.status_code == 200
    assert set(r.json()) == {"approvedClasses", "pendingClasses", "instructors", "totalClasses", "totalEnrolled"}

def test_delete_applied_instructor(client, as_admin, monkeypatch):
    monkeypatch.setattr(applications_repo, "delete_application", lambda application_id: application_id == "app1")
    assert client.delete("/delete-applied-instructor/app1").json() == {"deletedCount": 1}
    assert client.delete("/delete-applied-instructor/nope").status_code == 404

def test_apply_as_instructor(client, monkeypatch):
    inserted = []
    monkeypatch.setattr(applications_repo, "get_application_by_email", lambda email: None)
    monkeypatch.setattr(applications_repo, "insert_application", lambda data: inserted.append(data) or {"id": "app9", **data})

    r = client.post("/as-instructor", json={"name": "Student", "experience": "5 ans"})
    assert r.status_code == 201
    assert inserted[0]["email"] == "student@example.com"
    assert inserted[0]["status"] == "pending"

def test_apply_twice_returns_pending_application(client, monkeypatch):
    pending = {"id": "app1", "email": "student@example.com", "status": "pending"}
    monkeypatch.setattr(applications_repo, "get_application_by_email", lambda email: pending)
    monkeypatch.setattr(applications_repo, "insert_application", lambda data: pytest.fail("duplicate application"))

    r = client.post("/as-instructor", json={})
    assert r.status_code == 200
    assert r.json() == {"inserted": False, "item": pending}

def test_applications_list_is_admin_only(client, monkeypatch):
    monkeypatch.setattr(applications_repo, "list_applications", lambda: [])
    assert client.get("/applied-instructors").status_code == 403
