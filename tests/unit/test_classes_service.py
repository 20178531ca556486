import pytest

from fithub.app_setup.errors import ForbiddenError, NotFoundError, ValidationError
from fithub.classes import repository as classes_repo
from fithub.classes import service as classes_service

INSTRUCTOR = {"email": "coach@example.com", "role": "instructor"}
ADMIN = {"email": "admin@example.com", "role": "admin"}

@pytest.fixture
def catalog(monkeypatch):
    rows = {
        "k1": {"id": "k1", "name": "Yoga", "instructor_email": "coach@example.com", "status": "pending", "reason": None},
    }

    def _insert(data):
        row = {"id": f"k{len(rows) + 1}", **data}
        rows[row["id"]] = row
        return row

    def _update(class_id, data):
        if class_id not in rows:
            return None
        rows[class_id].update(data)
        return dict(rows[class_id])

    monkeypatch.setattr(classes_repo, "get_class", lambda class_id: rows.get(class_id))
    monkeypatch.setattr(classes_repo, "insert_class", _insert)
    monkeypatch.setattr(classes_repo, "update_class", _update)
    return rows

def test_new_class_starts_pending(catalog):
    created = classes_service.create_class(
        INSTRUCTOR,
        {"name": "Boxe", "price": 20, "available_seats": 10, "status": "approved", "total_enrolled": 99},
    )
    assert created["status"] == "pending"
    assert created["total_enrolled"] == 0
    assert created["reason"] is None
    assert created["instructor_email"] == "coach@example.com"

def test_instructor_cannot_create_for_someone_else(catalog):
    created = classes_service.create_class(INSTRUCTOR, {"name": "Boxe", "instructor_email": "x@example.com"})
    assert created["instructor_email"] == "coach@example.com"

def test_admin_can_create_for_an_instructor(catalog):
    created = classes_service.create_class(ADMIN, {"name": "Boxe", "instructor_email": "coach@example.com"})
    assert created["instructor_email"] == "coach@example.com"

def test_approve(catalog):
    updated = classes_service.set_status("k1", "approved")
    assert updated["status"] == "approved"

def test_deny_requires_reason(catalog):
    with pytest.raises(ValidationError):
        classes_service.set_status("k1", "denied")
    updated = classes_service.set_status("k1", "denied", "Vidéo manquante")
    assert updated["status"] == "denied"
    assert updated["reason"] == "Vidéo manquante"

@pytest.mark.parametrize("status", ["pending", "archived", ""])
def test_invalid_status(catalog, status):
    with pytest.raises(ValidationError):
        classes_service.set_status("k1", status)

def test_status_of_unknown_class(catalog):
    with pytest.raises(NotFoundError):
        classes_service.set_status("nope", "approved")

def test_owner_update_keeps_status(catalog):
    updated = classes_service.update_class(INSTRUCTOR, "k1", {"price": 30, "status": "approved"})
    assert updated["price"] == 30
    assert updated["status"] == "pending"

def test_update_by_other_instructor_is_forbidden(catalog):
    with pytest.raises(ForbiddenError):
        classes_service.update_class({"email": "x@example.com", "role": "instructor"}, "k1", {"price": 1})

def test_public_read_hides_unapproved(catalog):
    with pytest.raises(NotFoundError):
        classes_service.get_public_class("k1")
    catalog["k1"]["status"] = "approved"
    assert classes_service.get_public_class("k1")["id"] == "k1"
