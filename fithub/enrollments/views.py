from typing import Any, Dict

from fastapi import APIRouter, Depends

from fithub.utils.security import require_user, ensure_same_user
from fithub.enrollments import service as enrollments_service

router = APIRouter(tags=["Enrollments"])

@router.get("/enrolled-classes/{email}")
def enrolled_classes(email: str, user: Dict[str, Any] = Depends(require_user)):
    ensure_same_user(user, email)
    return enrollments_service.enrolled_classes(email)

@router.get("/popular-classes")
def popular_classes():
    return enrollments_service.popular_classes()

@router.get("/popular-instructors")
def popular_instructors():
    return enrollments_service.popular_instructors()

@router.get("/instructors")
def instructors():
    return enrollments_service.list_instructors()
