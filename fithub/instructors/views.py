from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from fithub.utils.security import require_admin, require_user, ensure_same_user
from fithub.instructors import repository as applications_repo

router = APIRouter(tags=["Instructor applications"])

class ApplicationRequest(BaseModel):
    name: Optional[str] = None
    experience: Optional[str] = None

# module fithub.instructors.views
@router.post("/as-instructor")
def apply_as_instructor(req: ApplicationRequest, user: Dict[str, Any] = Depends(require_user)):
    """
    Candidature instructeur pour l'appelant.
    - Une candidature 'pending' existante est renvoyée telle quelle (pas de doublon).
    """
    email = user["email"]
    existing = applications_repo.get_application_by_email(email)
    if existing and existing.get("status") == "pending":
        return JSONResponse({"inserted": False, "item": existing})
    created = applications_repo.insert_application({
        "email": email,
        "name": req.name,
        "experience": req.experience,
        "status": "pending",
    })
    if not created:
        raise HTTPException(status_code=500, detail="Échec de l'enregistrement de la candidature")
    return JSONResponse({"inserted": True, "item": created}, status_code=201)

@router.get("/applied-instructors")
def applied_instructors(user: Dict[str, Any] = Depends(require_admin)):
    return applications_repo.list_applications()

@router.get("/applied-instructors/{email}")
def applied_instructor(email: str, user: Dict[str, Any] = Depends(require_user)):
    ensure_same_user(user, email)
    return applications_repo.get_application_by_email(email)
