from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from fithub.utils.security import require_admin
from fithub.admin import service as admin_service

router = APIRouter(tags=["Admin"])

class RoleUpdateRequest(BaseModel):
    role: Optional[str] = None

# Promotion: décision admin sur une candidature instructeur
@router.patch("/update-user-role/{application_id}")
def update_user_role(application_id: str, req: RoleUpdateRequest, user: dict = Depends(require_admin)):
    return JSONResponse(admin_service.promote(application_id, req.role or ""))

@router.delete("/delete-applied-instructor/{application_id}")
def delete_applied_instructor(application_id: str, user: dict = Depends(require_admin)):
    return JSONResponse(admin_service.reject_application(application_id))

# API JSON: stats dashboard (comptes simples)
@router.get("/admin-stats")
def admin_stats(user: dict = Depends(require_admin)):
    return JSONResponse(admin_service.admin_stats())
