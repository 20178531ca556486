from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from fithub.utils.security import require_admin, require_user
from fithub.users import repository as users_repository
from fithub.users import service as users_service

router = APIRouter(tags=["Users"])

class NewUserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    name: Optional[str] = None
    photo_url: Optional[str] = Field(default=None, alias="photoUrl")
    phone: Optional[str] = None
    about: Optional[str] = None

class UpdateUserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    photo_url: Optional[str] = Field(default=None, alias="photoUrl")
    phone: Optional[str] = None
    about: Optional[str] = None

@router.post("/new-user")
def new_user(req: NewUserRequest):
    """
    Crée le profil applicatif s'il n'existe pas (201), sinon renvoie l'existant (200).
    Le rôle initial est toujours 'student'.
    """
    result = users_service.register_user(req.model_dump())
    return JSONResponse(result, status_code=201 if result["inserted"] else 200)

@router.get("/users")
def list_users(limit: int = 100, user: Dict[str, Any] = Depends(require_admin)):
    return users_repository.list_users(limit=limit)

@router.get("/users/{user_id}")
def get_user(user_id: str, user: Dict[str, Any] = Depends(require_admin)):
    return users_service.get_user(user_id)

@router.get("/user/{email}")
def get_user_by_email(email: str, user: Dict[str, Any] = Depends(require_user)):
    return users_service.get_user_by_email(email)

@router.delete("/delete-user/{user_id}")
def delete_user(user_id: str, user: Dict[str, Any] = Depends(require_admin)):
    return users_service.delete_user(user_id)

@router.put("/update-user/{user_id}")
def update_user(user_id: str, req: UpdateUserRequest, user: Dict[str, Any] = Depends(require_admin)):
    # Profil uniquement: le rôle passe par /update-user-role (flux de promotion)
    return users_service.update_profile(user_id, req.model_dump(exclude_none=True))
