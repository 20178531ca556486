from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from fithub.utils.security import require_admin, require_instructor
from fithub.classes import service as classes_service

router = APIRouter(tags=["Classes"])

class ClassCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    image: Optional[str] = None
    instructor_name: Optional[str] = Field(default=None, alias="instructorName")
    instructor_email: Optional[str] = Field(default=None, alias="instructorEmail")
    price: float = Field(ge=0)
    available_seats: int = Field(ge=0, alias="availableSeats")
    video_link: Optional[str] = Field(default=None, alias="videoLink")
    description: Optional[str] = None

class ClassUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    image: Optional[str] = None
    instructor_name: Optional[str] = Field(default=None, alias="instructorName")
    price: Optional[float] = Field(default=None, ge=0)
    available_seats: Optional[int] = Field(default=None, ge=0, alias="availableSeats")
    video_link: Optional[str] = Field(default=None, alias="videoLink")
    description: Optional[str] = None

class StatusUpdateRequest(BaseModel):
    status: str
    reason: Optional[str] = None

# module fithub.classes.views
@router.post("/new-class", status_code=201)
def new_class(req: ClassCreateRequest, user: Dict[str, Any] = Depends(require_instructor)):
    """
    Création d'une classe par un instructeur (ou admin).
    - La classe démarre 'pending' et n'apparaît dans /classes qu'après approbation admin.
    """
    return classes_service.create_class(user, req.model_dump())

@router.get("/classes")
def approved_classes():
    return classes_service.list_approved()

@router.get("/classes-manage")
def manage_classes(user: Dict[str, Any] = Depends(require_admin)):
    return classes_service.list_all()

@router.get("/classes/{email}")
def instructor_classes(email: str, user: Dict[str, Any] = Depends(require_instructor)):
    # Un instructeur ne liste que ses classes; l'admin peut consulter n'importe quel instructeur
    if user.get("role") != "admin":
        email = user.get("email")
    return classes_service.list_for_instructor(email)

@router.get("/class/{class_id}")
def single_class(class_id: str):
    return classes_service.get_public_class(class_id)

@router.patch("/class-status/{class_id}")
def class_status(class_id: str, req: StatusUpdateRequest, user: Dict[str, Any] = Depends(require_admin)):
    return classes_service.set_status(class_id, req.status, req.reason)

@router.put("/update-class/{class_id}")
def update_class(class_id: str, req: ClassUpdateRequest, user: Dict[str, Any] = Depends(require_instructor)):
    return classes_service.update_class(user, class_id, req.model_dump(exclude_none=True))
