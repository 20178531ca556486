from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from fithub.utils.security import require_user, ensure_same_user
from fithub.cart import repository as cart_repo
from fithub.classes import repository as classes_repo

router = APIRouter(tags=["Cart"])

class CartItemRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    class_id: str = Field(min_length=1, alias="classId")
    user_email: Optional[str] = Field(default=None, alias="userMail")

# module fithub.cart.views
@router.post("/add-to-cart")
def add_to_cart(req: CartItemRequest, user: Dict[str, Any] = Depends(require_user)):
    """
    Ajoute une classe approuvée au panier de l'appelant.
    - userMail, s'il est fourni, doit être celui de l'appelant.
    - Idempotent: une classe déjà présente n'est pas dupliquée.
    """
    if req.user_email:
        ensure_same_user(user, req.user_email)
    email = user["email"]
    klass = classes_repo.get_class(req.class_id)
    if not klass or klass.get("status") != "approved":
        raise HTTPException(status_code=404, detail="Classe introuvable")
    existing = cart_repo.find_item(req.class_id, email)
    if existing:
        return JSONResponse({"inserted": False, "item": existing})
    created = cart_repo.insert_item(req.class_id, email)
    if not created:
        raise HTTPException(status_code=500, detail="Échec de l'ajout au panier")
    return JSONResponse({"inserted": True, "item": created}, status_code=201)

@router.get("/cart-item/{class_id}")
def cart_item(class_id: str, email: str, user: Dict[str, Any] = Depends(require_user)):
    ensure_same_user(user, email)
    return cart_repo.find_item(class_id, email)

@router.get("/cart/{email}")
def cart_classes(email: str, user: Dict[str, Any] = Depends(require_user)):
    """Retourne les documents de classe présents dans le panier de l'appelant."""
    ensure_same_user(user, email)
    class_ids = cart_repo.list_class_ids(email)
    return classes_repo.fetch_classes_by_ids(class_ids)

@router.delete("/delete-cart-item/{class_id}")
def delete_cart_item(class_id: str, user: Dict[str, Any] = Depends(require_user)):
    deleted = cart_repo.delete_item(class_id, user["email"])
    return {"deletedCount": deleted}
