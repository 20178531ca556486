"""
Cas d'usage 'classes': création, édition et workflow de statut pending -> approved | denied.
"""
from typing import Any, Dict, List, Optional
import logging

from fithub.app_setup.errors import ForbiddenError, NotFoundError, UpstreamError, ValidationError
from fithub.classes import repository

logger = logging.getLogger(__name__)

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_DENIED = "denied"
ADMIN_STATUSES = (STATUS_APPROVED, STATUS_DENIED)

# Champs modifiables par l'instructeur propriétaire (jamais status/reason ni les compteurs)
EDITABLE_FIELDS = ("name", "image", "available_seats", "price", "video_link", "description", "instructor_name")

def create_class(user: Dict[str, Any], data: Dict[str, Any]) -> dict:
    """
    Crée une classe au statut 'pending'.
    - instructor_email: celui de l'appelant, sauf admin qui peut créer pour un autre instructeur.
    - total_enrolled démarre à 0; status/reason du client sont ignorés.
    """
    payload = {k: v for k, v in data.items() if k in EDITABLE_FIELDS + ("instructor_email",)}
    if user.get("role") != "admin" or not payload.get("instructor_email"):
        payload["instructor_email"] = user.get("email")
    payload["status"] = STATUS_PENDING
    payload["reason"] = None
    payload["total_enrolled"] = 0
    created = repository.insert_class(payload)
    if not created:
        raise UpstreamError("Échec de la création de la classe")
    logger.info("classes.create id=%s instructor=%s", created.get("id"), payload["instructor_email"])
    return created

def set_status(class_id: str, status: str, reason: Optional[str] = None) -> dict:
    """
    Transition admin: pending|approved|denied -> approved|denied.
    - Un refus exige une raison.
    - Pas de retour vers 'pending'.
    """
    status = (status or "").strip().lower()
    if status not in ADMIN_STATUSES:
        raise ValidationError("status doit valoir 'approved' ou 'denied'")
    reason = (reason or "").strip() or None
    if status == STATUS_DENIED and not reason:
        raise ValidationError("Une raison est requise pour refuser une classe")
    if not repository.get_class(class_id):
        raise NotFoundError("Classe introuvable")
    updated = repository.update_class(class_id, {"status": status, "reason": reason})
    if not updated:
        raise UpstreamError("Échec de la mise à jour du statut")
    logger.info("classes.set_status id=%s status=%s", class_id, status)
    return updated

def update_class(user: Dict[str, Any], class_id: str, data: Dict[str, Any]) -> dict:
    current = repository.get_class(class_id)
    if not current:
        raise NotFoundError("Classe introuvable")
    if user.get("role") != "admin" and current.get("instructor_email") != user.get("email"):
        raise ForbiddenError("Seul l'instructeur propriétaire peut modifier cette classe")
    changes = {k: v for k, v in data.items() if k in EDITABLE_FIELDS and v is not None}
    if not changes:
        raise ValidationError("aucune donnée à mettre à jour")
    updated = repository.update_class(class_id, changes)
    if not updated:
        raise UpstreamError("Échec de la mise à jour de la classe")
    return updated

def get_public_class(class_id: str) -> dict:
    """Lecture publique: une classe non approuvée est traitée comme introuvable."""
    row = repository.get_class(class_id)
    if not row or row.get("status") != STATUS_APPROVED:
        raise NotFoundError("Classe introuvable")
    return row

def list_approved() -> List[dict]:
    return repository.list_classes(status=STATUS_APPROVED)

def list_all() -> List[dict]:
    return repository.list_classes()

def list_for_instructor(email: str) -> List[dict]:
    return repository.list_classes_by_instructor(email)
