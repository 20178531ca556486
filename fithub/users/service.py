from typing import Any, Dict, Optional
import logging

from fithub.config import DEFAULT_ROLE
from fithub.app_setup.errors import NotFoundError, UpstreamError, ValidationError
from fithub.users import repository as users_repository

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "photo_url", "phone", "about")

def register_user(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Inscription applicative (appelée à chaque connexion par le front):
    - crée le profil s'il n'existe pas, sinon renvoie l'existant sans le modifier
    - le rôle est toujours 'student' à la création: seul le flux de promotion le change
    """
    email = str(data.get("email") or "").strip()
    if not email:
        raise ValidationError("email requis")
    existing = users_repository.get_user_by_email(email)
    if existing:
        return {"inserted": False, "user": existing}
    payload = {k: v for k, v in data.items() if k in PROFILE_FIELDS and v is not None}
    payload["email"] = email
    payload["role"] = DEFAULT_ROLE
    created = users_repository.insert_user(payload)
    if not created:
        raise UpstreamError("Échec de la création de l'utilisateur")
    logger.info("users.register email=%s", email)
    return {"inserted": True, "user": created}

def get_user(user_id: str) -> dict:
    row = users_repository.get_user_by_id(user_id)
    if not row:
        raise NotFoundError("Utilisateur introuvable")
    return row

def get_user_by_email(email: str) -> Optional[dict]:
    return users_repository.get_user_by_email(email)

def update_profile(user_id: str, data: Dict[str, Any]) -> dict:
    changes = {k: v for k, v in data.items() if k in PROFILE_FIELDS and v is not None}
    if not changes:
        raise ValidationError("aucune donnée à mettre à jour")
    updated = users_repository.update_user(user_id, changes)
    if not updated:
        raise NotFoundError("Utilisateur introuvable")
    return updated

def delete_user(user_id: str) -> dict:
    if not users_repository.delete_user(user_id):
        raise NotFoundError("Utilisateur introuvable")
    return {"deletedCount": 1}
