"""Couche d'accès aux données (Supabase) pour le domaine Utilisateurs.
La table users sert aussi de Role Store: la chaîne d'autorisation y relit le rôle à chaque requête.
Les lectures « catchent » les exceptions et renvoient des valeurs neutres ([], None, False);
la mise à jour de rôle lève UpstreamError pour que le flux de promotion la remonte.
"""
from typing import Any, Dict, Iterable, List, Optional
import logging
import fithub.infra.supabase_client as supabase_client
from fithub.app_setup.errors import UpstreamError

logger = logging.getLogger(__name__)

def get_user_by_email(email: str) -> Optional[dict]:
    """Récupère un utilisateur par email (table users).
    - Retour: dict utilisateur ou None si introuvable/erreur
    """
    if not email:
        return None
    try:
        res = (
            supabase_client.get_supabase()
            .table("users")
            .select("*")
            .eq("email", email)
            .limit(1)
            .execute()
        )
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("users.repository.get_user_by_email failed email=%s", email)
        return None

def get_user_by_id(user_id: str) -> Optional[dict]:
    if not user_id:
        return None
    try:
        res = (
            supabase_client.get_supabase()
            .table("users")
            .select("*")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("users.repository.get_user_by_id failed id=%s", user_id)
        return None

def list_users(limit: int = 100) -> List[dict]:
    try:
        res = (
            supabase_client.get_supabase()
            .table("users")
            .select("*")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("users.repository.list_users failed")
        return []

def list_users_by_role(role: str) -> List[dict]:
    try:
        res = supabase_client.get_supabase().table("users").select("*").eq("role", role).execute()
        return res.data or []
    except Exception:
        logger.exception("users.repository.list_users_by_role failed role=%s", role)
        return []

def get_users_by_emails(emails: Iterable[str]) -> List[dict]:
    """Lecture groupée pour les jointures côté Python (instructeurs des classes)."""
    wanted = sorted({e for e in emails if e})
    if not wanted:
        return []
    try:
        res = supabase_client.get_supabase().table("users").select("*").in_("email", wanted).execute()
        return res.data or []
    except Exception:
        logger.exception("users.repository.get_users_by_emails failed emails=%s", wanted)
        return []

def insert_user(data: Dict[str, Any]) -> Optional[dict]:
    try:
        res = supabase_client.get_supabase().table("users").insert(data).execute()
        rows = res.data or []
        return rows[0] if rows else {"status": "ok"}
    except Exception:
        logger.exception("users.repository.insert_user failed email=%s", data.get("email"))
        return None

def update_user(user_id: str, data: Dict[str, Any]) -> Optional[dict]:
    """Met à jour un profil; None si la ligne n'existe pas ou en cas d'erreur."""
    try:
        res = supabase_client.get_supabase().table("users").update(data).eq("id", user_id).execute()
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("users.repository.update_user failed id=%s", user_id)
        return None

def delete_user(user_id: str) -> bool:
    try:
        res = supabase_client.get_supabase().table("users").delete().eq("id", user_id).execute()
        return bool(res.data)
    except Exception:
        logger.exception("users.repository.delete_user failed id=%s", user_id)
        return False

def set_user_role(email: str, role: str) -> int:
    """
    Change le rôle d'un utilisateur et retourne le nombre de lignes modifiées.
    - Le filtre neq(role) fait remonter 0 quand le rôle est déjà celui demandé.
    - Lève UpstreamError si Supabase échoue.
    """
    try:
        res = (
            supabase_client.get_supabase()
            .table("users")
            .update({"role": role})
            .eq("email", email)
            .neq("role", role)
            .execute()
        )
        return len(res.data or [])
    except Exception as e:
        logger.exception("users.repository.set_user_role failed email=%s role=%s", email, role)
        raise UpstreamError("Échec de la mise à jour du rôle") from e
