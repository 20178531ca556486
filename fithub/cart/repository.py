"""
Accès aux données pour la feature 'cart'.
Toutes les requêtes filtrent sur user_email: une ligne n'est visible que de son propriétaire.
"""
from typing import Any, Dict, Iterable, List, Optional
import logging
import fithub.infra.supabase_client as supabase_client
from fithub.app_setup.errors import UpstreamError

logger = logging.getLogger(__name__)

# module fithub.cart.repository
def find_item(class_id: str, user_email: str) -> Optional[dict]:
    try:
        res = (
            supabase_client.get_supabase()
            .table("cart")
            .select("id, class_id")
            .eq("class_id", class_id)
            .eq("user_email", user_email)
            .limit(1)
            .execute()
        )
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("cart.repository.find_item failed class_id=%s user=%s", class_id, user_email)
        return None

def list_class_ids(user_email: str) -> List[str]:
    try:
        res = supabase_client.get_supabase().table("cart").select("class_id").eq("user_email", user_email).execute()
        return [str(r["class_id"]) for r in (res.data or []) if r.get("class_id")]
    except Exception:
        logger.exception("cart.repository.list_class_ids failed user=%s", user_email)
        return []

def insert_item(class_id: str, user_email: str) -> Optional[dict]:
    try:
        res = (
            supabase_client.get_supabase()
            .table("cart")
            .insert({"class_id": class_id, "user_email": user_email})
            .execute()
        )
        rows = res.data or []
        return rows[0] if rows else {"status": "ok"}
    except Exception:
        logger.exception("cart.repository.insert_item failed class_id=%s user=%s", class_id, user_email)
        return None

def delete_item(class_id: str, user_email: str) -> int:
    try:
        res = (
            supabase_client.get_supabase()
            .table("cart")
            .delete()
            .eq("class_id", class_id)
            .eq("user_email", user_email)
            .execute()
        )
        return len(res.data or [])
    except Exception:
        logger.exception("cart.repository.delete_item failed class_id=%s user=%s", class_id, user_email)
        return 0

def delete_items(user_email: str, class_ids: Iterable[str]) -> List[dict]:
    """
    Supprime les lignes du panier de user_email pour class_ids et retourne les lignes supprimées
    (utilisées pour la compensation). Lève UpstreamError en cas d'échec.
    """
    wanted = [str(i) for i in class_ids if i]
    if not wanted:
        return []
    try:
        res = (
            supabase_client.get_supabase()
            .table("cart")
            .delete()
            .eq("user_email", user_email)
            .in_("class_id", wanted)
            .execute()
        )
        return res.data or []
    except Exception as e:
        logger.exception("cart.repository.delete_items failed user=%s ids=%s", user_email, wanted)
        raise UpstreamError("Suppression du panier impossible") from e

def restore_items(rows: List[Dict[str, Any]]) -> None:
    """Ré-insère des lignes supprimées (compensation du règlement)."""
    if not rows:
        return
    try:
        supabase_client.get_supabase().table("cart").insert(rows).execute()
    except Exception as e:
        logger.exception("cart.repository.restore_items failed count=%s", len(rows))
        raise UpstreamError("Restauration du panier impossible") from e
