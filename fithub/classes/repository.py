"""
Accès aux données pour la feature 'classes' (catalogue).
"""
from typing import Any, Dict, Iterable, List, Optional
import logging
import fithub.infra.supabase_client as supabase_client
from fithub.app_setup.errors import UpstreamError

logger = logging.getLogger(__name__)

# module fithub.classes.repository
def list_classes(status: Optional[str] = None) -> List[dict]:
    try:
        query = supabase_client.get_supabase().table("classes").select("*")
        if status:
            query = query.eq("status", status)
        res = query.order("created_at", desc=True).execute()
        return res.data or []
    except Exception:
        logger.exception("classes.repository.list_classes failed status=%s", status)
        return []

def list_classes_by_instructor(email: str) -> List[dict]:
    try:
        res = (
            supabase_client.get_supabase()
            .table("classes")
            .select("*")
            .eq("instructor_email", email)
            .order("created_at", desc=True)
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("classes.repository.list_classes_by_instructor failed email=%s", email)
        return []

def get_class(class_id: str) -> Optional[dict]:
    if not class_id:
        return None
    try:
        res = (
            supabase_client.get_supabase()
            .table("classes")
            .select("*")
            .eq("id", class_id)
            .limit(1)
            .execute()
        )
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("classes.repository.get_class failed id=%s", class_id)
        return None

def fetch_classes_by_ids(ids: Iterable[str]) -> List[dict]:
    """
    Récupère les classes par leurs IDs.
    - Retourne [] si ids vide.
    - Lève UpstreamError si Supabase échoue (utilisé par le règlement, qui doit distinguer
      "aucune classe" d'une panne).
    """
    wanted = [str(i) for i in ids if i]
    if not wanted:
        return []
    try:
        res = supabase_client.get_supabase().table("classes").select("*").in_("id", wanted).execute()
        return res.data or []
    except Exception as e:
        logger.exception("classes.repository.fetch_classes_by_ids failed ids=%s", wanted)
        raise UpstreamError("Lecture des classes impossible") from e

def popular_classes(limit: int = 6) -> List[dict]:
    try:
        res = (
            supabase_client.get_supabase()
            .table("classes")
            .select("*")
            .eq("status", "approved")
            .order("total_enrolled", desc=True)
            .limit(limit)
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("classes.repository.popular_classes failed")
        return []

def insert_class(data: Dict[str, Any]) -> Optional[dict]:
    try:
        res = supabase_client.get_supabase().table("classes").insert(data).execute()
        rows = res.data or []
        return rows[0] if rows else {"status": "ok"}
    except Exception:
        logger.exception("classes.repository.insert_class failed name=%s", data.get("name"))
        return None

def update_class(class_id: str, data: Dict[str, Any]) -> Optional[dict]:
    """Retourne la ligne mise à jour, None si la classe n'existe pas ou en cas d'erreur."""
    try:
        res = supabase_client.get_supabase().table("classes").update(data).eq("id", class_id).execute()
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("classes.repository.update_class failed id=%s", class_id)
        return None

def adjust_counters(class_id: str, enrolled_delta: int, seats_delta: int) -> Optional[dict]:
    """
    Incrément atomique des compteurs d'une seule classe (fonction Postgres adjust_class_counters).
    - Retourne la ligne mise à jour.
    - Retourne None si la garde available_seats + seats_delta >= 0 refuse la mise à jour
      (ou si la classe n'existe plus).
    - Lève UpstreamError si l'appel RPC échoue.
    """
    try:
        res = (
            supabase_client.get_supabase()
            .rpc(
                "adjust_class_counters",
                {"p_class_id": class_id, "p_enrolled_delta": enrolled_delta, "p_seats_delta": seats_delta},
            )
            .execute()
        )
    except Exception as e:
        logger.exception("classes.repository.adjust_counters failed id=%s", class_id)
        raise UpstreamError("Mise à jour des compteurs impossible") from e
    rows = res.data or []
    if isinstance(rows, dict):
        return rows
    return rows[0] if rows else None
