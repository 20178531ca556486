from typing import Any, Dict, List
import logging
import fithub.infra.supabase_client as supabase_client
from fithub.app_setup.errors import UpstreamError

logger = logging.getLogger(__name__)

# module fithub.enrollments.repository
def insert_enrollment(data: Dict[str, Any]) -> dict:
    try:
        res = supabase_client.get_supabase().table("enrolled").insert(data).execute()
    except Exception as e:
        logger.exception("enrollments.repository.insert_enrollment failed tx=%s", data.get("transaction_id"))
        raise UpstreamError("Enregistrement de l'inscription impossible") from e
    rows = res.data or []
    return rows[0] if rows else dict(data)

def delete_enrollment(enrollment_id: str) -> None:
    try:
        supabase_client.get_supabase().table("enrolled").delete().eq("id", enrollment_id).execute()
    except Exception as e:
        logger.exception("enrollments.repository.delete_enrollment failed id=%s", enrollment_id)
        raise UpstreamError("Suppression de l'inscription impossible") from e

def list_enrollments(user_email: str) -> List[dict]:
    try:
        res = (
            supabase_client.get_supabase()
            .table("enrolled")
            .select("*")
            .eq("user_email", user_email)
            .order("created_at", desc=True)
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("enrollments.repository.list_enrollments failed user=%s", user_email)
        return []

def list_class_stats() -> List[dict]:
    """Lignes (instructor_email, total_enrolled) des classes approuvées, pour l'agrégat par instructeur."""
    try:
        res = (
            supabase_client.get_supabase()
            .table("classes")
            .select("instructor_email, total_enrolled")
            .eq("status", "approved")
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("enrollments.repository.list_class_stats failed")
        return []
