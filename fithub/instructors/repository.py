"""
Accès aux données des candidatures instructeur (table applied).
"""
from typing import Any, Dict, List, Optional
import logging
import fithub.infra.supabase_client as supabase_client
from fithub.app_setup.errors import UpstreamError

logger = logging.getLogger(__name__)

# module fithub.instructors.repository
def get_application(application_id: str) -> Optional[dict]:
    if not application_id:
        return None
    try:
        res = (
            supabase_client.get_supabase()
            .table("applied")
            .select("*")
            .eq("id", application_id)
            .limit(1)
            .execute()
        )
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("instructors.repository.get_application failed id=%s", application_id)
        return None

def get_application_by_email(email: str) -> Optional[dict]:
    try:
        res = (
            supabase_client.get_supabase()
            .table("applied")
            .select("*")
            .eq("email", email)
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("instructors.repository.get_application_by_email failed email=%s", email)
        return None

def list_applications() -> List[dict]:
    try:
        res = supabase_client.get_supabase().table("applied").select("*").order("created_at", desc=True).execute()
        return res.data or []
    except Exception:
        logger.exception("instructors.repository.list_applications failed")
        return []

def insert_application(data: Dict[str, Any]) -> Optional[dict]:
    try:
        res = supabase_client.get_supabase().table("applied").insert(data).execute()
        rows = res.data or []
        return rows[0] if rows else {"status": "ok"}
    except Exception:
        logger.exception("instructors.repository.insert_application failed email=%s", data.get("email"))
        return None

def set_application_status(application_id: str, status: str) -> None:
    try:
        supabase_client.get_supabase().table("applied").update({"status": status}).eq("id", application_id).execute()
    except Exception as e:
        logger.exception("instructors.repository.set_application_status failed id=%s", application_id)
        raise UpstreamError("Mise à jour de la candidature impossible") from e

def delete_application(application_id: str) -> bool:
    try:
        res = supabase_client.get_supabase().table("applied").delete().eq("id", application_id).execute()
        return bool(res.data)
    except Exception:
        logger.exception("instructors.repository.delete_application failed id=%s", application_id)
        return False
