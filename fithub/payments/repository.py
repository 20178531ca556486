"""
Accès aux données pour la feature 'payments': reçus (payments) et marqueurs d'idempotence (settlements).
"""
from typing import Any, Dict, List, Optional
import logging
from postgrest.exceptions import APIError
import fithub.infra.supabase_client as supabase_client
from fithub.app_setup.errors import UpstreamError

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"

def _pg_code(e: APIError) -> Optional[str]:
    code = getattr(e, "code", None)
    if not code and e.args and isinstance(e.args[0], dict):
        code = e.args[0].get("code")
    return code

# module fithub.payments.repository
def insert_settlement_marker(transaction_id: str, user_email: str) -> Optional[dict]:
    """
    Réserve transaction_id avant toute mutation (clé primaire de la table settlements).
    - Retourne la ligne créée.
    - Retourne None si le marqueur existe déjà (doublon 23505): le règlement a déjà eu lieu ou est en cours.
    - Lève UpstreamError pour toute autre erreur.
    """
    payload = {"transaction_id": transaction_id, "user_email": user_email, "status": "pending"}
    try:
        res = supabase_client.get_supabase().table("settlements").insert(payload).execute()
        rows = res.data or []
        return rows[0] if rows else payload
    except APIError as e:
        if _pg_code(e) == UNIQUE_VIOLATION:
            return None
        logger.exception("payments.repository.insert_settlement_marker failed tx=%s", transaction_id)
        raise UpstreamError("Réservation de la transaction impossible") from e
    except Exception as e:
        logger.exception("payments.repository.insert_settlement_marker failed tx=%s", transaction_id)
        raise UpstreamError("Réservation de la transaction impossible") from e

def get_settlement_marker(transaction_id: str) -> Optional[dict]:
    try:
        res = (
            supabase_client.get_supabase()
            .table("settlements")
            .select("*")
            .eq("transaction_id", transaction_id)
            .limit(1)
            .execute()
        )
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("payments.repository.get_settlement_marker failed tx=%s", transaction_id)
        return None

def set_settlement_status(transaction_id: str, status: str) -> bool:
    try:
        (
            supabase_client.get_supabase()
            .table("settlements")
            .update({"status": status})
            .eq("transaction_id", transaction_id)
            .execute()
        )
        return True
    except Exception:
        logger.exception("payments.repository.set_settlement_status failed tx=%s status=%s", transaction_id, status)
        return False

def complete_settlement_marker(transaction_id: str) -> bool:
    return set_settlement_status(transaction_id, "completed")

def release_settlement_marker(transaction_id: str) -> bool:
    """Supprime le marqueur après compensation pour autoriser une nouvelle tentative."""
    try:
        supabase_client.get_supabase().table("settlements").delete().eq("transaction_id", transaction_id).execute()
        return True
    except Exception:
        logger.exception("payments.repository.release_settlement_marker failed tx=%s", transaction_id)
        return False

def insert_payment(data: Dict[str, Any]) -> dict:
    try:
        res = supabase_client.get_supabase().table("payments").insert(data).execute()
    except Exception as e:
        logger.exception("payments.repository.insert_payment failed tx=%s", data.get("transaction_id"))
        raise UpstreamError("Enregistrement du paiement impossible") from e
    rows = res.data or []
    return rows[0] if rows else dict(data)

def list_payments(user_email: str) -> List[dict]:
    try:
        res = (
            supabase_client.get_supabase()
            .table("payments")
            .select("*")
            .eq("user_email", user_email)
            .order("date", desc=True)
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("payments.repository.list_payments failed user=%s", user_email)
        return []

def count_payments(user_email: str) -> int:
    try:
        res = (
            supabase_client.get_supabase()
            .table("payments")
            .select("id", count="exact")
            .eq("user_email", user_email)
            .execute()
        )
        if getattr(res, "count", None) is not None:
            return int(res.count)
        return len(res.data or [])
    except Exception:
        logger.exception("payments.repository.count_payments failed user=%s", user_email)
        return 0
