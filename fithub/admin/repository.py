from typing import Any
import logging
import fithub.infra.supabase_client as supabase_client

logger = logging.getLogger(__name__)

# module fithub.admin.repository
def count_table_rows(table_name: str, **filters: Any) -> int:
    """
    Compte les lignes d'une table via Supabase, avec filtres d'égalité optionnels
    (ex: count_table_rows("classes", status="approved")).
    Utilise count='exact' si disponible, sinon fallback sur len(data).
    """
    try:
        query = supabase_client.get_supabase().table(table_name).select("id", count="exact")
        for column, value in filters.items():
            query = query.eq(column, value)
        res = query.execute()
        if getattr(res, "count", None) is not None:
            return int(res.count)  # type: ignore
        return len(res.data or [])
    except Exception:
        logger.exception("admin.repository.count_table_rows failed table=%s filters=%s", table_name, filters)
        return 0
