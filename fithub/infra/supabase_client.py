from typing import Optional
from supabase import create_client, Client
from fithub.config import SUPABASE_URL, SUPABASE_KEY

_supabase: Optional[Client] = None

def get_supabase() -> Client:
    """
    Client Supabase partagé (clé serveur).
    Les contrôles d'accès sont faits par la chaîne Authenticator -> Role Gate de l'API,
    pas par les policies RLS.
    """
    global _supabase
    if not SUPABASE_URL or not SUPABASE_KEY:
        raise RuntimeError("SUPABASE_URL / SUPABASE_SERVICE_KEY manquants pour get_supabase()")
    if _supabase is None:
        _supabase = create_client(SUPABASE_URL, SUPABASE_KEY)
    return _supabase
