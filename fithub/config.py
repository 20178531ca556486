# fithub.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=True)

"""
Configuration centrale de l'API FitHub.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Normalise et expose les secrets/URLs (Supabase, Stripe, clé JWT)
- Expose la politique CORS/hosts et les options de sécurité
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _env_flag(name: str, default: str = "false") -> bool:
    return _clean_env(os.getenv(name, default)).lower() in ("1", "true", "yes")

# Supabase: URL et clé serveur (service-role de préférence, l'API n'utilise pas Supabase Auth)
SUPABASE_URL = _clean_env(os.getenv("SUPABASE_URL") or os.getenv("DB_URL") or "")
SUPABASE_KEY = _clean_env(os.getenv("SUPABASE_SERVICE_KEY") or os.getenv("SUPABASE_KEY") or "")

if SUPABASE_URL and not SUPABASE_URL.startswith("http"):
    SUPABASE_URL = "https://" + SUPABASE_URL
if SUPABASE_URL.endswith("/"):
    SUPABASE_URL = SUPABASE_URL.rstrip("/")

# Jetons Bearer: secret de signature HS256 et durée de vie (24h par défaut)
ACCESS_KEY = _clean_env(os.getenv("ACCESS_KEY") or "")
TOKEN_ALGORITHM = "HS256"
try:
    TOKEN_TTL_HOURS = int(_clean_env(os.getenv("TOKEN_TTL_HOURS") or "24"))
except ValueError:
    TOKEN_TTL_HOURS = 24

# Stripe: clé secrète, devise des PaymentIntents et vérification optionnelle avant règlement
STRIPE_SECRET_KEY = _clean_env(os.getenv("STRIPE_SECRET_KEY") or os.getenv("PAYMENT_KEY") or "")
STRIPE_CURRENCY = _clean_env(os.getenv("STRIPE_CURRENCY") or "usd").lower()
STRIPE_VERIFY_INTENTS = _env_flag("STRIPE_VERIFY_INTENTS")

# Sécurité: HSTS uniquement derrière HTTPS
COOKIE_SECURE = _env_flag("COOKIE_SECURE")

# CORS / hosts
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]

# Rôles connus, du moins au plus privilégié
ROLES = ("student", "instructor", "admin")
DEFAULT_ROLE = "student"
