"""
Émission et vérification des jetons Bearer (JWT HS256 signés avec ACCESS_KEY).
Le rôle n'est jamais lu depuis le jeton: la Role Gate le relit dans la table users.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict
import jwt

from fithub import config
from fithub.app_setup.errors import ValidationError

def _require_secret() -> str:
    if not config.ACCESS_KEY:
        raise RuntimeError("ACCESS_KEY manquant pour signer/vérifier les jetons")
    return config.ACCESS_KEY

def issue_token(payload: Dict[str, Any]) -> str:
    """
    Signe l'identité fournie par le client.
    - payload doit contenir un email non vide
    - ajoute iat et exp (TOKEN_TTL_HOURS, 24h par défaut)
    - une éventuelle claim 'role' est retirée pour ne pas laisser croire qu'elle fait foi
    """
    email = str((payload or {}).get("email") or "").strip()
    if not email:
        raise ValidationError("email requis pour émettre un jeton")
    claims = {k: v for k, v in payload.items() if k not in ("exp", "iat", "nbf", "role")}
    claims["email"] = email
    now = datetime.now(timezone.utc)
    claims["iat"] = now
    claims["exp"] = now + timedelta(hours=config.TOKEN_TTL_HOURS)
    return jwt.encode(claims, _require_secret(), algorithm=config.TOKEN_ALGORITHM)

def decode_token(token: str) -> Dict[str, Any]:
    """Vérifie signature + expiration. Lève jwt.PyJWTError si le jeton est invalide."""
    return jwt.decode(token, _require_secret(), algorithms=[config.TOKEN_ALGORITHM])
