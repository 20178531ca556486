"""
Chaîne de contrôle d'accès: Authenticator (jeton Bearer) -> Role Gate (rôle relu en base).
- get_current_user: 401 si le jeton manque, 403 s'il est invalide ou expiré.
- require_instructor / require_admin: 403 si l'appelant est inconnu ou si son rôle est insuffisant.
"""
from typing import Any, Dict
import logging
import jwt
from fastapi import Request, HTTPException, Depends

from fithub.config import ROLES

logger = logging.getLogger(__name__)

_ROLE_RANK = {role: rank for rank, role in enumerate(ROLES)}

def role_satisfies(role: str | None, required: str) -> bool:
    """
    Hiérarchie student < instructor < admin.
    La gate 'instructor' admet instructor et admin; la gate 'admin' admet seulement admin.
    Un rôle inconnu n'admet rien.
    """
    rank = _ROLE_RANK.get(str(role or "").lower())
    if rank is None:
        return False
    return rank >= _ROLE_RANK[required]

def get_current_user(request: Request) -> Dict[str, Any]:
    auth_header = (request.headers.get("Authorization") or "").strip()
    if not auth_header:
        raise HTTPException(status_code=401, detail="Unauthorize access")
    scheme, _, token = auth_header.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(status_code=401, detail="Unauthorize access")

    try:
        # Délégué au service Auth
        from fithub.auth.service import decode_token
        claims = decode_token(token)
    except jwt.PyJWTError:
        raise HTTPException(status_code=403, detail="forbidden user or token has expired")

    email = str(claims.get("email") or "").strip()
    if not email:
        raise HTTPException(status_code=403, detail="forbidden user or token has expired")
    return {**claims, "email": email}

def require_user(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    return user

def _gate(user: Dict[str, Any], required: str) -> Dict[str, Any]:
    # Relecture systématique: le rôle peut changer pendant la durée de vie du jeton
    from fithub.users import repository as users_repository
    row = users_repository.get_user_by_email(user.get("email"))
    role = (row or {}).get("role")
    if not row or not role_satisfies(role, required):
        logger.info("security.gate refused email=%s role=%s required=%s", user.get("email"), role, required)
        raise HTTPException(status_code=403, detail="Accès interdit")
    return {**user, "role": role, "user_id": row.get("id")}

def require_instructor(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    return _gate(user, "instructor")

def require_admin(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    return _gate(user, "admin")

def ensure_same_user(user: Dict[str, Any], email: str | None) -> None:
    """Ressources personnelles (panier, paiements, inscriptions): l'appelant doit en être le propriétaire."""
    if not email or str(email).strip().lower() != str(user.get("email") or "").lower():
        raise HTTPException(status_code=403, detail="Accès interdit")
