from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from fithub.app_setup.errors import ValidationError
from fithub.utils.rate_limit import optional_rate_limit
from .service import issue_token

router = APIRouter(prefix="/api", tags=["Auth API"])

@router.post("/set-token", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def set_token(request: Request):
    """Émet un jeton Bearer (24h) pour l'identité envoyée par le client.
    - Body: objet JSON contenant au minimum "email".
    - Le jeton ne porte pas de rôle: la Role Gate relit le rôle en base à chaque requête.
    - Retourne {"token": "<jwt>"}
    """
    try:
        body = await request.json()
    except Exception:
        body = None
    if not isinstance(body, dict):
        raise ValidationError("Corps JSON attendu")
    payload: Dict[str, Any] = dict(body)
    return JSONResponse({"token": issue_token(payload)})
