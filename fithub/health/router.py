from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from fithub import config
from fithub.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/rate-limit")
def health_rate_limit(request: Request):
    return JSONResponse(rate_limit_health_info(request))

@router.get("/config")
def health_config():
    # Présence des secrets uniquement, jamais leur valeur
    return JSONResponse({
        "supabase_url": bool(config.SUPABASE_URL),
        "supabase_key": bool(config.SUPABASE_KEY),
        "access_key": bool(config.ACCESS_KEY),
        "stripe_key": bool(config.STRIPE_SECRET_KEY),
        "stripe_verify_intents": config.STRIPE_VERIFY_INTENTS,
    })
