from typing import Dict, Any
from fastapi import Request, Response, HTTPException
import os
import time
import hashlib

def _caller_key(req: Request) -> str:
    # Priorité: jeton Bearer (hashé) puis IP
    auth = req.headers.get("Authorization") or ""
    path = req.url.path
    if auth:
        h = hashlib.sha256(auth.encode("utf-8")).hexdigest()[:16]
        return f"user:{h}:{path}"
    ip = req.client.host if req.client else "local"
    return f"ip:{ip}:{path}"

def _sweep(store: Dict[str, Any], now: float) -> None:
    # Retire les clés dont toutes les requêtes sont sorties de leur fenêtre
    for key in list(store):
        window, hits = store[key]
        fresh = [t for t in hits if now - t < window]
        if fresh:
            store[key] = (window, fresh)
        else:
            del store[key]

def optional_rate_limit(times: int, seconds: int):
    async def _dep(request: Request, response: Response):
        # Fallback mémoire en DEV si demandé
        if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
            now = time.time()
            key = _caller_key(request)
            store = getattr(request.app.state, "_rl_store", {})
            _sweep(store, now)
            _, hits = store.get(key, (seconds, []))
            if len(hits) >= times:
                raise HTTPException(status_code=429, detail="Too Many Requests")
            hits.append(now)
            store[key] = (seconds, hits)
            request.app.state._rl_store = store
            return

        if getattr(request.app.state, "rate_limit_enabled", None) is False:
            return

        try:
            from fastapi_limiter.depends import RateLimiter
            async def _identifier(req: Request) -> str:
                return _caller_key(req)
            return await RateLimiter(times=times, seconds=seconds, identifier=_identifier)(request, response)
        except HTTPException:
            raise
        except Exception:
            # fastapi-limiter non initialisé: pas de 429 en prod
            return
    return _dep

def rate_limit_health_info(request: Request) -> Dict[str, Any]:
    enabled = getattr(request.app.state, "rate_limit_enabled", None)
    try:
        from fastapi_limiter import FastAPILimiter
        ready = getattr(FastAPILimiter, "redis", None) is not None
    except Exception:
        ready = False
    return {
        "enabled": (bool(enabled) if enabled is not None else None),
        "ready": ready,
        "backend": "redis" if ready else None,
    }
