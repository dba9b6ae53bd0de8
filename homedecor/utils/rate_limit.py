from typing import Dict, Any
from fastapi import Request, Response, HTTPException
import os
import time


def _client_key(req: Request) -> str:
    # Pas de session dans ce backend: clé = IP + chemin
    ip = req.client.host if req.client else "local"
    return f"ip:{ip}:{req.url.path}"


def _prune_expired(store: Dict[str, tuple], now: float) -> None:
    # store: clé -> (fenêtre en secondes, horodatages); une clé sans hit récent est retirée
    expired = [k for k, (window, hits) in store.items() if not hits or now - hits[-1] >= window]
    for k in expired:
        del store[k]


def optional_rate_limit(times: int, seconds: int):
    """
    Dépendance de limitation de débit « au mieux »:
    - LOCAL_RATE_LIMIT_FALLBACK=1: fenêtre glissante en mémoire (dev)
    - sinon fastapi-limiter (Redis) si initialisé dans le lifespan
    - désactivée si app.state.rate_limit_enabled est False
    """
    async def _dep(request: Request, response: Response):
        if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
            now = time.time()
            key = _client_key(request)
            store = getattr(request.app.state, "_rl_store", {})
            _prune_expired(store, now)
            _, previous = store.get(key, (seconds, []))
            hits = [t for t in previous if now - t < seconds]
            if len(hits) >= times:
                store[key] = (seconds, hits)
                request.app.state._rl_store = store
                raise HTTPException(status_code=429, detail="Too Many Requests")
            hits.append(now)
            store[key] = (seconds, hits)
            request.app.state._rl_store = store
            return

        # Respecter le flag global
        if getattr(request.app.state, "rate_limit_enabled", None) is False:
            return

        try:
            from fastapi_limiter.depends import RateLimiter

            async def _identifier(req: Request) -> str:
                return _client_key(req)

            return await RateLimiter(times=times, seconds=seconds, identifier=_identifier)(request, response)
        except HTTPException:
            raise
        except Exception:
            # Redis indisponible: pas de 429 en prod; en dev, activer LOCAL_RATE_LIMIT_FALLBACK=1
            return
    return _dep


def rate_limit_health_info(request: Request) -> Dict[str, Any]:
    enabled = getattr(request.app.state, "rate_limit_enabled", None)

    try:
        from fastapi_limiter import FastAPILimiter
        limiter_ready = getattr(FastAPILimiter, "redis", None) is not None
    except Exception:
        limiter_ready = False

    return {
        "enabled": (bool(enabled) if enabled is not None else None),
        "ready": limiter_ready,
        "backend": "redis" if limiter_ready else None,
        "local_fallback": os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1",
    }
