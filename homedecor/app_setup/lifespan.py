"""
Lifespan FastAPI: initialisation/arrêt des ressources partagées.
- Construit le Container (repositories, Stripe, checkout/confirmation) une seule fois.
- Initialise FastAPILimiter (Redis) avec options de test (fakeredis).
- Variables d’environnement supportées:
  - DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS=1: désactive complètement (tests)
  - USE_FAKE_REDIS_FOR_TESTS=1: utilise fakeredis (tests)
  - LOCAL_RATE_LIMIT_FALLBACK=1: active un fallback local si l’init échoue
"""
import os
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi_limiter import FastAPILimiter
from redis import asyncio as aioredis

from homedecor.config import STRIPE_SECRET_KEY, SUPABASE_SERVICE_KEY, SUPABASE_URL
from homedecor.container import Container

try:
    from fakeredis.aioredis import FakeRedis  # tests only
except ImportError:
    FakeRedis = None


async def _init_rate_limiter(app: FastAPI, logger: logging.Logger) -> None:
    if os.getenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS") == "1":
        app.state.rate_limit_enabled = False
        logger.info("Rate limiting disabled by DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS")
        return
    try:
        if os.getenv("USE_FAKE_REDIS_FOR_TESTS") == "1":
            if not FakeRedis:
                raise RuntimeError("USE_FAKE_REDIS_FOR_TESTS=1 mais fakeredis n'est pas installé.")
            r = FakeRedis(decode_responses=True)
        else:
            redis_url = os.getenv("RATE_LIMIT_REDIS_URL", "redis://127.0.0.1:6379/0")
            r = aioredis.from_url(redis_url, encoding="utf-8", decode_responses=True)

        await FastAPILimiter.init(r)
        app.state.rate_limit_enabled = True
        logger.info("Rate limiting enabled")
    except Exception as e:
        if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
            app.state.rate_limit_enabled = True
            logger.warning(f"Rate limiting falling back to local in-memory due to init error: {e}")
        else:
            app.state.rate_limit_enabled = False
            logger.warning(f"Rate limiting disabled due to init error: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Démarrage: Container + rate limiting (les échecs Redis désactivent proprement la limitation).
    Arrêt: fermeture de la connexion Redis du limiter si elle existe.
    """
    logger = logging.getLogger("uvicorn.error")
    if getattr(app.state, "container", None) is None:
        app.state.container = Container.build()
    if not STRIPE_SECRET_KEY:
        logger.warning("STRIPE_SECRET_KEY absent: /create-checkout-session et /payments-success renverront 502")
    if not SUPABASE_URL or not SUPABASE_SERVICE_KEY:
        logger.warning("SUPABASE_URL/SUPABASE_SERVICE_KEY absents: les accès base échoueront")
    await _init_rate_limiter(app, logger)

    yield

    if getattr(app.state, "rate_limit_enabled", False) and getattr(FastAPILimiter, "redis", None) is not None:
        try:
            await FastAPILimiter.close()
        except Exception as e:
            logger.warning(f"Rate limiter shutdown failed: {e}")
