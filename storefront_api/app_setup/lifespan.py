"""
Lifespan FastAPI: rate limiting de l'endpoint d'intent de paiement.
Variables d'environnement:
  - DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS=1: aucune connexion Redis (tests)
  - USE_FAKE_REDIS_FOR_TESTS=1: fakeredis à la place de Redis
  - LOCAL_RATE_LIMIT_FALLBACK=1: compteur mémoire si Redis est injoignable
"""
import os
import logging
from contextlib import asynccontextmanager
from urllib.parse import urlsplit

import redis.asyncio as redis
from fastapi import FastAPI
from fastapi_limiter import FastAPILimiter

from storefront_api.config import RATE_LIMIT_REDIS_URL

try:
    from fakeredis.aioredis import FakeRedis  # tests only
except ImportError:
    FakeRedis = None

logger = logging.getLogger("uvicorn.error")


def _redis_client():
    if os.getenv("USE_FAKE_REDIS_FOR_TESTS") == "1":
        if FakeRedis is None:
            raise RuntimeError("USE_FAKE_REDIS_FOR_TESTS=1 but fakeredis is not installed.")
        return FakeRedis(decode_responses=True)
    return redis.from_url(RATE_LIMIT_REDIS_URL, encoding="utf-8", decode_responses=True)


async def _init_rate_limit(app: FastAPI) -> bool:
    """Retourne True si FastAPILimiter est prêt."""
    try:
        await FastAPILimiter.init(_redis_client())
    except Exception as e:
        host = urlsplit(RATE_LIMIT_REDIS_URL).hostname
        if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
            app.state.rate_limit_enabled = True
            logger.warning("Rate limiting: redis host=%s unavailable (%s), local in-memory fallback", host, e)
        else:
            app.state.rate_limit_enabled = False
            logger.warning("Rate limiting disabled: redis host=%s unavailable (%s)", host, e)
        return False
    app.state.rate_limit_enabled = True
    logger.info("Rate limiting enabled")
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    if os.getenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS") == "1":
        app.state.rate_limit_enabled = False
        logger.info("Rate limiting disabled by DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS")
        yield
        return

    ready = await _init_rate_limit(app)
    try:
        yield
    finally:
        if ready:
            await FastAPILimiter.close()
