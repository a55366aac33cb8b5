"""
Lifespan FastAPI: trace la configuration effective au démarrage (sans secrets).
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = logging.getLogger("uvicorn.error")
    settings = app.state.settings
    logger.info(
        "Checkout function ready database=%s collection=%s idempotent_orders=%s order_store=%s",
        settings.database_id,
        settings.collection_id,
        settings.orders_idempotent,
        "configured" if settings.supabase_url else "missing SUPABASE_URL",
    )
    if not settings.stripe_publishable_key:
        logger.warning("STRIPE_PUBLISHABLE_KEY not set: /stripe-key will return null")
    yield
