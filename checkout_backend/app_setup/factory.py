"""
Factory d'application pour les entrypoints (checkout_backend.asgi, tests).
Ordonne les étapes d'initialisation de manière lisible et testable.
"""
from typing import Optional
from fastapi import FastAPI

from checkout_backend.config import Settings
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_security_middleware
from .exceptions import register_exception_handlers
from .routers import register_routers

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Construit l'app FastAPI:
      1) Settings.from_env() si aucune configuration n'est fournie (ConfigMissing si secret absent)
      2) middlewares sécurité puis de base (CORS, proxy headers)
      3) gestionnaires d'exceptions et routers
    Retour:
      FastAPI prêt à être servi (ASGI).
    """
    settings = settings or Settings.from_env()
    app = FastAPI(title="Stripe Checkout Function", lifespan=lifespan, docs_url=None, redoc_url=None, openapi_url=None)
    app.state.settings = settings
    register_security_middleware(app, settings)
    register_basic_middlewares(app, settings)
    register_exception_handlers(app)
    register_routers(app)
    return app
