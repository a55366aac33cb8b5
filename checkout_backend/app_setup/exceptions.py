"""
Gestionnaires d'exceptions.
- Routage: toute route ou méthode inconnue (404/405) répond 404 "Not Found" en texte brut.
- Erreurs d'adaptateurs non gérées par les vues: journalisées puis 500 générique.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from checkout_backend.errors import CheckoutError

logger = logging.getLogger(__name__)

def register_exception_handlers(app: FastAPI) -> None:
    """
    Enregistre les handlers HTTPException (routage) et CheckoutError (adaptateurs).
    """
    @app.exception_handler(StarletteHTTPException)
    async def not_found_on_routing_errors(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return PlainTextResponse("Not Found", status_code=404)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(CheckoutError)
    async def generic_failure(request: Request, exc: CheckoutError):
        logger.error(
            "Unhandled %s on %s %s: %s",
            exc.__class__.__name__, request.method, request.url.path, exc,
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})
