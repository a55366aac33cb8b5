"""
Middlewares transverses de l'application.
- register_basic_middlewares: CORS et confiance en X-Forwarded-* (origine publique des redirections).
- register_security_middleware: en-têtes de sécurité et CSP (Stripe.js, SDK Appwrite, endpoint de la fonction).
Notes:
- L'ordre d'ajout est important: ProxyHeadersMiddleware est ajouté en dernier pour s'exécuter en premier.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from checkout_backend.config import Settings

STRIPE_SOURCES = ["https://js.stripe.com", "https://api.stripe.com", "https://checkout.stripe.com"]
CDN_SOURCES = ["https://cdn.jsdelivr.net"]

def register_basic_middlewares(app: FastAPI, settings: Settings) -> None:
    """
    Ajoute les middlewares « de base »:
    - CORSMiddleware: autorise les origines définies (CORS_ORIGINS).
    - ProxyHeadersMiddleware: scheme/hôte issus du proxy de la plateforme (x-forwarded-*).
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

def _csp(settings: Settings) -> str:
    connect = ["'self'", *STRIPE_SOURCES]
    if settings.function_api_endpoint:
        connect.append(settings.function_api_endpoint.rstrip("/"))
    return (
        "default-src 'self'; "
        "base-uri 'self'; object-src 'none'; "
        f"frame-src {' '.join(STRIPE_SOURCES)}; "
        "img-src 'self' data: https://*.stripe.com; "
        "style-src 'self' 'unsafe-inline'; "
        f"script-src 'self' 'unsafe-inline' {' '.join(STRIPE_SOURCES + CDN_SOURCES)}; "
        f"connect-src {' '.join(connect)}"
    )

def register_security_middleware(app: FastAPI, settings: Settings) -> None:
    csp = _csp(settings)

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)

        # En-têtes de sécurité
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Permissions-Policy", "geolocation=(), microphone=(), camera=()")
        if settings.force_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=63072000; includeSubDomains; preload")
        if response.headers.get("content-type", "").startswith("text/html"):
            response.headers.setdefault("X-Frame-Options", "DENY")
            response.headers["Content-Security-Policy"] = csp
        return response
