import logging
from typing import Any, Dict

from fastapi import APIRouter, Request, Depends
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.status import HTTP_303_SEE_OTHER

from checkout_backend.config import Settings
from checkout_backend.deps import get_settings, get_gateway, get_order_store
from checkout_backend.orders.repository import OrderStore
from checkout_backend.payments import service as payments_service
from checkout_backend.payments.stripe_client import StripeGateway
from checkout_backend.utils.security import get_user_id, SIGNATURE_HEADER

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Payments"])

async def _read_json(request: Request) -> Dict[str, Any]:
    # Corps absent ou non JSON: traité comme {}
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}

def _origin(request: Request) -> str:
    return f"{request.url.scheme}://{request.headers.get('host') or request.url.netloc}/"

# module checkout_backend.payments.views
@router.post("/stripe-key")
def stripe_key(settings: Settings = Depends(get_settings)):
    """Clé publique Stripe pour Stripe.js (peut être null si non configurée)."""
    return {"key": settings.stripe_publishable_key}

@router.post("/create-payment-intent")
async def create_payment_intent(request: Request, gateway: StripeGateway = Depends(get_gateway)):
    """
    Crée un client Stripe puis un PaymentIntent.
    - Entrée JSON: {"email": "...", "amount": <int>, "currency": "usd"}
    - Réponse 200: {"clientSecret": "..."} ou {"error": "<message Stripe>"}
    - Les clients existants lisent l'erreur dans le corps: le statut reste 200.
    """
    body = await _read_json(request)
    result = payments_service.create_payment_intent(
        gateway,
        email=body.get("email"),
        amount=body.get("amount"),
        currency=body.get("currency"),
    )
    return JSONResponse(result)

@router.post("/checkout")
async def checkout(request: Request, gateway: StripeGateway = Depends(get_gateway)):
    """
    Redirige (303) vers Stripe Checkout pour l'utilisateur authentifié.
    - Entrée JSON optionnelle: {"successUrl": "...", "failureUrl": "..."}, défaut: origine de la requête
    - Utilisateur: en-tête x-appwrite-user-id; absent -> redirection vers failureUrl
    - Session non créée -> redirection vers failureUrl
    """
    body = await _read_json(request)
    fallback_url = _origin(request)
    success_url = body.get("successUrl") or fallback_url
    failure_url = body.get("failureUrl") or fallback_url

    target = payments_service.start_checkout(gateway, get_user_id(request), success_url, failure_url)
    return RedirectResponse(url=target, status_code=HTTP_303_SEE_OTHER)

@router.post("/webhook")
async def webhook(
    request: Request,
    settings: Settings = Depends(get_settings),
    gateway: StripeGateway = Depends(get_gateway),
    store: OrderStore = Depends(get_order_store),
):
    """
    Webhook Stripe signé.
    - Signature: corps brut + en-tête Stripe-Signature + STRIPE_WEBHOOK_SECRET
    - 401 {"success": false} si invalide; sinon 200 {"success": true}
    - checkout.session.completed: crée la commande {userId, orderId}
    """
    payload = await request.body()
    status_code, body = payments_service.handle_webhook(
        gateway, store, settings, payload, request.headers.get(SIGNATURE_HEADER)
    )
    return JSONResponse(body, status_code=status_code)
