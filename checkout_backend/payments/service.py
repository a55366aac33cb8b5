"""
Cas d'usage 'payments': orchestre la passerelle Stripe et le stockage des commandes.
Chaque cas d'usage appelle au plus deux opérations externes, séquentiellement.
"""
import logging
from typing import Any, Dict, Optional, Tuple

from checkout_backend.config import Settings
from checkout_backend.errors import GatewayCallFailed, OrderStoreError
from checkout_backend.orders.repository import OrderStore

from . import metadata as meta
from .stripe_client import StripeGateway

logger = logging.getLogger(__name__)

def create_payment_intent(gateway: StripeGateway, email: Any, amount: Any, currency: Any) -> Dict[str, Any]:
    """
    Crée un client puis un PaymentIntent pour ce client.
    - Succès: {"clientSecret": "..."}
    - Refus Stripe sur le PaymentIntent: {"error": "<message>"} (rapporté dans le corps, statut 200)
    - Échec de création du client: GatewayCallFailed (non géré ici)
    """
    customer_id = gateway.create_customer(email).unwrap(GatewayCallFailed)
    intent = gateway.create_payment_intent(amount, currency, customer_id)
    if not intent:
        return {"error": intent.error}
    return {"clientSecret": intent.data}

def start_checkout(
    gateway: StripeGateway,
    user_id: Optional[str],
    success_url: str,
    failure_url: str,
) -> str:
    """
    Retourne l'URL vers laquelle rediriger (303) le navigateur.
    - Sans utilisateur authentifié: failure_url, Stripe n'est pas appelé
    - Session non créée: failure_url
    - Sinon: URL de la session Checkout
    """
    if not user_id:
        logger.error("User ID not found in request.")
        return failure_url

    session = gateway.create_checkout_session(user_id, success_url, failure_url)
    if not session:
        logger.error("Failed to create Stripe checkout session: %s", session.error)
        return failure_url

    logger.info("Created Stripe checkout session %s for user %s.", session.data.get("id"), user_id)
    return session.data["url"]

def handle_webhook(
    gateway: StripeGateway,
    store: OrderStore,
    settings: Settings,
    payload: bytes,
    signature: Optional[str],
) -> Tuple[int, Dict[str, Any]]:
    """
    Vérifie l'événement Stripe puis enregistre la commande si le checkout est terminé.
    Retour: (status_code, body)
    - Signature invalide: (401, {"success": False}), aucune écriture
    - checkout.session.completed: une commande {userId, orderId}, (200, {"success": True})
    - Autre type vérifié: (200, {"success": True}), aucun effet
    - Échec d'écriture: OrderStoreError (non géré ici)
    """
    verified = gateway.verify_webhook(payload, signature)
    if not verified:
        return 401, {"success": False}

    event = verified.data
    logger.info("Stripe event received id=%s type=%s", event.get("id"), meta.event_type(event))

    if meta.event_type(event) == meta.CHECKOUT_COMPLETED:
        user_id, order_id = meta.extract_order_ref(event)
        store.create_order(settings.database_id, settings.collection_id, user_id, order_id).unwrap(OrderStoreError)
        logger.info("Created order document for user %s with Stripe order ID %s", user_id, order_id)

    return 200, {"success": True}
