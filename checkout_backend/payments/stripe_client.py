"""
Adaptateur Stripe: centralise les appels au SDK.
- Clé secrète passée à chaque appel (api_key=...), aucun état global du module stripe.
- Chaque opération retourne un AdapterResult (succès ou échec), jamais d'exception SDK.
"""
import json
import logging
from typing import Any, Dict, Optional

import stripe

from checkout_backend.config import Settings
from checkout_backend.results import AdapterResult

logger = logging.getLogger(__name__)

# Options du PaymentIntent: 3-D Secure automatique, repli localisé en anglais
PAYMENT_METHOD_TYPES = ["card"]
PAYMENT_METHOD_OPTIONS = {
    "card": {"request_three_d_secure": "automatic"},
    "sofort": {"preferred_language": "en"},
}

def _field(obj: Any, name: str) -> Any:
    # Les objets Stripe exposent attributs et clés; les mocks de tests l'un ou l'autre
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)

def stripe_error_message(err: Exception) -> str:
    """
    Message lisible d'une erreur Stripe.
    - Priorité au message destiné à l'utilisateur (error.message renvoyé par l'API)
    - Sinon str(err)
    """
    user_message = getattr(err, "user_message", None)
    if user_message:
        return str(user_message)
    return str(err) or err.__class__.__name__


class StripeGateway:
    """Passerelle Stripe liée à une configuration (clé secrète, secret webhook, produit)."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.api_key = settings.stripe_secret_key

    def create_customer(self, email: Optional[str]) -> AdapterResult:
        """Crée un client Stripe; data = identifiant client (cus_...)."""
        try:
            customer = stripe.Customer.create(email=email, api_key=self.api_key)
        except stripe.StripeError as e:
            logger.exception("stripe.create_customer failed email=%s", email)
            return AdapterResult.fail(stripe_error_message(e), e)
        return AdapterResult.ok(_field(customer, "id"))

    def create_payment_intent(self, amount: Any, currency: Any, customer_id: str) -> AdapterResult:
        """
        Crée un PaymentIntent restreint aux cartes pour le client donné.
        - data = client_secret à renvoyer au navigateur
        - échec si Stripe refuse le montant/la devise (ex: montant négatif)
        """
        params: Dict[str, Any] = {
            "amount": amount,
            "currency": currency,
            "customer": customer_id,
            "payment_method_options": PAYMENT_METHOD_OPTIONS,
            "payment_method_types": PAYMENT_METHOD_TYPES,
        }
        try:
            intent = stripe.PaymentIntent.create(api_key=self.api_key, **params)
        except stripe.StripeError as e:
            logger.warning("stripe.create_payment_intent refused customer=%s: %s", customer_id, e)
            return AdapterResult.fail(stripe_error_message(e), e)
        return AdapterResult.ok(_field(intent, "client_secret"))

    def create_checkout_session(self, user_id: str, success_url: str, failure_url: str) -> AdapterResult:
        """
        Crée une session Stripe Checkout pour le produit configuré.
        - metadata.userId permet au webhook de retrouver l'utilisateur d'origine
        - data = {"id": "cs_...", "url": "https://checkout.stripe.com/..."}
        """
        s = self.settings
        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                payment_method_types=PAYMENT_METHOD_TYPES,
                line_items=[
                    {
                        "price_data": {
                            "unit_amount": s.checkout_unit_amount,
                            "currency": s.checkout_currency,
                            "product_data": {"name": s.checkout_product_name},
                        },
                        "quantity": 1,
                    }
                ],
                success_url=success_url,
                cancel_url=failure_url,
                client_reference_id=user_id,
                metadata={"userId": user_id},
                mode="payment",
            )
        except stripe.StripeError as e:
            logger.exception("stripe.create_checkout_session failed user_id=%s", user_id)
            return AdapterResult.fail(stripe_error_message(e), e)
        url = _field(session, "url")
        if not url:
            return AdapterResult.fail("Session Stripe sans URL de redirection")
        return AdapterResult.ok({"id": _field(session, "id"), "url": url})

    def verify_webhook(self, payload: bytes, signature: Optional[str]) -> AdapterResult:
        """
        Vérifie la signature Stripe-Signature du corps brut puis décode l'événement.
        - data = événement JSON (dict) si la signature est valide
        - échec si en-tête absent, signature invalide/expirée ou corps non JSON
        """
        if not signature:
            return AdapterResult.fail("En-tête Stripe-Signature manquant")
        try:
            body = payload.decode("utf-8")
            stripe.WebhookSignature.verify_header(
                body,
                signature,
                self.settings.stripe_webhook_secret,
                stripe.Webhook.DEFAULT_TOLERANCE,
            )
            event = json.loads(body)
        except stripe.SignatureVerificationError as e:
            logger.warning("stripe.verify_webhook signature rejected: %s", e)
            return AdapterResult.fail("Signature invalide", e)
        except ValueError as e:
            # UnicodeDecodeError et JSONDecodeError dérivent de ValueError
            logger.warning("stripe.verify_webhook invalid payload: %s", e)
            return AdapterResult.fail("Payload invalide", e)
        if not isinstance(event, dict):
            return AdapterResult.fail("Payload invalide")
        return AdapterResult.ok(event)
