"""
Module 'payments' (feature-first): point d'entrée public.
Réunit l'adaptateur Stripe, la lecture des événements webhook et les cas d'usage.
"""

from .metadata import CHECKOUT_COMPLETED, event_type, extract_order_ref
from .stripe_client import StripeGateway, stripe_error_message
from .service import create_payment_intent, start_checkout, handle_webhook

__all__ = [
    # metadata
    "CHECKOUT_COMPLETED",
    "event_type",
    "extract_order_ref",
    # stripe
    "StripeGateway",
    "stripe_error_message",
    # services
    "create_payment_intent",
    "start_checkout",
    "handle_webhook",
]
