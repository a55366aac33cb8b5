"""Dépendances FastAPI partagées: configuration et adaptateurs de l'invocation."""
from fastapi import Depends, Request

from checkout_backend.config import Settings
from checkout_backend.orders.repository import OrderStore
from checkout_backend.payments.stripe_client import StripeGateway
from checkout_backend.utils.security import get_invocation_key


def get_settings(request: Request) -> Settings:
    """Configuration construite par create_app (app.state.settings)."""
    return request.app.state.settings


def get_gateway(settings: Settings = Depends(get_settings)) -> StripeGateway:
    return StripeGateway(settings)


def get_order_store(request: Request, settings: Settings = Depends(get_settings)) -> OrderStore:
    return OrderStore(settings, api_key=get_invocation_key(request))
