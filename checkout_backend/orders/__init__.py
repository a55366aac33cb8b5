"""Module 'orders': documents de commande créés par le webhook Stripe."""

from .repository import OrderStore

__all__ = ["OrderStore"]
