"""Fonction de paiement Stripe: PaymentIntent, sessions Checkout et enregistrement des commandes."""

__version__ = "1.0.0"
