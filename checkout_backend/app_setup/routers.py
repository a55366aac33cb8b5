"""
Registre central des routers.
- Payments (POST): /stripe-key, /create-payment-intent, /checkout, /webhook
- Pages (GET): page d'accueil sur tout chemin, enregistrée en dernier
"""
from fastapi import FastAPI
from checkout_backend.payments import views as payments_views
from checkout_backend.pages import views as pages_views

def register_routers(app: FastAPI) -> None:
    app.include_router(payments_views.router)
    # Catch-all GET: doit rester après les routes explicites
    app.include_router(pages_views.router)
