# checkout_backend.config
from pathlib import Path
import os
from typing import Iterable, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from checkout_backend.errors import ConfigMissing

# Charger .env à la racine du projet (sans écraser l'environnement de la plateforme)
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=False)

STATIC_DIR = Path(__file__).resolve().parent / "static"

REQUIRED_ENV = ("STRIPE_SECRET_KEY", "STRIPE_WEBHOOK_SECRET")

"""
Configuration explicite de la fonction.

- Settings est construit une fois par instance (create_app) puis injecté dans les handlers
- Aucun handler ne lit os.environ directement
- Les secrets requis (Stripe) font échouer le démarrage s'ils sont absents
"""

def _clean_env(v: Optional[str]) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _flag(v: Optional[str], default: bool) -> bool:
    v = _clean_env(v).lower()
    if not v:
        return default
    return v in ("1", "true", "yes", "on")

def throw_if_missing(env: Mapping[str, Optional[str]], keys: Iterable[str]) -> None:
    """Lève ConfigMissing avec la liste complète des clés absentes ou vides."""
    missing = [k for k in keys if not _clean_env(env.get(k))]
    if missing:
        raise ConfigMissing(missing)


class Settings(BaseModel):
    # Stripe: clé secrète, clé publique et secret de signature des webhooks
    stripe_secret_key: str
    stripe_webhook_secret: str
    stripe_publishable_key: Optional[str] = None

    # Stockage des commandes (database -> schéma Postgres, collection -> table)
    database_id: str = "orders"
    collection_id: str = "orders"
    orders_idempotent: bool = True
    supabase_url: str = ""
    supabase_service_key: str = ""

    # Valeurs injectées dans la page statique uniquement
    function_api_endpoint: Optional[str] = None
    function_project_id: Optional[str] = None
    function_id: Optional[str] = None

    # Produit vendu par la session Checkout
    checkout_product_name: str = "Product"
    checkout_unit_amount: int = 1000
    checkout_currency: str = "usd"

    cors_origins: list[str] = ["*"]
    force_hsts: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, Optional[str]]] = None) -> "Settings":
        """
        Construit la configuration depuis l'environnement (os.environ par défaut).
        - Lève ConfigMissing si STRIPE_SECRET_KEY ou STRIPE_WEBHOOK_SECRET manque.
        - SUPABASE_URL sans schéma est préfixée en https://, le slash final est retiré.
        """
        env = os.environ if env is None else env
        throw_if_missing(env, REQUIRED_ENV)

        supabase_url = _clean_env(env.get("SUPABASE_URL"))
        if supabase_url and not supabase_url.startswith("http"):
            supabase_url = "https://" + supabase_url
        supabase_url = supabase_url.rstrip("/")

        cors = [o.strip() for o in (env.get("CORS_ORIGINS") or "*").split(",") if o.strip()]

        return cls(
            stripe_secret_key=_clean_env(env.get("STRIPE_SECRET_KEY")),
            stripe_webhook_secret=_clean_env(env.get("STRIPE_WEBHOOK_SECRET")),
            stripe_publishable_key=_clean_env(env.get("STRIPE_PUBLISHABLE_KEY")) or None,
            database_id=_clean_env(env.get("ORDERS_DATABASE_ID") or env.get("APPWRITE_DATABASE_ID")) or "orders",
            collection_id=_clean_env(env.get("ORDERS_COLLECTION_ID") or env.get("APPWRITE_COLLECTION_ID")) or "orders",
            orders_idempotent=_flag(env.get("ORDERS_IDEMPOTENT"), True),
            supabase_url=supabase_url,
            supabase_service_key=_clean_env(env.get("SUPABASE_SERVICE_KEY")),
            function_api_endpoint=_clean_env(env.get("APPWRITE_FUNCTION_API_ENDPOINT")) or None,
            function_project_id=_clean_env(env.get("APPWRITE_FUNCTION_PROJECT_ID")) or None,
            function_id=_clean_env(env.get("APPWRITE_FUNCTION_ID")) or None,
            checkout_product_name=_clean_env(env.get("CHECKOUT_PRODUCT_NAME")) or "Product",
            checkout_unit_amount=int(_clean_env(env.get("CHECKOUT_UNIT_AMOUNT")) or 1000),
            checkout_currency=(_clean_env(env.get("CHECKOUT_CURRENCY")) or "usd").lower(),
            cors_origins=cors or ["*"],
            force_hsts=_flag(env.get("FORCE_HSTS"), False),
        )
