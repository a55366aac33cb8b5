"""
Accès aux données pour la feature 'orders' (documents de commande).
- database_id -> schéma Postgres, collection_id -> table
- Chaque opération retourne un AdapterResult
"""
import logging
from typing import Any, Dict, Optional
from uuid import uuid4

import checkout_backend.infra.supabase_client as supabase_client
from checkout_backend.config import Settings
from checkout_backend.results import AdapterResult

logger = logging.getLogger(__name__)

# module checkout_backend.orders.repository
def _collection(client, database_id: str, collection_id: str):
    return client.schema(database_id).table(collection_id)

def _first(res) -> Optional[Dict[str, Any]]:
    rows = getattr(res, "data", None) or []
    return rows[0] if isinstance(rows, list) and rows else None


class OrderStore:
    """Stockage des commandes lié à une configuration et à la clé de l'invocation."""

    def __init__(self, settings: Settings, api_key: str = ""):
        self.settings = settings
        self.api_key = api_key

    def _client(self):
        return supabase_client.get_store_client(self.settings, self.api_key)

    def find_order(self, database_id: str, collection_id: str, order_id: str) -> AdapterResult:
        """data = document existant pour order_id, ou None."""
        try:
            res = (
                _collection(self._client(), database_id, collection_id)
                .select("*")
                .eq("orderId", order_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.exception("orders.repository.find_order failed order_id=%s", order_id)
            return AdapterResult.fail(str(e), e)
        return AdapterResult.ok(_first(res))

    def create_order(self, database_id: str, collection_id: str, user_id: str, order_id: str) -> AdapterResult:
        """
        Crée le document {id, userId, orderId} avec un identifiant neuf.
        - Si orders_idempotent: une commande déjà présente pour order_id est renvoyée telle quelle
          (livraison en double du webhook), aucune insertion.
        - data = document créé (ou existant)
        """
        if self.settings.orders_idempotent:
            existing = self.find_order(database_id, collection_id, order_id)
            if not existing:
                return existing
            if existing.data:
                logger.warning("orders.create_order duplicate delivery order_id=%s user_id=%s", order_id, user_id)
                return AdapterResult.ok(existing.data)

        document = {"id": str(uuid4()), "userId": user_id, "orderId": order_id}
        try:
            res = (
                _collection(self._client(), database_id, collection_id)
                .insert(document)
                .execute()
            )
        except Exception as e:
            logger.exception("orders.repository.create_order failed user_id=%s order_id=%s", user_id, order_id)
            return AdapterResult.fail(str(e), e)
        return AdapterResult.ok(_first(res) or document)
