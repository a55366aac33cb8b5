import hashlib
import hmac
import json
import time
from types import SimpleNamespace
from typing import Any, Dict, Generator, Optional
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from checkout_backend.app_setup.factory import create_app
from checkout_backend.config import Settings

WEBHOOK_SECRET = "whsec_test_secret"

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)

def sign_payload(payload: str, secret: str = WEBHOOK_SECRET, timestamp: Optional[int] = None) -> str:
    """En-tête Stripe-Signature valide (t=...,v1=HMAC-SHA256(secret, "t.payload"))."""
    ts = int(time.time()) if timestamp is None else timestamp
    digest = hmac.new(secret.encode("utf-8"), f"{ts}.{payload}".encode("utf-8"), hashlib.sha256).hexdigest()
    return f"t={ts},v1={digest}"

def make_event(event_type: str, obj: Dict[str, Any]) -> str:
    return json.dumps({"id": "evt_test_1", "object": "event", "type": event_type, "data": {"object": obj}})

@pytest.fixture()
def settings() -> Settings:
    return Settings(
        stripe_secret_key="sk_test_dummy",
        stripe_webhook_secret=WEBHOOK_SECRET,
        stripe_publishable_key="pk_test_123",
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-role-key",
        function_api_endpoint="https://cloud.appwrite.io/v1",
        function_project_id="project-1",
        function_id="function-1",
    )

@pytest.fixture()
def app(settings):
    return create_app(settings)

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

@pytest.fixture()
def store_client(monkeypatch):
    """
    Client Supabase mocké: aucune commande existante, insert renvoie la ligne créée.
    calls["api_keys"] garde les clés reçues par get_store_client.
    """
    client = MagicMock()
    table = client.schema.return_value.table.return_value
    table.select.return_value.eq.return_value.limit.return_value.execute.return_value = SimpleNamespace(data=[])

    def _insert(document):
        query = MagicMock()
        query.execute.return_value = SimpleNamespace(data=[document])
        return query
    table.insert.side_effect = _insert

    calls = {"api_keys": []}
    def _get_store_client(settings, api_key=""):
        calls["api_keys"].append(api_key)
        return client

    monkeypatch.setattr("checkout_backend.infra.supabase_client.get_store_client", _get_store_client)
    client.calls = calls
    client.orders_table = table
    return client

@pytest.fixture()
def signed():
    """Fabrique (payload, en-tête) pour un événement Stripe signé avec WEBHOOK_SECRET."""
    def _signed(event_type: str, obj: Dict[str, Any], secret: str = WEBHOOK_SECRET):
        payload = make_event(event_type, obj)
        return payload, sign_payload(payload, secret)
    return _signed
