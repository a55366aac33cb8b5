from typing import Dict
from supabase import create_client, Client

from checkout_backend.config import Settings

# Un client par (url, clé): la clé peut venir de l'en-tête x-appwrite-key de l'invocation
_clients: Dict[tuple, Client] = {}

def get_store_client(settings: Settings, api_key: str = "") -> Client:
    """
    Client Supabase pour le stockage des commandes.
    - api_key: clé fournie par la plateforme pour cette invocation, sinon SUPABASE_SERVICE_KEY
    - Lève RuntimeError si l'URL ou la clé est absente.
    """
    key = api_key or settings.supabase_service_key
    if not settings.supabase_url:
        raise RuntimeError("SUPABASE_URL manquant pour get_store_client()")
    if not key:
        raise RuntimeError("SUPABASE_SERVICE_KEY manquant pour get_store_client()")
    cache_key = (settings.supabase_url, key)
    client = _clients.get(cache_key)
    if client is None:
        client = create_client(settings.supabase_url, key)
        _clients[cache_key] = client
    return client
