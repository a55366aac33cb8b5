"""
Lecture des événements Stripe (webhook): type et référence de commande.
"""
from typing import Any, Dict, Optional, Tuple

CHECKOUT_COMPLETED = "checkout.session.completed"

# module checkout_backend.payments.metadata
def event_type(event: Dict[str, Any]) -> str:
    return str((event or {}).get("type") or "")

def extract_order_ref(event: Dict[str, Any]) -> Tuple[Optional[str], Optional[str]]:
    """
    Extrait (user_id, order_id) d'un event checkout.session.completed.
    - user_id: data.object.metadata.userId (posé à la création de la session)
    - order_id: data.object.id (identifiant de la session Checkout)
    - Tolérant: retourne None pour les parties absentes.
    """
    data_obj = ((event or {}).get("data") or {}).get("object") or {}
    meta = data_obj.get("metadata") or {}
    return meta.get("userId"), data_obj.get("id")
