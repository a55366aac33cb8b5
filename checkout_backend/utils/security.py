from typing import Optional
from fastapi import Request

# En-têtes posés par la plateforme de fonctions pour l'invocation courante
USER_ID_HEADER = "x-appwrite-user-id"
API_KEY_HEADER = "x-appwrite-key"
SIGNATURE_HEADER = "stripe-signature"

def get_user_id(request: Request) -> Optional[str]:
    """
    Identifiant de l'utilisateur authentifié, ou None.
    Ne lève pas: l'absence d'utilisateur est gérée par la vue (redirection vers failureUrl).
    """
    return (request.headers.get(USER_ID_HEADER) or "").strip() or None

def get_invocation_key(request: Request) -> str:
    return (request.headers.get(API_KEY_HEADER) or "").strip()
