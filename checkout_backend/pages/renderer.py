"""
Rendu de la page statique: lecture du fichier puis substitution des {{CLÉ}}.
Pas de moteur de templates: une simple table clé -> valeur.
"""
from functools import lru_cache
from typing import Mapping, Optional

from checkout_backend.config import STATIC_DIR, Settings

@lru_cache(maxsize=None)
def get_static_file(name: str) -> str:
    """Contenu texte (UTF-8) d'un fichier du répertoire static/ du paquet."""
    return (STATIC_DIR / name).read_text(encoding="utf-8")

def interpolate(template: str, values: Mapping[str, Optional[object]]) -> str:
    """Remplace chaque {{CLÉ}} par sa valeur; None devient une chaîne vide."""
    for key, value in values.items():
        template = template.replace("{{" + key + "}}", "" if value is None else str(value))
    return template

def page_values(settings: Settings) -> dict:
    return {
        "APPWRITE_FUNCTION_API_ENDPOINT": settings.function_api_endpoint,
        "APPWRITE_FUNCTION_PROJECT_ID": settings.function_project_id,
        "APPWRITE_FUNCTION_ID": settings.function_id,
        "APPWRITE_DATABASE_ID": settings.database_id,
        "APPWRITE_COLLECTION_ID": settings.collection_id,
    }

def render_index(settings: Settings) -> str:
    return interpolate(get_static_file("index.html"), page_values(settings))
