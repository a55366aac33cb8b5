"""
Page d'accueil servie pour toute requête GET, quel que soit le chemin.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from checkout_backend.config import Settings
from checkout_backend.deps import get_settings
from checkout_backend.pages.renderer import render_index

router = APIRouter(tags=["Pages"])

@router.get("/{path:path}", include_in_schema=False)
def index_page(path: str, settings: Settings = Depends(get_settings)):
    return HTMLResponse(render_index(settings))
