"""
ASGI entrypoint: expose `app` pour les process managers / déploiements.

- Un process manager (uvicorn, gunicorn -k uvicorn.workers.UvicornWorker) importe `checkout_backend.asgi:app`.
- La configuration est lue à l'import: un secret requis manquant empêche le démarrage (ConfigMissing).
"""

from checkout_backend.app_setup.factory import create_app

app = create_app()

if __name__ == "__main__":
    import os
    import uvicorn
    uvicorn.run(
        "checkout_backend.asgi:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=True,
    )
