"""
ASGI entrypoint: expose `app` pour les process managers / déploiements.

- En production, un process manager (ex: gunicorn/uvicorn-workers) importe `homedecor.asgi:app`.
- Toute la configuration FastAPI est centralisée dans homedecor.app_setup.factory.
"""

from homedecor.app import app

if __name__ == "__main__":
    # Exécution directe utile en développement local (uvicorn standalone).
    import os
    import uvicorn
    uvicorn.run(
        "homedecor.asgi:app",
        host="0.0.0.0",  # écoute toutes interfaces (Docker/VM)
        port=int(os.getenv("PORT", "3000")),
        reload=True,     # rechargement automatique en dev
    )
