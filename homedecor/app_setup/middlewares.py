"""
Middlewares transverses de l’application.
- register_basic_middlewares: CORS pour le dashboard front, TrustedHost, X-Forwarded-*.
- register_security_middleware: en-têtes de sécurité + no-store sur le paiement et l'admin.
"""
from fastapi import Request, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
try:
    from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware
except ImportError:
    ProxyHeadersMiddleware = None

from homedecor.config import CORS_ORIGINS, ALLOWED_HOSTS

# Réponses jamais mises en cache (confirmation de paiement, vues admin)
NO_STORE_PREFIXES = ("/payments-success", "/create-checkout-session", "/admin")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}


def register_basic_middlewares(app: FastAPI) -> None:
    """
    - CORS: le front (SPA) appelle l'API depuis un autre domaine; pas de cookies si origine "*".
    - TrustedHost: ALLOWED_HOSTS, ouvert dès que CORS_ORIGINS contient "*".
    - ProxyHeadersMiddleware (si dispo): IP client réelle derrière Render/Nginx (clé du rate limit).
    """
    wildcard = "*" in CORS_ORIGINS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=not wildcard,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=ALLOWED_HOSTS + ["*"] if wildcard else ALLOWED_HOSTS,
    )
    if ProxyHeadersMiddleware:
        app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])


def register_security_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        if request.url.path.startswith(NO_STORE_PREFIXES):
            response.headers["Cache-Control"] = "no-store"
        return response
