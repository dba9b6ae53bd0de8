"""
Factory d’application utilisée par homedecor.app et homedecor.asgi.
"""
from fastapi import FastAPI

from .exceptions import register_exception_handlers
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_security_middleware
from .routers import register_routers
from .routes import register_routes

API_TITLE = "Home Decor Booking API"
API_VERSION = "1.0.0"


def create_app() -> FastAPI:
    """
    Construit l’app: lifespan (Container + rate limit), middlewares,
    format d'erreur {"success": false, "message": ...}, route racine puis routers métier.
    """
    app = FastAPI(
        title=API_TITLE,
        version=API_VERSION,
        description="Réservations de décoration, paiement Stripe Checkout, décorateurs et avis.",
        lifespan=lifespan,
    )
    register_basic_middlewares(app)
    register_security_middleware(app)
    register_exception_handlers(app)
    register_routes(app)
    register_routers(app)
    return app
