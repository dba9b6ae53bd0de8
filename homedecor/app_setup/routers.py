"""
Registre central des routers.
- Clients: users, bookings, payments, reviews, homeservice
- Admin: bookings, services, decorators
- Health
"""
from fastapi import FastAPI
from homedecor.users import views as users_views
from homedecor.bookings import views as bookings_views
from homedecor.payments import views as payments_views
from homedecor.reviews import views as reviews_views
from homedecor.listings import views as listings_views
from homedecor.decorators import views as decorators_views
from homedecor.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    """
    Agrège tous les routers de l’application.
    L’ordre n’a pas d’impact sauf conflits de chemins (évités par préfixes).
    """
    app.include_router(users_views.router)
    app.include_router(bookings_views.router)
    app.include_router(payments_views.router)
    app.include_router(reviews_views.router)
    app.include_router(listings_views.public_router)
    # Admin
    app.include_router(bookings_views.admin_router)
    app.include_router(listings_views.admin_router)
    app.include_router(decorators_views.router)
    # Health & monitoring
    app.include_router(health_router)
