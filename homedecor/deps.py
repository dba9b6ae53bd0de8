"""
Dépendances FastAPI: chaque vue reçoit ses collaborateurs depuis le Container
construit une seule fois dans le lifespan (app.state.container).
Les tests remplacent get_container via app.dependency_overrides.
"""
from fastapi import Depends, Request

from homedecor.container import Container


def get_container(request: Request) -> Container:
    container = getattr(request.app.state, "container", None)
    if container is None:
        # App utilisée sans lifespan (ex: TestClient sans contexte)
        container = Container.build()
        request.app.state.container = container
    return container


def get_user_repository(container: Container = Depends(get_container)):
    return container.users


def get_booking_repository(container: Container = Depends(get_container)):
    return container.bookings


def get_listing_repository(container: Container = Depends(get_container)):
    return container.listings


def get_review_repository(container: Container = Depends(get_container)):
    return container.reviews


def get_payment_repository(container: Container = Depends(get_container)):
    return container.payments


def get_checkout_initiator(container: Container = Depends(get_container)):
    return container.checkout


def get_payment_reconciler(container: Container = Depends(get_container)):
    return container.reconciler


def get_gateway(container: Container = Depends(get_container)):
    return container.gateway
