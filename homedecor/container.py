"""
Container: collaborateurs construits une seule fois au démarrage (lifespan)
puis injectés dans les vues via homedecor.deps.
"""
from dataclasses import dataclass
from typing import Any, Callable, Optional

from homedecor.bookings.repository import BookingRepository
from homedecor.infra.gateway import PersistenceGateway
from homedecor.infra.supabase_client import get_service_supabase
from homedecor.listings.repository import ListingRepository
from homedecor.payments.repository import PaymentRepository
from homedecor.payments.service import CheckoutInitiator, PaymentReconciler
from homedecor.payments.stripe_client import StripeCheckoutProvider
from homedecor.reviews.repository import ReviewRepository
from homedecor.users.repository import UserRepository


@dataclass
class Container:
    gateway: PersistenceGateway
    users: UserRepository
    bookings: BookingRepository
    listings: ListingRepository
    reviews: ReviewRepository
    payments: PaymentRepository
    checkout: CheckoutInitiator
    reconciler: PaymentReconciler

    @classmethod
    def build(
        cls,
        client_factory: Callable[[], Any] = get_service_supabase,
        provider: Optional[Any] = None,
    ) -> "Container":
        """Assemble le graphe; aucun accès réseau ici (client Supabase résolu au premier appel)."""
        gateway = PersistenceGateway(client_factory)
        provider = provider or StripeCheckoutProvider()
        bookings = BookingRepository(gateway)
        payments = PaymentRepository(gateway)
        return cls(
            gateway=gateway,
            users=UserRepository(gateway),
            bookings=bookings,
            listings=ListingRepository(gateway),
            reviews=ReviewRepository(gateway),
            payments=payments,
            checkout=CheckoutInitiator(provider),
            reconciler=PaymentReconciler(provider, bookings, payments),
        )
