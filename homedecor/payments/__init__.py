"""
Module 'payments' (feature-first): point d'entrée public.
Réunit le client Stripe, le registre des paiements et les deux cas d'usage du checkout.
"""

from .models import CheckoutRequest, PaymentConfirmation, to_minor_units
from .repository import PaymentRepository
from .service import CheckoutInitiator, PaymentReconciler, checkout_urls
from .stripe_client import StripeCheckoutProvider, require_stripe
from .tracking import generate_tracking_id

__all__ = [
    # modèles
    "CheckoutRequest",
    "PaymentConfirmation",
    "to_minor_units",
    # stripe
    "StripeCheckoutProvider",
    "require_stripe",
    # repository
    "PaymentRepository",
    # services
    "CheckoutInitiator",
    "PaymentReconciler",
    "checkout_urls",
    "generate_tracking_id",
]
