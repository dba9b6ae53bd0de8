"""
Adaptateur Stripe: centralise les appels et la configuration Stripe Checkout.
Toute erreur du SDK est convertie en PaymentProviderError (aucune relance automatique).
"""
import logging
from typing import Any, Dict, List

import stripe

from homedecor.config import STRIPE_SECRET_KEY
from homedecor.errors import PaymentProviderError

logger = logging.getLogger(__name__)


# module homedecor.payments.stripe_client
def require_stripe(api_key: str = STRIPE_SECRET_KEY):
    """
    Prépare et retourne le module stripe prêt à l’emploi.
    - Configure stripe.api_key si une clé est disponible.
    - En absence de clé, les appels Stripe échoueront côté SDK (ex: No API key provided).
    """
    if api_key:
        stripe.api_key = api_key
    return stripe


def _as_dict(obj: Any) -> Dict[str, Any]:
    # stripe retourne un StripeObject; on le traite comme dict
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return dict(obj)


class StripeCheckoutProvider:
    """Fournisseur de paiement: création et lecture des sessions Checkout."""

    def __init__(self, api_key: str = STRIPE_SECRET_KEY):
        self._api_key = api_key

    def create_session(
        self,
        *,
        line_items: List[Dict[str, Any]],
        mode: str,
        customer_email: str,
        metadata: Dict[str, Any],
        success_url: str,
        cancel_url: str,
    ) -> Dict[str, Any]:
        """
        Crée une session Stripe Checkout.
        - line_items: lignes Stripe (price_data/quantity)
        - mode: généralement "payment"
        - success_url / cancel_url: URLs de redirection ({CHECKOUT_SESSION_ID} substitué par Stripe)
        - metadata: ex {"bookingId": "...", "bookingName": "..."}
        Retour: dict session (ex: {"id": "cs_test_...", "url": "https://..."})
        """
        require_stripe(self._api_key)
        try:
            session = stripe.checkout.Session.create(
                payment_method_types=["card"],
                line_items=line_items,
                mode=mode,
                customer_email=customer_email,
                metadata=metadata,
                success_url=success_url,
                cancel_url=cancel_url,
            )
        except stripe.StripeError as e:
            logger.exception("payments.stripe_client.create_session failed booking_id=%s", metadata.get("bookingId"))
            raise PaymentProviderError("Stripe session creation failed") from e
        return _as_dict(session)

    def retrieve_session(self, session_id: str) -> Dict[str, Any]:
        """
        Récupère une session Stripe Checkout par son identifiant.
        Retour: dict incluant payment_status, payment_intent, amount_total, currency, customer_email, metadata.
        """
        require_stripe(self._api_key)
        try:
            session = stripe.checkout.Session.retrieve(session_id)
        except stripe.StripeError as e:
            logger.exception("payments.stripe_client.retrieve_session failed session_id=%s", session_id)
            raise PaymentProviderError("Stripe session lookup failed") from e
        return _as_dict(session)
