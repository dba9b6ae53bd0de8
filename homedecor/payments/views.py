import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from homedecor.deps import get_checkout_initiator, get_payment_reconciler, get_payment_repository
from homedecor.utils.rate_limit import optional_rate_limit
from .models import CheckoutRequest, PaymentConfirmation
from .repository import PaymentRepository
from .service import CheckoutInitiator, PaymentReconciler

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Payments API"])


# module homedecor.payments.views
@router.post("/create-checkout-session", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def create_checkout_session(body: CheckoutRequest, initiator: CheckoutInitiator = Depends(get_checkout_initiator)):
    """
    Crée une session Checkout Stripe pour une réservation.
    - Entrée JSON: {bookingId, bookingEmail, bookingName, cost}
    - Sortie: {"url": "<page de paiement Stripe>"}
    - Erreurs: 400 si un champ manque ou si cost n'est pas un montant positif, 502 si Stripe échoue
    """
    return {"url": initiator.start(body)}


@router.patch(
    "/payments-success",
    response_model=PaymentConfirmation,
    dependencies=[Depends(optional_rate_limit(times=20, seconds=60))],
)
def payment_success(
    session_id: Optional[str] = Query(default=None),
    reconciler: PaymentReconciler = Depends(get_payment_reconciler),
):
    """
    Confirmation après redirection Stripe (pas de webhook).
    - Rejouable: un même session_id renvoie toujours la même transaction et le même code de suivi.
    - Erreurs: 400 (session_id manquant, paiement non confirmé), 502 (Stripe), 500 (traitement)
    """
    return reconciler.confirm(session_id)


@router.get("/payments")
def list_payments(email: Optional[str] = Query(default=None), repo: PaymentRepository = Depends(get_payment_repository)):
    return repo.list_payments(email=email)
