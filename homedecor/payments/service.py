"""
Cas d'usage 'payments': orchestre le fournisseur Stripe et les repositories.

- CheckoutInitiator: construit la session Checkout d'une réservation et renvoie l'URL Stripe.
- PaymentReconciler: au retour de Stripe, vérifie le paiement, inscrit le paiement au registre
  (une seule ligne par transaction) puis passe la réservation en 'Paid'.

Ordre des écritures de la confirmation: registre puis réservation. Les deux écritures ne sont
pas atomiques; si le processus tombe entre les deux, le paiement est inscrit mais la réservation
reste non payée jusqu'à un nouvel appel avec le même session_id, qui relit la même ligne et
réapplique le même code de suivi.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from homedecor.config import (
    CHECKOUT_CANCEL_PATH,
    CHECKOUT_CURRENCY,
    CHECKOUT_SUCCESS_PATH,
    SITE_DOMAIN,
)
from homedecor.errors import (
    AppError,
    BadRequest,
    PaymentNotCompleted,
    PaymentProviderError,
    ProcessingFailed,
)
from homedecor.bookings.repository import BookingRepository
from .models import CheckoutRequest, PaymentConfirmation
from .repository import PaymentRepository
from .tracking import generate_tracking_id

logger = logging.getLogger(__name__)

PAID_STATUS = "paid"


def checkout_urls(site_domain: str = SITE_DOMAIN) -> tuple:
    """
    URLs de redirection Stripe:
    - success_url: SITE_DOMAIN + CHECKOUT_SUCCESS_PATH + session_id={CHECKOUT_SESSION_ID}
    - cancel_url: SITE_DOMAIN + CHECKOUT_CANCEL_PATH
    """
    base = site_domain.rstrip("/")
    sep = "&" if "?" in CHECKOUT_SUCCESS_PATH else "?"
    success_url = f"{base}{CHECKOUT_SUCCESS_PATH}{sep}session_id={{CHECKOUT_SESSION_ID}}"
    cancel_url = f"{base}{CHECKOUT_CANCEL_PATH}"
    return success_url, cancel_url


class CheckoutInitiator:
    def __init__(
        self,
        provider,
        success_url: Optional[str] = None,
        cancel_url: Optional[str] = None,
        currency: str = CHECKOUT_CURRENCY,
    ):
        default_success, default_cancel = checkout_urls()
        self._provider = provider
        self._success_url = success_url or default_success
        self._cancel_url = cancel_url or default_cancel
        self._currency = currency

    def line_items(self, req: CheckoutRequest) -> list:
        """Une seule ligne: quantité 1, montant = cost x 100 (unités mineures)."""
        return [
            {
                "price_data": {
                    "currency": self._currency,
                    "unit_amount": req.unit_amount,
                    "product_data": {"name": req.bookingName},
                },
                "quantity": 1,
            }
        ]

    def start(self, req: CheckoutRequest) -> str:
        """
        Crée la session Checkout de la réservation et renvoie l'URL de paiement Stripe.
        Erreurs: PaymentProviderError si Stripe échoue ou ne renvoie pas d'URL.
        """
        session = self._provider.create_session(
            line_items=self.line_items(req),
            mode="payment",
            customer_email=req.bookingEmail,
            metadata={"bookingId": req.bookingId, "bookingName": req.bookingName},
            success_url=self._success_url,
            cancel_url=self._cancel_url,
        )
        url = (session or {}).get("url")
        if not url:
            raise PaymentProviderError("Stripe session creation failed")
        logger.info("payments.checkout session_id=%s booking_id=%s", session.get("id"), req.bookingId)
        return url


def _intent_id(payment_intent: Any) -> Optional[str]:
    # payment_intent peut être un id ou un objet déplié (expand)
    if isinstance(payment_intent, dict):
        return payment_intent.get("id")
    return payment_intent or None


class PaymentReconciler:
    def __init__(
        self,
        provider,
        bookings: BookingRepository,
        payments: PaymentRepository,
        tracking_id_factory: Callable[[], str] = generate_tracking_id,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._provider = provider
        self._bookings = bookings
        self._payments = payments
        self._tracking_id_factory = tracking_id_factory
        self._clock = clock

    def confirm(self, session_id: Optional[str]) -> PaymentConfirmation:
        """
        Confirme une session Checkout après redirection.
        1) session_id requis (BadRequest), session lue chez Stripe (PaymentProviderError)
        2) payment_status != 'paid' => PaymentNotCompleted, aucune écriture
        3) inscription du paiement (insert-if-absent sur transaction_id) puis réservation => 'Paid'
        Toute autre erreur => ProcessingFailed.
        """
        session_id = (session_id or "").strip()
        if not session_id:
            raise BadRequest("Session ID is required")

        session = self._provider.retrieve_session(session_id)
        payment_status = session.get("payment_status") or ""
        if payment_status != PAID_STATUS:
            logger.info("payments.reconcile not paid session_id=%s payment_status=%s", session_id, payment_status)
            raise PaymentNotCompleted("Payment not completed")

        try:
            return self._record(session)
        except AppError:
            raise
        except Exception as e:
            logger.exception("payments.reconcile failed session_id=%s", session_id)
            raise ProcessingFailed() from e

    def _record(self, session: Dict[str, Any]) -> PaymentConfirmation:
        metadata = session.get("metadata") or {}
        booking_id = metadata.get("bookingId")
        transaction_id = _intent_id(session.get("payment_intent"))
        if not booking_id or not transaction_id:
            logger.error("payments.reconcile incomplete session id=%s booking_id=%s transaction_id=%s",
                         session.get("id"), booking_id, transaction_id)
            raise ProcessingFailed("Payment session is missing booking or transaction reference")

        payment = self._payments.insert_if_absent({
            "transaction_id": transaction_id,
            "price": (session.get("amount_total") or 0) / 100,
            "currency": session.get("currency"),
            "customer_email": session.get("customer_email"),
            "booking_id": booking_id,
            "service_name": metadata.get("bookingName"),
            "payment_status": session.get("payment_status"),
            "tracking_id": self._tracking_id_factory(),
            "paid_at": self._clock().isoformat(),
        })

        tracking_id = payment["tracking_id"]
        updated = self._bookings.mark_paid(booking_id, tracking_id)
        if not updated:
            logger.warning("payments.reconcile booking not found booking_id=%s transaction_id=%s", booking_id, transaction_id)
        logger.info("payments.reconcile transaction_id=%s booking_id=%s tracking_id=%s", transaction_id, booking_id, tracking_id)

        return PaymentConfirmation(
            transactionId=payment["transaction_id"],
            trackingId=tracking_id,
            price=float(payment.get("price") or 0),
            date=str(payment.get("paid_at")) if payment.get("paid_at") is not None else None,
            services=payment.get("service_name"),
        )
