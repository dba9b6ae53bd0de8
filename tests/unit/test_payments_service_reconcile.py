from datetime import datetime, timezone

import pytest

from homedecor.bookings.repository import BookingRepository
from homedecor.errors import BadRequest, PaymentNotCompleted, PaymentProviderError, ProcessingFailed
from homedecor.infra.gateway import PersistenceGateway
from homedecor.payments.repository import PaymentRepository
from homedecor.payments.service import PaymentReconciler

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def booking(db):
    return db.seed("bookings", {"id": "b1", "email": "a@x.com", "service_name": "Wedding Stage", "status": "pending"})[0]


@pytest.fixture()
def reconciler(db, provider):
    gateway = PersistenceGateway(lambda: db)
    codes = iter(["TRK-AAAA1111", "TRK-BBBB2222", "TRK-CCCC3333"])
    return PaymentReconciler(
        provider,
        BookingRepository(gateway),
        PaymentRepository(gateway),
        tracking_id_factory=lambda: next(codes),
        clock=lambda: FIXED_NOW,
    )


def _paid_session(provider, session_id="cs_1", booking_id="b1", payment_intent="pi_123"):
    return provider.add_session(
        session_id,
        payment_status="paid",
        payment_intent=payment_intent,
        amount_total=15000,
        currency="usd",
        customer_email="a@x.com",
        metadata={"bookingId": booking_id, "bookingName": "Wedding Stage"},
    )


def test_confirm_records_payment_and_marks_booking_paid(db, provider, reconciler, booking):
    _paid_session(provider)

    conf = reconciler.confirm("cs_1")

    assert conf.success is True
    assert conf.transactionId == "pi_123"
    assert conf.trackingId == "TRK-AAAA1111"
    assert conf.price == 150
    assert conf.services == "Wedding Stage"
    assert conf.date == FIXED_NOW.isoformat()

    payments = db.tables["payments"]
    assert len(payments) == 1
    assert payments[0]["transaction_id"] == "pi_123"
    assert payments[0]["booking_id"] == "b1"
    assert payments[0]["customer_email"] == "a@x.com"

    stored = db.tables["bookings"][0]
    assert stored["status"] == "Paid"
    assert stored["tracking_id"] == "TRK-AAAA1111"


def test_confirm_replay_is_idempotent(db, provider, reconciler, booking):
    _paid_session(provider)

    first = reconciler.confirm("cs_1")
    second = reconciler.confirm("cs_1")

    assert len(db.tables["payments"]) == 1
    assert second.transactionId == first.transactionId
    assert second.trackingId == first.trackingId == "TRK-AAAA1111"
    assert db.tables["bookings"][0]["tracking_id"] == "TRK-AAAA1111"


def test_confirm_not_paid_writes_nothing(db, provider, reconciler, booking):
    provider.add_session("cs_open", payment_status="unpaid", metadata={"bookingId": "b1"})

    with pytest.raises(PaymentNotCompleted) as exc:
        reconciler.confirm("cs_open")

    assert exc.value.status_code == 400
    assert "payments" not in db.tables
    assert db.tables["bookings"][0]["status"] == "pending"


@pytest.mark.parametrize("session_id", [None, "", "   "])
def test_confirm_requires_session_id(reconciler, session_id):
    with pytest.raises(BadRequest, match="Session ID is required"):
        reconciler.confirm(session_id)


def test_confirm_unknown_session_is_provider_error(db, reconciler):
    with pytest.raises(PaymentProviderError):
        reconciler.confirm("cs_unknown")
    assert db.calls == []


def test_confirm_accepts_expanded_payment_intent(db, provider, reconciler, booking):
    _paid_session(provider, payment_intent={"id": "pi_expanded", "object": "payment_intent"})
    conf = reconciler.confirm("cs_1")
    assert conf.transactionId == "pi_expanded"


def test_confirm_without_booking_reference_fails(db, provider, reconciler):
    provider.add_session("cs_bad", payment_status="paid", payment_intent="pi_9", amount_total=100, metadata={})
    with pytest.raises(ProcessingFailed):
        reconciler.confirm("cs_bad")
    assert "payments" not in db.tables


def test_confirm_ledger_failure_leaves_booking_untouched(db, provider, reconciler, booking):
    _paid_session(provider)
    db.fail("payments", "upsert")

    with pytest.raises(ProcessingFailed) as exc:
        reconciler.confirm("cs_1")

    assert exc.value.status_code == 500
    assert db.tables["bookings"][0]["status"] == "pending"


def test_confirm_retry_after_booking_update_failure(db, provider, reconciler, booking):
    _paid_session(provider)
    db.fail("bookings", "update")
    with pytest.raises(ProcessingFailed):
        reconciler.confirm("cs_1")
    assert len(db.tables["payments"]) == 1

    db.failures.clear()
    conf = reconciler.confirm("cs_1")

    # Le code de suivi stocké au premier passage est réutilisé
    assert conf.trackingId == "TRK-AAAA1111"
    assert db.tables["bookings"][0]["status"] == "Paid"
    assert db.tables["bookings"][0]["tracking_id"] == "TRK-AAAA1111"
    assert len(db.tables["payments"]) == 1


def test_confirm_unknown_booking_still_records_payment(db, provider, reconciler):
    _paid_session(provider, booking_id="missing")
    conf = reconciler.confirm("cs_1")
    assert conf.transactionId == "pi_123"
    assert len(db.tables["payments"]) == 1
