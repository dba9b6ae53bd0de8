"""Couche service des réservations.
Rôles:
- Créer une réservation « pending » à partir du formulaire client.
- Mettre à jour date/lieu/décorateur côté client, statut/décorateur côté admin.
- Vue admin: enrichit chaque réservation avec le nom du client et du décorateur (table users).
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from homedecor.errors import BadRequest, NotFound, ProcessingFailed
from homedecor.users.repository import UserRepository
from .repository import BookingRepository, PAID, PENDING


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def create_booking(repo: BookingRepository, data: Dict[str, Any]) -> dict:
    row = {k: v for k, v in data.items() if v is not None}
    row.update({"status": PENDING, "created_at": _now()})
    created = repo.create_booking(row)
    if not created:
        raise ProcessingFailed("Failed to create booking")
    return created


def get_booking(repo: BookingRepository, booking_id: str) -> dict:
    booking = repo.get_booking(booking_id)
    if not booking:
        raise NotFound("Booking not found")
    return booking


def delete_booking(repo: BookingRepository, booking_id: str) -> int:
    deleted = repo.delete_booking(booking_id)
    if deleted is None:
        raise ProcessingFailed("Failed to delete booking")
    if not deleted:
        raise NotFound("Booking not found")
    return deleted


def _apply_update(repo: BookingRepository, booking_id: str, fields: Dict[str, Any]) -> dict:
    updated = repo.update_booking(booking_id, fields)
    if updated is None:
        raise ProcessingFailed("Failed to update booking")
    if not updated:
        raise NotFound("Booking not found")
    return updated[0]


def update_booking_details(
    repo: BookingRepository,
    booking_id: str,
    booking_date: Optional[str] = None,
    location: Optional[str] = None,
    assigned_decorator: Optional[str] = None,
) -> dict:
    """Mise à jour côté client: seuls les champs renseignés sont écrits, plus updated_at."""
    fields: Dict[str, Any] = {}
    if booking_date:
        fields["booking_date"] = booking_date
    if location:
        fields["location"] = location
    if assigned_decorator:
        fields["assigned_decorator"] = assigned_decorator
    fields["updated_at"] = _now()
    return _apply_update(repo, booking_id, fields)


def admin_update_booking(
    repo: BookingRepository,
    booking_id: str,
    status: Optional[str] = None,
    assigned_decorator: Optional[str] = None,
) -> dict:
    fields: Dict[str, Any] = {}
    if status:
        fields["status"] = status
    if assigned_decorator:
        fields["assigned_decorator"] = assigned_decorator
    if not fields:
        raise BadRequest("Nothing to update")
    return _apply_update(repo, booking_id, fields)


def admin_mark_paid(repo: BookingRepository, booking_id: str) -> dict:
    """Marquage manuel 'Paid' par un admin (paiement hors Stripe)."""
    return _apply_update(repo, booking_id, {"status": PAID, "paid_at": _now()})


def admin_list_bookings(bookings: BookingRepository, users: UserRepository) -> List[dict]:
    rows = bookings.list_bookings()
    emails = [b.get("email") for b in rows] + [b.get("assigned_decorator") for b in rows]
    users_by_email = users.get_users_by_emails([e for e in emails if e])

    enriched: List[dict] = []
    for b in rows:
        customer = users_by_email.get(b.get("email")) or {}
        decorator = users_by_email.get(b.get("assigned_decorator")) if b.get("assigned_decorator") else None
        enriched.append({
            **b,
            "user_name": customer.get("name") or "",
            "user_email": customer.get("email") or b.get("email"),
            "decorator_name": (decorator or {}).get("name") or "",
        })
    return enriched
