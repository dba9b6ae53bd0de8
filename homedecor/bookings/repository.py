from typing import Any, Dict, List, Optional
import logging

from homedecor.infra.gateway import PersistenceGateway, first_row, rows_of

logger = logging.getLogger(__name__)

PAID = "Paid"
PENDING = "pending"


# module homedecor.bookings.repository
class BookingRepository:
    """Accès à la table bookings.
    Les méthodes CRUD renvoient des valeurs neutres en cas d'erreur (journalisée);
    mark_paid laisse remonter l'exception pour le flux de paiement.
    """

    def __init__(self, gateway: PersistenceGateway):
        self._gateway = gateway

    def list_bookings(self, email: Optional[str] = None) -> List[dict]:
        try:
            query = self._gateway.bookings().select("*")
            if email:
                query = query.eq("email", email)
            res = query.order("created_at", desc=True).execute()
            return rows_of(res)
        except Exception:
            logger.exception("bookings.repository.list_bookings failed email=%s", email)
            return []

    def get_booking(self, booking_id: str) -> Optional[dict]:
        if not booking_id:
            return None
        try:
            res = self._gateway.bookings().select("*").eq("id", booking_id).limit(1).execute()
            return first_row(res)
        except Exception:
            logger.exception("bookings.repository.get_booking failed id=%s", booking_id)
            return None

    def create_booking(self, data: Dict[str, Any]) -> Optional[dict]:
        try:
            res = self._gateway.bookings().insert(data).execute()
            return first_row(res) or {"status": "ok"}
        except Exception:
            logger.exception("bookings.repository.create_booking failed email=%s", data.get("email"))
            return None

    def update_booking(self, booking_id: str, data: Dict[str, Any]) -> Optional[List[dict]]:
        """Met à jour les champs fournis; renvoie les lignes modifiées ([] si introuvable, None en erreur)."""
        try:
            res = self._gateway.bookings().update(data).eq("id", booking_id).execute()
            return rows_of(res)
        except Exception:
            logger.exception("bookings.repository.update_booking failed id=%s data=%s", booking_id, data)
            return None

    def delete_booking(self, booking_id: str) -> Optional[int]:
        try:
            res = self._gateway.bookings().delete().eq("id", booking_id).execute()
            return len(rows_of(res))
        except Exception:
            logger.exception("bookings.repository.delete_booking failed id=%s", booking_id)
            return None

    def mark_paid(self, booking_id: str, tracking_id: str) -> int:
        """Passe la réservation en 'Paid' avec son code de suivi (écriture inconditionnelle).
        Retourne le nombre de lignes modifiées; les erreurs Supabase remontent à l'appelant.
        """
        res = (
            self._gateway.bookings()
            .update({"status": PAID, "tracking_id": tracking_id})
            .eq("id", booking_id)
            .execute()
        )
        return len(rows_of(res))
