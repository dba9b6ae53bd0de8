"""
Passerelle de persistance: accès aux tables Supabase du backend.
- Aucune logique métier: expose seulement les noms de tables et des constructeurs de requêtes.
- Le client Supabase est résolu au premier accès (l'app démarre sans base configurée).
"""
from typing import Any, Callable, Optional

from homedecor.infra.supabase_client import get_service_supabase

USERS = "users"
SERVICES = "services"
HOME_SERVICES = "homeservice"
BOOKINGS = "bookings"
PAYMENTS = "payments"
REVIEWS = "reviews"


def rows_of(res) -> list:
    """Liste des lignes d'une réponse PostgREST (jamais None)."""
    rows = getattr(res, "data", None) or []
    if isinstance(rows, dict):
        return [rows]
    return rows if isinstance(rows, list) else []


def first_row(res) -> Optional[dict]:
    rows = rows_of(res)
    return rows[0] if rows else None


class PersistenceGateway:
    def __init__(self, client_factory: Callable[[], Any] = get_service_supabase):
        self._client_factory = client_factory
        self._client: Optional[Any] = None

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    def table(self, name: str):
        return self.client.table(name)

    def users(self):
        return self.table(USERS)

    def services(self):
        return self.table(SERVICES)

    def home_services(self):
        return self.table(HOME_SERVICES)

    def bookings(self):
        return self.table(BOOKINGS)

    def payments(self):
        return self.table(PAYMENTS)

    def reviews(self):
        return self.table(REVIEWS)
