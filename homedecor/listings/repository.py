from typing import Any, Dict, List, Optional
import logging

from homedecor.infra.gateway import PersistenceGateway, first_row, rows_of

logger = logging.getLogger(__name__)


# module homedecor.listings.repository
class ListingRepository:
    """Prestations de décoration.
    - services: catalogue géré par l'admin (CRUD).
    - homeservice: vitrine publique de la page d'accueil (lecture seule).
    """

    def __init__(self, gateway: PersistenceGateway):
        self._gateway = gateway

    def list_services(self) -> List[dict]:
        try:
            res = self._gateway.services().select("*").order("created_at", desc=True).execute()
            return rows_of(res)
        except Exception:
            logger.exception("listings.repository.list_services failed")
            return []

    def create_service(self, data: Dict[str, Any]) -> Optional[dict]:
        try:
            res = self._gateway.services().insert(data).execute()
            return first_row(res) or {"status": "ok"}
        except Exception:
            logger.exception("listings.repository.create_service failed data=%s", data)
            return None

    def update_service(self, service_id: str, data: Dict[str, Any]) -> Optional[List[dict]]:
        try:
            res = self._gateway.services().update(data).eq("id", service_id).execute()
            return rows_of(res)
        except Exception:
            logger.exception("listings.repository.update_service failed id=%s data=%s", service_id, data)
            return None

    def delete_service(self, service_id: str) -> Optional[int]:
        try:
            res = self._gateway.services().delete().eq("id", service_id).execute()
            return len(rows_of(res))
        except Exception:
            logger.exception("listings.repository.delete_service failed id=%s", service_id)
            return None

    def list_home_services(self) -> List[dict]:
        try:
            res = self._gateway.home_services().select("*").execute()
            return rows_of(res)
        except Exception:
            logger.exception("listings.repository.list_home_services failed")
            return []

    def get_home_service(self, service_id: str) -> Optional[dict]:
        if not service_id:
            return None
        try:
            res = self._gateway.home_services().select("*").eq("id", service_id).limit(1).execute()
            return first_row(res)
        except Exception:
            logger.exception("listings.repository.get_home_service failed id=%s", service_id)
            return None
