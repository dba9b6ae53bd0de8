from typing import Any, Dict, List, Optional
import logging

from homedecor.infra.gateway import PersistenceGateway, first_row, rows_of

logger = logging.getLogger(__name__)


class ReviewRepository:
    def __init__(self, gateway: PersistenceGateway):
        self._gateway = gateway

    def list_reviews(self, service_id: Optional[str] = None) -> List[dict]:
        """Avis les plus récents d'abord, éventuellement filtrés sur une prestation."""
        try:
            query = self._gateway.reviews().select("*")
            if service_id:
                query = query.eq("service_id", service_id)
            res = query.order("created_at", desc=True).execute()
            return rows_of(res)
        except Exception:
            logger.exception("reviews.repository.list_reviews failed service_id=%s", service_id)
            return []

    def create_review(self, data: Dict[str, Any]) -> Optional[dict]:
        try:
            res = self._gateway.reviews().insert(data).execute()
            return first_row(res) or {"status": "ok"}
        except Exception:
            logger.exception("reviews.repository.create_review failed service_id=%s", data.get("service_id"))
            return None

    def delete_review(self, review_id: str) -> Optional[int]:
        try:
            res = self._gateway.reviews().delete().eq("id", review_id).execute()
            return len(rows_of(res))
        except Exception:
            logger.exception("reviews.repository.delete_review failed id=%s", review_id)
            return None
