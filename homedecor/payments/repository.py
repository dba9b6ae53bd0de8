"""
Accès aux données pour la feature 'payments' (table payments, clé unique transaction_id).
"""
from typing import Any, Dict, List, Optional
import logging

from homedecor.infra.gateway import PersistenceGateway, first_row, rows_of

logger = logging.getLogger(__name__)


# module homedecor.payments.repository
class PaymentRepository:
    def __init__(self, gateway: PersistenceGateway):
        self._gateway = gateway

    def list_payments(self, email: Optional[str] = None) -> List[dict]:
        """Historique des paiements (plus récent d'abord), filtré sur customer_email si fourni."""
        try:
            query = self._gateway.payments().select("*")
            if email:
                query = query.eq("customer_email", email)
            res = query.order("paid_at", desc=True).execute()
            return rows_of(res)
        except Exception:
            logger.exception("payments.repository.list_payments failed email=%s", email)
            return []

    def find_by_transaction_id(self, transaction_id: str) -> Optional[dict]:
        res = (
            self._gateway.payments()
            .select("*")
            .eq("transaction_id", transaction_id)
            .limit(1)
            .execute()
        )
        return first_row(res)

    def insert_if_absent(self, record: Dict[str, Any]) -> dict:
        """
        Insère la ligne si aucune n'existe pour record['transaction_id'], sinon ne touche à rien
        (upsert ignore_duplicates => ON CONFLICT DO NOTHING), puis relit la ligne stockée.
        La ligne retournée fait foi: sur un rejeu, ce sont les valeurs d'origine.
        Les erreurs Supabase remontent à l'appelant.
        """
        transaction_id = record["transaction_id"]
        (
            self._gateway.payments()
            .upsert(record, on_conflict="transaction_id", ignore_duplicates=True)
            .execute()
        )
        stored = self.find_by_transaction_id(transaction_id)
        if not stored:
            raise RuntimeError(f"payment row missing after upsert (transaction_id={transaction_id})")
        return stored
