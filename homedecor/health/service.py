from typing import Any, Dict
import logging

from homedecor.config import SUPABASE_URL, SUPABASE_SERVICE_KEY
from homedecor.infra.gateway import BOOKINGS, PersistenceGateway

logger = logging.getLogger(__name__)


def health_supabase_info(gateway: PersistenceGateway) -> Dict[str, Any]:
    """Sonde Supabase: configuration présente + requête minimale sur la table bookings."""
    info: Dict[str, Any] = {
        "url_set": bool(SUPABASE_URL),
        "key_set": bool(SUPABASE_SERVICE_KEY),
        "connect_ok": False,
    }
    try:
        gateway.table(BOOKINGS).select("id").limit(1).execute()
        info["connect_ok"] = True
    except Exception as e:
        logger.warning("health.supabase probe failed: %s", e)
        info["error"] = str(e)[:120]
    return info
