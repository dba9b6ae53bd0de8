"""Codes de suivi remis au client après paiement (ex: TRK-7QX2M9AB)."""
import secrets
import string

from homedecor.config import TRACKING_ID_PREFIX

BASE36_UPPER = string.digits + string.ascii_uppercase
TRACKING_ID_LENGTH = 8


def generate_tracking_id(prefix: str = TRACKING_ID_PREFIX) -> str:
    # Collisions non dédupliquées: 36**8 combinaisons
    return prefix + "".join(secrets.choice(BASE36_UPPER) for _ in range(TRACKING_ID_LENGTH))
