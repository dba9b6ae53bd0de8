"""Couche d’accès aux données (Supabase) pour le domaine Utilisateurs.
Contient les lectures/écritures sur la table users (clients, admins, décorateurs).
Les exceptions sont « catchées » et transformées en valeurs neutres ([], None, False) afin de ne pas casser l’UX.
"""
from typing import Any, Dict, List, Optional
import logging

from homedecor.infra.gateway import PersistenceGateway, first_row, rows_of

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, gateway: PersistenceGateway):
        self._gateway = gateway

    def list_users(self) -> List[dict]:
        try:
            res = self._gateway.users().select("*").order("created_at", desc=True).execute()
            return rows_of(res)
        except Exception:
            logger.exception("users.repository.list_users failed")
            return []

    def get_user_by_email(self, email: str) -> Optional[dict]:
        """Récupère un utilisateur par email.
        - Retour: dict utilisateur ou None si introuvable/erreur
        """
        if not email:
            return None
        try:
            res = self._gateway.users().select("*").eq("email", email).limit(1).execute()
            return first_row(res)
        except Exception:
            logger.exception("users.repository.get_user_by_email failed email=%s", email)
            return None

    def get_users_by_emails(self, emails: List[str]) -> Dict[str, dict]:
        """Retourne {email: user} pour une liste d'emails (jointure côté application)."""
        wanted = sorted({e for e in emails if e})
        if not wanted:
            return {}
        try:
            res = self._gateway.users().select("id, name, email, role").in_("email", wanted).execute()
            return {u.get("email"): u for u in rows_of(res)}
        except Exception:
            logger.exception("users.repository.get_users_by_emails failed count=%s", len(wanted))
            return {}

    def create_user(self, data: Dict[str, Any]) -> Optional[dict]:
        try:
            res = self._gateway.users().insert(data).execute()
            return first_row(res) or {"status": "ok"}
        except Exception:
            logger.exception("users.repository.create_user failed email=%s", data.get("email"))
            return None

    def set_role(self, user_id: str, role: str) -> Optional[int]:
        """Change le rôle et renvoie le nombre de lignes modifiées (None en cas d'erreur)."""
        try:
            res = self._gateway.users().update({"role": role}).eq("id", user_id).execute()
            return len(rows_of(res))
        except Exception:
            logger.exception("users.repository.set_role failed id=%s role=%s", user_id, role)
            return None

    def list_by_role(self, role: str) -> List[dict]:
        try:
            res = self._gateway.users().select("*").eq("role", role).order("created_at", desc=True).execute()
            return rows_of(res)
        except Exception:
            logger.exception("users.repository.list_by_role failed role=%s", role)
            return []

    def update_with_role(self, user_id: str, role: str, data: Dict[str, Any]) -> Optional[List[dict]]:
        """Met à jour un utilisateur uniquement s'il porte le rôle donné (ex: décorateur).
        Renvoie les lignes modifiées ([] si aucune ne correspond, None en erreur).
        """
        try:
            res = self._gateway.users().update(data).eq("id", user_id).eq("role", role).execute()
            return rows_of(res)
        except Exception:
            logger.exception("users.repository.update_with_role failed id=%s role=%s", user_id, role)
            return None

    def delete_with_role(self, user_id: str, role: str) -> Optional[int]:
        try:
            res = self._gateway.users().delete().eq("id", user_id).eq("role", role).execute()
            return len(rows_of(res))
        except Exception:
            logger.exception("users.repository.delete_with_role failed id=%s role=%s", user_id, role)
            return None
