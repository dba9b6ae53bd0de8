# module homedecor.decorators.service
"""Comptes décorateurs: ce sont des lignes de la table users avec role='decorator'."""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from homedecor.errors import BadRequest, NotFound, ProcessingFailed
from homedecor.users.repository import UserRepository

DECORATOR_ROLE = "decorator"


def list_decorators(repo: UserRepository) -> List[dict]:
    return repo.list_by_role(DECORATOR_ROLE)


def create_decorator(repo: UserRepository, name: Optional[str], email: str) -> Dict[str, Any]:
    if repo.get_user_by_email(email):
        raise BadRequest("User already exists")
    created = repo.create_user({
        "name": name,
        "email": email,
        "role": DECORATOR_ROLE,
        "status": "active",
        "created_at": datetime.now(timezone.utc).isoformat(),
    })
    if not created:
        raise ProcessingFailed("Failed to create decorator")
    return created


def set_decorator_status(repo: UserRepository, decorator_id: str, status: str) -> dict:
    updated = repo.update_with_role(decorator_id, DECORATOR_ROLE, {"status": status})
    if updated is None:
        raise ProcessingFailed("Failed to update decorator")
    if not updated:
        raise NotFound("Decorator not found")
    return updated[0]


def delete_decorator(repo: UserRepository, decorator_id: str) -> int:
    deleted = repo.delete_with_role(decorator_id, DECORATOR_ROLE)
    if deleted is None:
        raise ProcessingFailed("Failed to delete decorator")
    if not deleted:
        raise NotFound("Decorator not found")
    return deleted
