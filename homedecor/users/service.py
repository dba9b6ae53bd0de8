"""Couche service du domaine Utilisateurs.
Le rôle est fourni/lu tel quel (pas d'authentification dans ce backend).
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from homedecor.errors import ProcessingFailed
from .repository import UserRepository

DEFAULT_ROLE = "user"


def register_user(repo: UserRepository, name: Optional[str], email: str, photo_url: Optional[str]) -> Dict[str, Any]:
    """Crée le profil si l'email est inconnu.
    - Email déjà présent: renvoie {"message": "User already exists"} sans écrire.
    - Sinon: insère {name, email, photo_url, role='user', created_at} et renvoie la ligne créée.
    """
    if repo.get_user_by_email(email):
        return {"message": "User already exists"}
    created = repo.create_user({
        "name": name,
        "email": email,
        "photo_url": photo_url,
        "role": DEFAULT_ROLE,
        "created_at": datetime.now(timezone.utc).isoformat(),
    })
    if not created:
        raise ProcessingFailed("Failed to create user")
    return created


def role_of(repo: UserRepository, email: str) -> str:
    user = repo.get_user_by_email(email)
    return (user or {}).get("role") or DEFAULT_ROLE
