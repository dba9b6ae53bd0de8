# module homedecor.users.views
"""Endpoints API des utilisateurs.
- Enregistrement idempotent par email (POST /users).
- Lecture du rôle (GET /users/{email}/role) et promotion/rétrogradation admin.
Le rôle est de confiance côté client: aucune vérification d'identité ici.
"""
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, EmailStr

from homedecor.deps import get_user_repository
from homedecor.errors import NotFound, ProcessingFailed
from .repository import UserRepository
from .service import register_user, role_of

router = APIRouter(tags=["Users API"])


class UserCreateRequest(BaseModel):
    email: EmailStr
    name: Optional[str] = None
    photoURL: Optional[str] = None


@router.post("/users")
def create_user(body: UserCreateRequest, repo: UserRepository = Depends(get_user_repository)):
    return register_user(repo, name=body.name, email=body.email, photo_url=body.photoURL)


@router.get("/users")
def list_users(repo: UserRepository = Depends(get_user_repository)):
    return repo.list_users()


@router.get("/users/{email}/role")
def get_user_role(email: str, repo: UserRepository = Depends(get_user_repository)):
    return {"role": role_of(repo, email)}


def _set_role(repo: UserRepository, user_id: str, role: str):
    modified = repo.set_role(user_id, role)
    if modified is None:
        raise ProcessingFailed("Failed to update user role")
    if not modified:
        raise NotFound("User not found")
    return {"success": True, "modified": modified}


@router.patch("/users/admin/{user_id}")
def make_admin(user_id: str, repo: UserRepository = Depends(get_user_repository)):
    return _set_role(repo, user_id, "admin")


@router.patch("/users/user/{user_id}")
def make_user(user_id: str, repo: UserRepository = Depends(get_user_repository)):
    """Rétrograde un admin en simple utilisateur."""
    return _set_role(repo, user_id, "user")
