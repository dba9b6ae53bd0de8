"""Endpoints admin pour la gestion des décorateurs (prestataires).
- Création refusée (400) si l'email existe déjà dans users.
- Mise à jour/suppression limitées aux lignes role='decorator' (404 sinon).
"""
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, EmailStr, Field

from homedecor.deps import get_user_repository
from homedecor.users.repository import UserRepository
from . import service as decorators_service

router = APIRouter(prefix="/admin/decorators", tags=["Decorators API"])


class DecoratorCreateRequest(BaseModel):
    email: EmailStr
    name: Optional[str] = None


class DecoratorStatusRequest(BaseModel):
    status: str = Field(min_length=1)


@router.get("")
def list_decorators(repo: UserRepository = Depends(get_user_repository)):
    return decorators_service.list_decorators(repo)


@router.post("")
def create_decorator(body: DecoratorCreateRequest, repo: UserRepository = Depends(get_user_repository)):
    return decorators_service.create_decorator(repo, name=body.name, email=body.email)


@router.patch("/{decorator_id}")
def update_decorator(decorator_id: str, body: DecoratorStatusRequest, repo: UserRepository = Depends(get_user_repository)):
    return decorators_service.set_decorator_status(repo, decorator_id, body.status)


@router.delete("/{decorator_id}")
def delete_decorator(decorator_id: str, repo: UserRepository = Depends(get_user_repository)):
    deleted = decorators_service.delete_decorator(repo, decorator_id)
    return {"success": True, "deleted": deleted}
