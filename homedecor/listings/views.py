"""Endpoints des prestations (services de décoration).
- /admin/services: CRUD du catalogue (le corps est libre, created_at ajouté à la création).
- /homeservice: vitrine publique, liste et détail (404 si introuvable).
"""
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from homedecor.deps import get_listing_repository
from homedecor.errors import BadRequest, NotFound, ProcessingFailed
from .repository import ListingRepository

admin_router = APIRouter(prefix="/admin/services", tags=["Services Admin API"])
public_router = APIRouter(prefix="/homeservice", tags=["Home Services API"])


def _clean_payload(body: Dict[str, Any]) -> Dict[str, Any]:
    # id/created_at sont gérés côté serveur
    return {k: v for k, v in (body or {}).items() if k not in ("id", "_id", "created_at")}


@admin_router.get("")
def list_services(repo: ListingRepository = Depends(get_listing_repository)):
    return repo.list_services()


@admin_router.post("")
def create_service(body: Dict[str, Any] = Body(...), repo: ListingRepository = Depends(get_listing_repository)):
    data = _clean_payload(body)
    if not data:
        raise BadRequest("Service data is required")
    data["created_at"] = datetime.now(timezone.utc).isoformat()
    created = repo.create_service(data)
    if not created:
        raise ProcessingFailed("Failed to create service")
    return created


@admin_router.patch("/{service_id}")
def update_service(service_id: str, body: Dict[str, Any] = Body(...), repo: ListingRepository = Depends(get_listing_repository)):
    data = _clean_payload(body)
    if not data:
        raise BadRequest("Nothing to update")
    updated = repo.update_service(service_id, data)
    if updated is None:
        raise ProcessingFailed("Failed to update service")
    if not updated:
        raise NotFound("Service not found")
    return updated[0]


@admin_router.delete("/{service_id}")
def delete_service(service_id: str, repo: ListingRepository = Depends(get_listing_repository)):
    deleted = repo.delete_service(service_id)
    if deleted is None:
        raise ProcessingFailed("Failed to delete service")
    if not deleted:
        raise NotFound("Service not found")
    return {"success": True, "deleted": deleted}


@public_router.get("")
def list_home_services(repo: ListingRepository = Depends(get_listing_repository)):
    return repo.list_home_services()


@public_router.get("/{service_id}")
def get_home_service(service_id: str, repo: ListingRepository = Depends(get_listing_repository)):
    item = repo.get_home_service(service_id)
    if not item:
        raise NotFound("Service not found")
    return item
