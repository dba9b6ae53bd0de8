"""Endpoints API des avis clients.
- Création: serviceId, userEmail et rating requis (400 sinon), comment par défaut "".
- Listing global et par prestation, triés du plus récent au plus ancien.
"""
import math
from datetime import datetime, timezone
from typing import Optional, Union

from fastapi import APIRouter, Depends
from pydantic import BaseModel, model_validator

from homedecor.deps import get_review_repository
from homedecor.errors import NotFound, ProcessingFailed
from .repository import ReviewRepository

router = APIRouter(prefix="/reviews", tags=["Reviews API"])


class ReviewCreateRequest(BaseModel):
    serviceId: Optional[Union[str, int]] = None
    userEmail: Optional[str] = None
    userName: Optional[str] = None
    rating: Optional[Union[float, str]] = None
    comment: Optional[str] = None

    @model_validator(mode="after")
    def required_fields(self):
        self.serviceId = str(self.serviceId if self.serviceId is not None else "").strip()
        self.userEmail = (self.userEmail or "").strip()
        # rating à 0 compte comme absent
        if not self.serviceId or not self.userEmail or not self.rating:
            raise ValueError("Service, user and rating are required")
        try:
            rating = float(str(self.rating).strip())
        except ValueError:
            raise ValueError("Rating must be a number")
        if not math.isfinite(rating):
            raise ValueError("Rating must be a number")
        self.rating = rating
        return self


@router.post("")
def create_review(body: ReviewCreateRequest, repo: ReviewRepository = Depends(get_review_repository)):
    created = repo.create_review({
        "service_id": body.serviceId,
        "user_email": body.userEmail,
        "user_name": body.userName,
        "rating": body.rating,
        "comment": body.comment or "",
        "created_at": datetime.now(timezone.utc).isoformat(),
    })
    if not created:
        raise ProcessingFailed("Failed to create review")
    return created


@router.get("")
def list_reviews(repo: ReviewRepository = Depends(get_review_repository)):
    return repo.list_reviews()


@router.get("/service/{service_id}")
def list_service_reviews(service_id: str, repo: ReviewRepository = Depends(get_review_repository)):
    return repo.list_reviews(service_id=service_id)


@router.delete("/{review_id}")
def delete_review(review_id: str, repo: ReviewRepository = Depends(get_review_repository)):
    deleted = repo.delete_review(review_id)
    if deleted is None:
        raise ProcessingFailed("Failed to delete review")
    if not deleted:
        raise NotFound("Review not found")
    return {"success": True, "deleted": deleted}
