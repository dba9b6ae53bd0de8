# module homedecor.bookings.views

"""Endpoints des réservations.
- router: côté client (création, liste par email, détail, modification, suppression).
- admin_router: vue admin enrichie, changement de statut/décorateur, marquage manuel 'Paid'.
Les corps JSON gardent les clés camelCase du front; les colonnes en base sont en snake_case.
"""
from typing import Optional, Union

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from homedecor.deps import get_booking_repository, get_user_repository
from homedecor.users.repository import UserRepository
from .repository import BookingRepository
from . import service as bookings_service

router = APIRouter(tags=["Bookings API"])
admin_router = APIRouter(prefix="/admin/bookings", tags=["Admin Bookings API"])


class BookingCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    service_id: Optional[str] = Field(default=None, alias="serviceId")
    service_name: Optional[str] = Field(default=None, alias="serviceName")
    cost: Optional[Union[float, str]] = None
    booking_date: Optional[str] = Field(default=None, alias="bookingDate")
    location: Optional[str] = None
    user_name: Optional[str] = Field(default=None, alias="userName")


class BookingUpdateRequest(BaseModel):
    bookingDate: Optional[str] = None
    location: Optional[str] = None
    assignedDecorator: Optional[str] = None


class AdminBookingUpdateRequest(BaseModel):
    status: Optional[str] = None
    assignedDecorator: Optional[str] = None


@router.post("/bookings")
def create_booking(body: BookingCreateRequest, repo: BookingRepository = Depends(get_booking_repository)):
    """Crée une réservation en statut 'pending' (created_at posé côté serveur)."""
    return bookings_service.create_booking(repo, body.model_dump())


@router.get("/bookings")
def list_bookings(email: Optional[str] = Query(default=None), repo: BookingRepository = Depends(get_booking_repository)):
    return repo.list_bookings(email=email)


@router.get("/booking/{booking_id}")
def get_booking(booking_id: str, repo: BookingRepository = Depends(get_booking_repository)):
    return bookings_service.get_booking(repo, booking_id)


@router.delete("/bookings/{booking_id}")
def delete_booking(booking_id: str, repo: BookingRepository = Depends(get_booking_repository)):
    deleted = bookings_service.delete_booking(repo, booking_id)
    return {"success": True, "deleted": deleted}


@router.patch("/bookings/{booking_id}")
def update_booking(booking_id: str, body: BookingUpdateRequest, repo: BookingRepository = Depends(get_booking_repository)):
    return bookings_service.update_booking_details(
        repo,
        booking_id,
        booking_date=body.bookingDate,
        location=body.location,
        assigned_decorator=body.assignedDecorator,
    )


@admin_router.get("")
def admin_list_bookings(
    bookings: BookingRepository = Depends(get_booking_repository),
    users: UserRepository = Depends(get_user_repository),
):
    """Toutes les réservations avec user_name, user_email et decorator_name."""
    return bookings_service.admin_list_bookings(bookings, users)


@admin_router.patch("/paid/{booking_id}")
def admin_mark_paid(booking_id: str, repo: BookingRepository = Depends(get_booking_repository)):
    return bookings_service.admin_mark_paid(repo, booking_id)


@admin_router.patch("/{booking_id}")
def admin_update_booking(booking_id: str, body: AdminBookingUpdateRequest, repo: BookingRepository = Depends(get_booking_repository)):
    return bookings_service.admin_update_booking(
        repo,
        booking_id,
        status=body.status,
        assigned_decorator=body.assignedDecorator,
    )
