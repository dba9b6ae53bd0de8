"""
Modèles d'entrée/sortie du flux de paiement (checkout + confirmation).
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

from pydantic import BaseModel, EmailStr, field_validator


def to_minor_units(cost: Union[str, int, float, Decimal]) -> int:
    """Montant en centimes: '150' -> 15000, 19.99 -> 1999 (arrondi au plus proche)."""
    amount = Decimal(str(cost).strip()) * 100
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class CheckoutRequest(BaseModel):
    bookingId: str
    bookingEmail: EmailStr
    bookingName: str
    cost: Union[str, int, float]

    @field_validator("bookingId", "bookingName")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("cost")
    @classmethod
    def positive_amount(cls, v):
        try:
            amount = Decimal(str(v).strip())
        except InvalidOperation:
            raise ValueError("cost must be a number")
        if not amount.is_finite() or amount <= 0:
            raise ValueError("cost must be greater than zero")
        return v

    @property
    def unit_amount(self) -> int:
        return to_minor_units(self.cost)


class PaymentConfirmation(BaseModel):
    success: bool = True
    transactionId: str
    trackingId: str
    price: float
    date: Optional[str] = None
    services: Optional[str] = None
