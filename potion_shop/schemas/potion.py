"""Pydantic schemas for potion API requests and responses."""

from datetime import datetime

from pydantic import BaseModel, Field

from potion_shop.domain.models import (
    DeliveryMethod,
    IngredientUnit,
    PaymentMethod,
    PotionStatus,
)
from potion_shop.domain.notifications import Notification


class IngredientInput(BaseModel):
    """One ingredient line of a potion order request."""

    name: str = Field(default="", examples=["Dragon scale"])
    quantity: float = Field(default=0, ge=0, description="Amount in `unit`")
    unit: IngredientUnit = Field(default=IngredientUnit.GRAMS)
    price_per_unit: float = Field(default=0, ge=0, description="Price of one unit")


class PotionCreateRequest(BaseModel):
    """
    Request schema for submitting a potion order form.

    Length, date and ingredient rules are checked by the order form itself so
    that failures come back keyed by field and failure kind.
    """

    ordered_by: str = Field(default="", examples=["Merlin the Wise"])
    ready_date: datetime | None = Field(
        default=None,
        description="Promised ready date (default: one day after the order)",
    )
    delivery_address: str = Field(default="", examples=["Tower of Magic, Enchanted Forest"])
    delivery_method: DeliveryMethod = DeliveryMethod.OWL
    payment_method: PaymentMethod = PaymentMethod.GOLD_COINS
    ingredients: list[IngredientInput] = Field(default_factory=list)


class PotionStatusUpdate(BaseModel):
    """Request schema for moving a potion through its lifecycle."""

    status: PotionStatus


class IngredientResponse(BaseModel):
    id: str
    name: str
    quantity: float
    unit: str
    price_per_unit: float
    total_price: float

    model_config = {"from_attributes": True}


class PotionResponse(BaseModel):
    """Response schema for potion details."""

    id: str
    potion_number: str
    ordered_by: str
    order_date: datetime
    ready_date: datetime
    delivery_address: str
    delivery_method: DeliveryMethod
    payment_method: PaymentMethod
    ingredients: list[IngredientResponse]
    total_cost: float
    status: PotionStatus

    model_config = {"from_attributes": True}


class PotionListResponse(BaseModel):
    potions: list[PotionResponse]
    total: int


class NotificationResponse(BaseModel):
    severity: str
    summary: str
    detail: str
    life_ms: int

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationResponse":
        return cls(
            severity=notification.severity.value,
            summary=notification.summary,
            detail=notification.detail,
            life_ms=notification.life_ms,
        )


class PotionCreateResponse(BaseModel):
    potion: PotionResponse
    notification: NotificationResponse


class PotionDeleteResponse(BaseModel):
    potion_id: str
    notification: NotificationResponse


class NextPotionNumberResponse(BaseModel):
    potion_number: str
