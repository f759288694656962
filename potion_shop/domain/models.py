"""Pydantic domain models for potion orders and their ingredients."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class IngredientUnit(str, Enum):
    """Units an ingredient quantity can be measured in."""

    GRAMS = "g"
    MILLILITERS = "ml"
    PIECES = "pcs"
    DROPS = "drops"
    PINCH = "pinch"


class DeliveryMethod(str, Enum):
    OWL = "Owl Post"
    DRAGON = "Dragon Express"
    TELEPORT = "Magical Teleport"
    COURIER = "Wizard Courier"
    PICKUP = "Shop Pickup"


class PaymentMethod(str, Enum):
    GOLD_COINS = "Gold Coins"
    SILVER_COINS = "Silver Coins"
    MAGICAL_TRANSFER = "Magical Transfer"
    CREDIT_SPELL = "Credit Spell"
    BARTER = "Barter"


class PotionStatus(str, Enum):
    BREWING = "brewing"
    READY = "ready"
    DELIVERED = "delivered"


class Ingredient(BaseModel):
    """
    A line item of a potion order.

    Business Rules:
    - total_price is quantity * price_per_unit; IngredientSet recomputes it
      on every quantity or price change
    - instances are immutable; edits produce a copy
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    quantity: float = Field(default=0, description="Amount in `unit`")
    unit: str = IngredientUnit.GRAMS.value
    price_per_unit: float = Field(default=0, description="Price of one unit")
    total_price: float = Field(default=0, description="Derived line total")


class Potion(BaseModel):
    """
    A submitted potion order.

    Business Rules:
    - potion_number follows PREFIX-YYYY-NNNN
    - ready_date is strictly after order_date
    - total_cost is the sum of the ingredient totals at submission
    """

    model_config = ConfigDict(frozen=True)

    id: str
    potion_number: str
    ordered_by: str
    order_date: datetime
    ready_date: datetime
    delivery_address: str
    delivery_method: DeliveryMethod
    payment_method: PaymentMethod
    ingredients: list[Ingredient] = Field(default_factory=list)
    total_cost: float = 0
    status: PotionStatus = PotionStatus.BREWING

    @classmethod
    def create(
        cls,
        id: str,
        potion_number: str,
        ordered_by: str,
        order_date: datetime,
        ready_date: datetime,
        delivery_address: str,
        delivery_method: DeliveryMethod,
        payment_method: PaymentMethod,
        ingredients: list[Ingredient],
    ) -> "Potion":
        """
        Factory method to create a brewing potion with its total cost computed.

        Args:
            id: Unique potion identifier
            potion_number: Human-facing order number
            ordered_by: Customer name
            order_date: When the draft was opened
            ready_date: Promised ready date
            delivery_address: Where to deliver
            delivery_method: How to deliver
            payment_method: How the customer pays
            ingredients: Ingredient line items

        Returns:
            New Potion instance with status brewing
        """
        return cls(
            id=id,
            potion_number=potion_number,
            ordered_by=ordered_by,
            order_date=order_date,
            ready_date=ready_date,
            delivery_address=delivery_address,
            delivery_method=delivery_method,
            payment_method=payment_method,
            ingredients=list(ingredients),
            total_cost=sum(ing.total_price for ing in ingredients),
            status=PotionStatus.BREWING,
        )
