"""Ingredient sub-form: line-item editing, totals and set-level validation."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Callable

from potion_shop.config import settings
from potion_shop.domain.models import Ingredient, IngredientUnit
from potion_shop.domain.reactive import Computed, Signal
from potion_shop.domain.validation import ErrorKind, ValidationErrors

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({"name", "quantity", "unit", "price_per_unit"})

# Fields whose change means total_price has to be recomputed
PRICED_FIELDS = frozenset({"quantity", "price_per_unit"})

_FIELD_ALIASES = {"pricePerUnit": "price_per_unit", "totalPrice": "total_price"}

UNIT_LABELS: dict[IngredientUnit, str] = {
    IngredientUnit.GRAMS: "grams (g)",
    IngredientUnit.MILLILITERS: "milliliters (ml)",
    IngredientUnit.PIECES: "pieces (pcs)",
    IngredientUnit.DROPS: "drops",
    IngredientUnit.PINCH: "pinch",
}


def generate_ingredient_id() -> str:
    return f"ing-{uuid.uuid4().hex[:12]}"


def line_total(quantity: float | None, price_per_unit: float | None) -> float:
    return (quantity or 0) * (price_per_unit or 0)


def is_complete(ingredient: Ingredient) -> bool:
    """True when the line item has a name, a unit and positive amounts."""
    return bool(
        ingredient.name
        and ingredient.unit
        and ingredient.quantity
        and ingredient.quantity > 0
        and ingredient.price_per_unit
        and ingredient.price_per_unit > 0
    )


class IngredientSet:
    """
    Editable list of ingredients hosted by a potion form.

    Implements the ``FormField`` protocol: the form registers change and
    touched hooks, pushes values in through ``write_value`` and folds
    ``validate()`` into its own validity. Every edit replaces the list
    wholesale and reports the new list through the change hook.
    """

    available_units = [
        {"label": label, "value": unit.value} for unit, label in UNIT_LABELS.items()
    ]

    def __init__(
        self,
        min_ingredients: int | None = None,
        default_unit: str | None = None,
    ):
        self.min_ingredients = (
            settings.min_ingredients if min_ingredients is None else min_ingredients
        )
        self.default_unit = default_unit or settings.default_ingredient_unit
        self.ingredients: Signal[list[Ingredient]] = Signal([])
        self._disabled = Signal(False)
        self._total_cost = Computed(
            lambda: sum(ing.total_price for ing in self.ingredients.value),
            self.ingredients,
        )
        self._on_change: Callable[[list[Ingredient]], None] = lambda value: None
        self._on_touched: Callable[[], None] = lambda: None

    # -- FormField -------------------------------------------------------

    @property
    def value(self) -> list[Ingredient]:
        return list(self.ingredients.value)

    @property
    def disabled(self) -> bool:
        return self._disabled.value

    def write_value(self, value: list[Ingredient] | None) -> None:
        """Load a whole list as-is; ``None`` leaves the current list alone."""
        if value is not None:
            self.ingredients.set(list(value))

    def register_on_change(self, fn: Callable[[list[Ingredient]], None]) -> None:
        self._on_change = fn

    def register_on_touched(self, fn: Callable[[], None]) -> None:
        self._on_touched = fn

    def set_disabled(self, disabled: bool) -> None:
        self._disabled.set(disabled)

    def validate(self) -> ValidationErrors | None:
        ingredients = self.ingredients.value

        if len(ingredients) < self.min_ingredients:
            return {
                ErrorKind.MIN_INGREDIENTS.value: {
                    "min": self.min_ingredients,
                    "actual": len(ingredients),
                }
            }

        if not all(is_complete(ing) for ing in ingredients):
            return {ErrorKind.INVALID_INGREDIENT.value: True}

        return None

    # -- editing ---------------------------------------------------------

    def add(self) -> Ingredient:
        """Append a blank ingredient and return it."""
        ingredient = Ingredient(
            id=generate_ingredient_id(),
            name="",
            quantity=0,
            unit=self.default_unit,
            price_per_unit=0,
            total_price=0,
        )
        self._commit([*self.ingredients.value, ingredient])
        logger.debug("Ingredient added", extra={"ingredient_id": ingredient.id})
        return ingredient

    def remove(self, ingredient_id: str) -> None:
        self._commit([ing for ing in self.ingredients.value if ing.id != ingredient_id])

    def update(self, ingredient_id: str, field: str, value: Any) -> None:
        """
        Set one field of the ingredient with ``ingredient_id``.

        Quantity and price edits recompute total_price from the values now
        stored, so two successive edits always land on quantity * price.

        Raises:
            ValueError: If ``field`` is not an editable ingredient field
        """
        field = _FIELD_ALIASES.get(field, field)
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Ingredient field '{field}' cannot be edited")

        def apply(ingredient: Ingredient) -> Ingredient:
            if ingredient.id != ingredient_id:
                return ingredient
            changes: dict[str, Any] = {field: value}
            if field in PRICED_FIELDS:
                quantity = value if field == "quantity" else ingredient.quantity
                price = value if field == "price_per_unit" else ingredient.price_per_unit
                changes["total_price"] = line_total(quantity, price)
            return ingredient.model_copy(update=changes)

        self._commit([apply(ing) for ing in self.ingredients.value])

    def on_ingredient_change(self) -> None:
        """Re-announce the current list to the host form."""
        self._on_change(self.value)
        self._on_touched()

    def total_cost(self) -> float:
        return self._total_cost.value

    def get(self, ingredient_id: str) -> Ingredient | None:
        return next((ing for ing in self.ingredients.value if ing.id == ingredient_id), None)

    def __len__(self) -> int:
        return len(self.ingredients.value)

    def _commit(self, updated: list[Ingredient]) -> None:
        self.ingredients.set(updated)
        self._on_change(list(updated))
        self._on_touched()
