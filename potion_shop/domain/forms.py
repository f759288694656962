"""Potion order draft: header fields, embedded ingredients, submission."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta
from typing import Any, Callable, Iterable

from potion_shop.config import Settings, settings
from potion_shop.domain.ingredients import IngredientSet
from potion_shop.domain.models import DeliveryMethod, PaymentMethod, Potion
from potion_shop.domain.notifications import Notification, NotificationService, Severity
from potion_shop.domain.validation import (
    ErrorKind,
    FormField,
    ValidationErrors,
    Validator,
    max_length,
    min_length,
    one_of,
    ready_after,
    required,
    run_validators,
)
from potion_shop.repositories.potion_repository import PotionRepository, utc_now

logger = logging.getLogger(__name__)

FIELD_LABELS = {
    "ordered_by": "Customer name",
    "ready_date": "Ready date",
    "delivery_address": "Delivery address",
    "delivery_method": "Delivery method",
    "payment_method": "Payment method",
    "ingredients": "Ingredients",
}

DELIVERY_ICONS = {
    DeliveryMethod.OWL: "🦉",
    DeliveryMethod.DRAGON: "🐲",
    DeliveryMethod.TELEPORT: "✨",
    DeliveryMethod.COURIER: "🧙",
    DeliveryMethod.PICKUP: "🏪",
}

PAYMENT_ICONS = {
    PaymentMethod.GOLD_COINS: "💰",
    PaymentMethod.SILVER_COINS: "🥈",
    PaymentMethod.MAGICAL_TRANSFER: "✨",
    PaymentMethod.CREDIT_SPELL: "🔮",
    PaymentMethod.BARTER: "🤝",
}


def generate_potion_id() -> str:
    return f"pot-{uuid.uuid4().hex[:12]}"


class FormControl:
    """
    One form field: its value, validators and touched/disabled state.

    A control can be bound to a composite ``FormField``. Once bound, values
    set on the control are written into the field, edits made in the field
    flow back into the control, and the field's own ``validate()`` result is
    merged into the control's errors.
    """

    def __init__(
        self,
        value: Any,
        validators: Iterable[Validator] = (),
        disabled: bool = False,
    ):
        self.value = value
        self.validators = list(validators)
        self.disabled = disabled
        self.touched = False
        self.field: FormField | None = None

    def bind(self, field: FormField) -> None:
        self.field = field
        field.register_on_change(self._on_field_change)
        field.register_on_touched(self.mark_as_touched)
        field.set_disabled(self.disabled)
        field.write_value(self.value)

    def _on_field_change(self, value: Any) -> None:
        self.value = value

    def set_value(self, value: Any) -> None:
        self.value = value
        if self.field is not None:
            self.field.write_value(value)

    def mark_as_touched(self) -> None:
        self.touched = True

    @property
    def errors(self) -> ValidationErrors | None:
        # Disabled controls never block submission
        if self.disabled:
            return None
        errors = run_validators(self.value, self.validators) or {}
        if self.field is not None:
            errors.update(self.field.validate() or {})
        return errors or None

    @property
    def valid(self) -> bool:
        return self.errors is None

    def has_error(self, kind: ErrorKind | str) -> bool:
        key = kind.value if isinstance(kind, ErrorKind) else kind
        return key in (self.errors or {})


class PotionForm:
    """
    Draft of a potion order.

    The draft owns its header controls and an ``IngredientSet`` registered as
    the ``ingredients`` field. ``submit()`` either hands a finished Potion to
    the repository and starts a fresh draft, or leaves everything untouched
    and flags every field so its error becomes visible.
    """

    delivery_methods = [
        {"label": f"{DELIVERY_ICONS.get(m, '📦')} {m.value}", "value": m}
        for m in DeliveryMethod
    ]
    payment_methods = [
        {"label": f"{PAYMENT_ICONS.get(m, '💳')} {m.value}", "value": m}
        for m in PaymentMethod
    ]

    def __init__(
        self,
        repository: PotionRepository,
        notifications: NotificationService,
        ingredient_set: IngredientSet | None = None,
        clock: Callable[[], datetime] = utc_now,
        config: Settings = settings,
    ):
        self.repository = repository
        self.notifications = notifications
        self.ingredient_set = ingredient_set or IngredientSet(
            min_ingredients=config.min_ingredients,
            default_unit=config.default_ingredient_unit,
        )
        self.config = config
        self._clock = clock
        self.submitted = False
        self.controls: dict[str, FormControl] = {}
        self._init_form()

    def _init_form(self) -> None:
        now = self._clock()
        self.min_date = now

        self.controls = {
            "potion_number": FormControl(
                self.repository.next_potion_number(), [required], disabled=True
            ),
            "ordered_by": FormControl("", [required, min_length(2), max_length(100)]),
            "order_date": FormControl(now, [required], disabled=True),
            "ready_date": FormControl(
                now + timedelta(days=1), [required, self._ready_after_order_date]
            ),
            "delivery_address": FormControl(
                "", [required, min_length(5), max_length(200)]
            ),
            "delivery_method": FormControl(
                DeliveryMethod.OWL, [required, one_of(DeliveryMethod)]
            ),
            "payment_method": FormControl(
                PaymentMethod.GOLD_COINS, [required, one_of(PaymentMethod)]
            ),
            "ingredients": FormControl([], [required]),
        }
        self.register_field("ingredients", self.ingredient_set)

    def _ready_after_order_date(self, value: Any) -> ValidationErrors | None:
        return ready_after(value, self.controls["order_date"].value)

    def register_field(self, name: str, field: FormField) -> None:
        """Host a composite field under the control ``name``."""
        self.controls[name].bind(field)

    def get(self, name: str) -> FormControl:
        return self.controls[name]

    def set_value(self, name: str, value: Any) -> None:
        """
        Write a user-supplied value into the control ``name``.

        Raises:
            KeyError: If the form has no such control
            ValueError: If the control is read-only
        """
        control = self.controls[name]
        if control.disabled:
            raise ValueError(f"Field '{name}' is read-only")
        control.set_value(value)

    @property
    def valid(self) -> bool:
        return all(control.valid for control in self.controls.values())

    def errors(self) -> dict[str, ValidationErrors]:
        """Current errors of every invalid control, keyed by field name."""
        return {
            name: control.errors
            for name, control in self.controls.items()
            if control.errors is not None
        }

    def raw_value(self) -> dict[str, Any]:
        """Values of all controls, read-only ones included."""
        return {name: control.value for name, control in self.controls.items()}

    def submit(self) -> Potion | None:
        """
        Validate the draft and store it as a new brewing potion.

        Returns:
            The stored potion, or None when the draft is invalid
        """
        self.submitted = True

        if not self.valid:
            self.notifications.add(
                Notification(
                    severity=Severity.ERROR,
                    summary="❌ Invalid Form",
                    detail="Please fill in all required fields correctly.",
                    life_ms=self.config.notification_life_ms,
                )
            )
            self.mark_all_touched()
            logger.warning(
                "Potion form rejected",
                extra={"invalid_fields": sorted(self.errors())},
            )
            return None

        form_value = self.raw_value()
        potion = Potion.create(
            id=generate_potion_id(),
            potion_number=form_value["potion_number"],
            ordered_by=form_value["ordered_by"],
            order_date=form_value["order_date"],
            ready_date=form_value["ready_date"],
            delivery_address=form_value["delivery_address"],
            delivery_method=form_value["delivery_method"],
            payment_method=form_value["payment_method"],
            ingredients=form_value["ingredients"],
        )

        self.repository.add(potion)
        self.notifications.add(
            Notification(
                severity=Severity.SUCCESS,
                summary="✨ Potion Created!",
                detail=f"Potion {potion.potion_number} is now brewing!",
                life_ms=self.config.notification_life_ms,
            )
        )
        logger.info(
            "Potion submitted",
            extra={"potion_number": potion.potion_number, "total_cost": potion.total_cost},
        )

        self.reset()
        return potion

    def reset(self) -> None:
        self.submitted = False
        self._init_form()

    def mark_all_touched(self) -> None:
        for control in self.controls.values():
            control.mark_as_touched()

    def is_field_invalid(self, name: str) -> bool:
        control = self.controls.get(name)
        return bool(
            control and not control.valid and (control.touched or self.submitted)
        )

    def error_for(self, name: str) -> str:
        """Message for the most important error on ``name``, or "" if none should show."""
        control = self.controls.get(name)
        if control is None or not (control.touched or self.submitted):
            return ""

        errors = control.errors
        if not errors:
            return ""

        if ErrorKind.REQUIRED.value in errors:
            return f"{FIELD_LABELS.get(name, name)} is required"
        if ErrorKind.MIN_LENGTH.value in errors:
            length = errors[ErrorKind.MIN_LENGTH.value]["requiredLength"]
            return f"Minimum length is {length} characters"
        if ErrorKind.MAX_LENGTH.value in errors:
            length = errors[ErrorKind.MAX_LENGTH.value]["requiredLength"]
            return f"Maximum length is {length} characters"
        if ErrorKind.PAST_DATE.value in errors:
            return "Ready date must be in the future"
        if ErrorKind.MIN_INGREDIENTS.value in errors:
            minimum = errors[ErrorKind.MIN_INGREDIENTS.value]["min"]
            return f"At least {minimum} ingredients required"
        if ErrorKind.INVALID_INGREDIENT.value in errors:
            return "All ingredients must be properly filled"

        return "Invalid field"
