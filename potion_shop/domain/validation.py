"""Field validators and the form-field adapter protocol.

Validators never raise. Each returns ``None`` when the value is acceptable or a
``ValidationErrors`` dict keyed by the kind of failure, so presentation code
can pick a message for the exact cause.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Iterable, Protocol, runtime_checkable

ValidationErrors = dict[str, Any]
Validator = Callable[[Any], ValidationErrors | None]


class ErrorKind(str, Enum):
    """Failure kinds, in the priority order used for error messages."""

    REQUIRED = "required"
    MIN_LENGTH = "minlength"
    MAX_LENGTH = "maxlength"
    PAST_DATE = "pastDate"
    MIN_INGREDIENTS = "minIngredients"
    INVALID_INGREDIENT = "invalidIngredient"
    INVALID_OPTION = "invalidOption"


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, dict, set)):
        return len(value) == 0
    return False


def required(value: Any) -> ValidationErrors | None:
    if is_empty(value):
        return {ErrorKind.REQUIRED.value: True}
    return None


def min_length(length: int) -> Validator:
    """Reject values shorter than ``length``; empty values are left to ``required``."""

    def validator(value: Any) -> ValidationErrors | None:
        if is_empty(value) or not hasattr(value, "__len__"):
            return None
        if len(value) < length:
            return {
                ErrorKind.MIN_LENGTH.value: {
                    "requiredLength": length,
                    "actualLength": len(value),
                }
            }
        return None

    return validator


def max_length(length: int) -> Validator:
    """Reject values longer than ``length``."""

    def validator(value: Any) -> ValidationErrors | None:
        if is_empty(value) or not hasattr(value, "__len__"):
            return None
        if len(value) > length:
            return {
                ErrorKind.MAX_LENGTH.value: {
                    "requiredLength": length,
                    "actualLength": len(value),
                }
            }
        return None

    return validator


def one_of(enum_type: type[Enum]) -> Validator:
    """Reject values that are not members (or member values) of ``enum_type``."""
    allowed = {member.value for member in enum_type}

    def validator(value: Any) -> ValidationErrors | None:
        if is_empty(value):
            return None
        candidate = value.value if isinstance(value, Enum) else value
        if candidate not in allowed:
            return {ErrorKind.INVALID_OPTION.value: {"allowed": sorted(allowed)}}
        return None

    return validator


def _as_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def ready_after(ready_date: datetime | None, order_date: datetime) -> ValidationErrors | None:
    """
    Check that ``ready_date`` falls strictly after ``order_date``.

    Naive datetimes are read as UTC. A missing ready date is not reported
    here; the ``required`` validator owns that case.
    """
    if ready_date is None:
        return None
    if _as_aware(ready_date) <= _as_aware(order_date):
        return {ErrorKind.PAST_DATE.value: True}
    return None


def run_validators(value: Any, validators: Iterable[Validator]) -> ValidationErrors | None:
    """Run every validator and merge their results into one dict."""
    errors: ValidationErrors = {}
    for validator in validators:
        result = validator(value)
        if result:
            errors.update(result)
    return errors or None


@runtime_checkable
class FormField(Protocol):
    """
    A composite field a form can host.

    The hosting form reads the field's value, pushes external values into it,
    asks it to validate itself and toggles its enabled state. The field
    reports edits back through the registered change and touched hooks.
    """

    @property
    def value(self) -> Any: ...

    @property
    def disabled(self) -> bool: ...

    def write_value(self, value: Any) -> None: ...

    def validate(self) -> ValidationErrors | None: ...

    def set_disabled(self, disabled: bool) -> None: ...

    def register_on_change(self, fn: Callable[[Any], None]) -> None: ...

    def register_on_touched(self, fn: Callable[[], None]) -> None: ...
