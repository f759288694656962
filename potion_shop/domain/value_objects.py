"""Domain value objects for type-safe business concepts."""

from __future__ import annotations

import re
from dataclasses import dataclass


_PREFIX_PATTERN: re.Pattern[str] = re.compile(r"^[A-Z]+$")
_POTION_NUMBER_PATTERN: re.Pattern[str] = re.compile(r"^([A-Z]+)-(\d{4})-(\d{4,})$")


@dataclass(frozen=True)
class PotionNumber:
    """
    Immutable value object for a potion order number.

    Enforces the pattern PREFIX-YYYY-NNNN at construction time. The sequence
    is zero-padded to four digits and may grow wider past 9999.
    """

    value: str

    def __post_init__(self) -> None:
        if not _POTION_NUMBER_PATTERN.match(self.value):
            raise ValueError(
                f"Invalid potion number format: '{self.value}'. "
                "Expected format: PREFIX-YYYY-NNNN",
            )

    @staticmethod
    def check_prefix(prefix: str) -> str:
        """Return ``prefix`` if it is usable in a potion number, else raise ValueError."""
        if not _PREFIX_PATTERN.fullmatch(prefix):
            raise ValueError(
                f"Invalid potion number prefix: '{prefix}'. Expected uppercase letters only",
            )
        return prefix

    @classmethod
    def build(cls, prefix: str, year: int, sequence: int) -> PotionNumber:
        """Format a potion number from its parts."""
        if sequence < 1:
            raise ValueError(f"Potion sequence must be positive: {sequence}")
        return cls(f"{prefix}-{year:04d}-{sequence:04d}")

    @property
    def prefix(self) -> str:
        return self._parts()[0]

    @property
    def year(self) -> int:
        return int(self._parts()[1])

    @property
    def sequence(self) -> int:
        return int(self._parts()[2])

    def _parts(self) -> tuple[str, str, str]:
        match = _POTION_NUMBER_PATTERN.match(self.value)
        assert match is not None
        return match.group(1), match.group(2), match.group(3)

    def __str__(self) -> str:
        return self.value
