"""In-memory store for submitted potion orders."""

import logging
import threading
from datetime import datetime, timezone
from typing import Callable

from potion_shop.config import settings
from potion_shop.domain.models import Potion
from potion_shop.domain.reactive import Computed, ReadonlySignal, Signal
from potion_shop.domain.value_objects import PotionNumber

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PotionRepository:
    """
    Repository holding every potion order for the life of the process.

    The collection is a tuple replaced wholesale on each write, so anyone
    holding ``potions.value`` keeps a consistent snapshot and observers are
    told about each write after it has fully happened.

    Writes hold a lock; sync endpoints call in from FastAPI's threadpool.
    """

    def __init__(
        self,
        prefix: str | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.prefix = PotionNumber.check_prefix(prefix or settings.potion_number_prefix)
        self._clock = clock
        self._lock = threading.RLock()
        self._potions: Signal[tuple[Potion, ...]] = Signal(())
        self.potions: ReadonlySignal[tuple[Potion, ...]] = self._potions.as_readonly()
        self.potions_count: Computed[int] = Computed(
            lambda: len(self._potions.value), self._potions
        )

    def add(self, potion: Potion) -> Potion:
        """
        Append a potion order.

        Args:
            potion: Potion to store

        Returns:
            The stored potion
        """
        with self._lock:
            self._potions.update(lambda potions: (*potions, potion))
        logger.info(
            "Potion stored",
            extra={"potion_id": potion.id, "potion_number": potion.potion_number},
        )
        return potion

    def update(self, potion_id: str, potion: Potion) -> None:
        """Replace the potion with ``potion_id``; unknown IDs are ignored."""
        with self._lock:
            if self.get_by_id(potion_id) is None:
                logger.debug("Update skipped, potion not found", extra={"potion_id": potion_id})
                return
            self._potions.update(
                lambda potions: tuple(potion if p.id == potion_id else p for p in potions)
            )
        logger.info("Potion updated", extra={"potion_id": potion_id})

    def delete(self, potion_id: str) -> None:
        """Remove the potion with ``potion_id``; unknown IDs are ignored."""
        with self._lock:
            if self.get_by_id(potion_id) is None:
                logger.debug("Delete skipped, potion not found", extra={"potion_id": potion_id})
                return
            self._potions.update(
                lambda potions: tuple(p for p in potions if p.id != potion_id)
            )
        logger.info("Potion deleted", extra={"potion_id": potion_id})

    def get_by_id(self, potion_id: str) -> Potion | None:
        return next((p for p in self._potions.value if p.id == potion_id), None)

    def list_all(self) -> list[Potion]:
        return list(self._potions.value)

    def count(self) -> int:
        with self._lock:
            return self.potions_count.value

    def next_potion_number(self) -> str:
        """
        Number for the next potion: PREFIX-<year>-<count + 1>.

        Derived from the live count rather than a stored counter, so after a
        delete the next number may repeat one already handed out.
        """
        number = PotionNumber.build(
            prefix=self.prefix,
            year=self._clock().year,
            sequence=self.count() + 1,
        )
        return str(number)
