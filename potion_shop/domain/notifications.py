"""User-facing notifications and delete confirmations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A toast-style message; ``life_ms`` is how long it stays on screen."""

    severity: Severity
    summary: str
    detail: str
    life_ms: int = 5000


class NotificationService:
    """Collects notifications and forwards them to any registered listener."""

    def __init__(self) -> None:
        self.messages: list[Notification] = []
        self._listeners: list[Callable[[Notification], None]] = []

    def add(self, notification: Notification) -> None:
        self.messages.append(notification)
        logger.debug(
            "Notification emitted",
            extra={"severity": notification.severity.value, "summary": notification.summary},
        )
        for listener in list(self._listeners):
            listener(notification)

    def listen(self, listener: Callable[[Notification], None]) -> None:
        self._listeners.append(listener)

    @property
    def last(self) -> Notification | None:
        return self.messages[-1] if self.messages else None

    def clear(self) -> None:
        self.messages = []


@dataclass(frozen=True)
class Confirmation:
    """A yes/no question whose ``accept`` callback runs only when the user agrees."""

    message: str
    header: str
    accept: Callable[[], None]
    reject: Callable[[], None] | None = None


class ConfirmationService:
    """
    Queue of confirmation requests awaiting an answer.

    A presentation layer shows ``pending`` to the user and calls ``accept`` or
    ``reject``; the request's callback runs synchronously inside that call.
    """

    def __init__(self) -> None:
        self.pending: list[Confirmation] = []

    def confirm(self, confirmation: Confirmation) -> None:
        self.pending.append(confirmation)

    def accept(self) -> bool:
        """Accept the oldest pending request; returns False when none is waiting."""
        if not self.pending:
            return False
        confirmation = self.pending.pop(0)
        confirmation.accept()
        return True

    def reject(self) -> Confirmation | None:
        """Reject the oldest pending request and return it."""
        if not self.pending:
            return None
        confirmation = self.pending.pop(0)
        if confirmation.reject is not None:
            confirmation.reject()
        return confirmation
