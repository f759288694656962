"""Minimal synchronous reactive state: observable cells and derived values."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")

Observer = Callable[[T], None]


class ReadonlySignal(Generic[T]):
    """Read-only view over a :class:`Signal`."""

    def __init__(self, source: Signal[T]):
        self._source = source

    @property
    def value(self) -> T:
        return self._source.value

    def subscribe(self, observer: Observer[T]) -> Callable[[], None]:
        return self._source.subscribe(observer)


class Signal(Generic[T]):
    """
    Mutable cell that notifies observers whenever its value is replaced.

    Observers run synchronously, in subscription order, before ``set``
    returns. Values are replaced wholesale; callers holding collections
    should pass new ones rather than mutating the current value in place.
    """

    def __init__(self, initial: T):
        self._value = initial
        self._observers: list[Observer[T]] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        for observer in list(self._observers):
            observer(value)

    def update(self, fn: Callable[[T], T]) -> None:
        """Replace the value with ``fn(current)``."""
        self.set(fn(self._value))

    def subscribe(self, observer: Observer[T]) -> Callable[[], None]:
        """Register ``observer``; returns a callable that unsubscribes it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def as_readonly(self) -> ReadonlySignal[T]:
        return ReadonlySignal(self)


class Computed(Generic[T]):
    """Value derived from one or more signals, cached until a source changes."""

    def __init__(self, compute: Callable[[], T], *sources: Signal | ReadonlySignal):
        self._compute = compute
        self._cached: T | None = None
        # Bumped on every source write; the cache is valid only for the
        # version it was computed at
        self._version = 0
        self._computed_version = -1
        for source in sources:
            source.subscribe(self._invalidate)

    def _invalidate(self, _value: object) -> None:
        self._version += 1

    @property
    def value(self) -> T:
        version = self._version
        if self._computed_version != version:
            self._cached = self._compute()
            self._computed_version = version
        return self._cached  # type: ignore[return-value]
