"""Lazily constructed, process-wide resource handles."""
from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, TypeVar

from whowhere.errors import ParseError

T = TypeVar("T")

_log = logging.getLogger("whowhere.lifecycle")


class LazyResource(Generic[T]):
    """Builds an expensive resource on first use, exactly once.

    Construction runs under a lock so concurrent first callers cannot build
    the resource twice. A failed construction is not cached: the error is
    re-raised as ``error_type`` and the next call tries again.
    """

    def __init__(
        self,
        name: str,
        factory: Callable[[], T],
        *,
        error_type: type[ParseError] = ParseError,
    ) -> None:
        self.name = name
        self._factory = factory
        self._error_type = error_type
        self._lock = threading.Lock()
        self._value: T | None = None
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    def get(self) -> T:
        if self._loaded:
            return self._value  # type: ignore[return-value]
        with self._lock:
            if not self._loaded:
                try:
                    value = self._factory()
                except ParseError:
                    raise
                except Exception as exc:
                    _log.exception("Unable to create %s", self.name)
                    raise self._error_type(f"Unable to create {self.name}: {exc}") from exc
                self._value = value
                self._loaded = True
                _log.info("Created %s successfully", self.name)
        return self._value  # type: ignore[return-value]


__all__ = ["LazyResource"]
