"""Cooperative cancellation for long traversals."""

from __future__ import annotations

import threading
from collections.abc import Sequence

from schemareflect.core.errors import ReflectError


class CancelToken:
    """Caller-owned cancellation signal.

    Cancellation is advisory: the walker polls the token at well-defined
    points (before descending into each new type) and aborts with
    ``ReflectError.cancelled`` when it is set.
    """

    __slots__ = ("_event",)

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self, path: Sequence[str] = ()) -> None:
        if self._event.is_set():
            raise ReflectError.cancelled(path)
