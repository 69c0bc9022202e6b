"""Traversal bookkeeping: in-progress types and the path stack."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from schemareflect.core.logging import get_logger
from schemareflect.reflect.identity import TypeIdentity


class CycleTracker:
    """Type identities whose traversal has started but not finished."""

    def __init__(self, *, logger: Any = None) -> None:
        self._in_progress: set[TypeIdentity] = set()
        self._log = logger if logger is not None else get_logger("reflect.cycles")

    def __contains__(self, identity: object) -> bool:
        return identity in self._in_progress

    def __len__(self) -> int:
        return len(self._in_progress)

    def is_cycle(self, identity: TypeIdentity) -> bool:
        if identity in self._in_progress:
            self._log.debug("cycle_detected", identity=str(identity))
            return True
        return False

    @contextmanager
    def tracking(self, identity: TypeIdentity) -> Iterator[None]:
        """Mark ``identity`` in progress for the duration of the block.

        The mark is cleared on exit, including when the block raises. Entering
        an identity that is already marked leaves the outer mark in place.
        """
        if identity in self._in_progress:
            yield
            return
        self._in_progress.add(identity)
        try:
            yield
        finally:
            self._in_progress.discard(identity)


class TraversalPath:
    """Ordered traversal-step labels describing the current position."""

    def __init__(self) -> None:
        self._labels: list[str] = []

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[str]:
        return iter(self._labels)

    def __str__(self) -> str:
        return ".".join(self._labels)

    def snapshot(self) -> tuple[str, ...]:
        return tuple(self._labels)

    @contextmanager
    def descend(self, label: str) -> Iterator[None]:
        """Push ``label`` and restore the pre-call path on exit, error or not."""
        depth = len(self._labels)
        self._labels.append(label)
        try:
            yield
        finally:
            del self._labels[depth:]
