"""Structured logging for reflection events.

Library modules never configure logging themselves. They log through
``get_logger``, which returns a lazy structlog proxy, so whatever the host
application configures (or ``configure_logging``) applies at call time.

Every ``ReflectContext`` owns its loggers, bound with the context's
``reflection_id``. Events from two contexts built in the same thread keep
their own ids.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from schemareflect.config.models import LoggingConfig


def new_reflection_id() -> str:
    return uuid4().hex[:12]


def get_logger(name: str | None = None, **bindings: Any) -> structlog.stdlib.BoundLogger:
    """Lazy logger tagged with ``logger=name`` and any extra ``bindings``."""
    if name:
        bindings["logger"] = name
    return structlog.get_logger(**bindings)  # type: ignore[no-any-return]


@contextmanager
def reflection_scope(reflection_id: str) -> Iterator[None]:
    """Attach ``reflection_id`` to events logged anywhere inside the block.

    For walker code that logs through its own loggers. Requires
    ``structlog.contextvars.merge_contextvars`` in the processor chain, which
    ``configure_logging`` installs.
    """
    with structlog.contextvars.bound_contextvars(reflection_id=reflection_id):
        yield


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Render reflection events to stderr or stdout.

    Optional: hosts that already configure structlog should skip this.
    """
    from schemareflect.config.models import LoggingConfig

    config = config or LoggingConfig()
    renderer: structlog.types.Processor
    if config.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, config.level)),
        logger_factory=structlog.PrintLoggerFactory(
            file=sys.stdout if config.destination == "stdout" else sys.stderr
        ),
        cache_logger_on_first_use=False,
    )
