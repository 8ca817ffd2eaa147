"""Structured logging for the statforge engine.

The engine logs through structlog. Skipped inputs (unknown species or
bonus ids, unusable equivalency leaves, values past the top band) are
reported at DEBUG level and never interrupt a resolution. Resolution
entry points run inside :func:`character_context`, so every entry of one
pass carries the ``character_id`` being resolved without each call site
repeating it.

Example:
    >>> from statforge.core.logging import character_context, get_logger
    >>> logger = get_logger(__name__)
    >>> with character_context("c1"):
    ...     logger.debug("Skipping unknown bonus", bonus_id="b9")
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from statforge.core.config import Settings
    from structlog.types import EventDict, WrappedLogger


DEFAULT_APP_NAME = "statforge"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def app_stamp(app_name: str = DEFAULT_APP_NAME) -> Processor:
    """Build a processor that stamps entries with the application name.

    Args:
        app_name: Value written under the ``app`` key.

    Returns:
        A structlog processor.
    """

    def stamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("app", app_name)
        return event_dict

    return stamp


def build_processors(*, json_format: bool, app_name: str = DEFAULT_APP_NAME) -> list[Processor]:
    """Assemble the processor chain.

    Bound resolution context is merged first so explicit keyword
    arguments on a log call win over it.

    Args:
        json_format: Render JSON lines instead of console output.
        app_name: Application name to stamp.

    Returns:
        The ordered processors.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        app_stamp(app_name),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    return processors


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    app_name: str = DEFAULT_APP_NAME,
) -> None:
    """Configure engine logging.

    Args:
        level: Minimum level (DEBUG shows skipped inputs).
        json_format: Emit JSON lines instead of console output.
        app_name: Application name stamped on every entry.

    Example:
        >>> configure_logging(level="DEBUG", json_format=True)
    """
    structlog.configure(
        processors=build_processors(json_format=json_format, app_name=app_name),
        wrapper_class=structlog.make_filtering_bound_logger(_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Libraries logging through the standard library end up on stdout too
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=_level(level),
        stream=sys.stdout,
        force=True,
    )


def configure_from_settings(settings: Settings | None = None) -> None:
    """Configure logging from ``log_level``, ``json_logs`` and ``app_name``.

    Args:
        settings: Settings to read; defaults to :func:`get_settings`.
    """
    from statforge.core.config import get_settings

    settings = settings or get_settings()
    configure_logging(
        level=settings.log_level,
        json_format=settings.json_logs,
        app_name=settings.app_name,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, typically with ``__name__``."""
    return structlog.get_logger(name)


@contextmanager
def character_context(character_id: str) -> Iterator[None]:
    """Tag log entries emitted inside the block with a character id.

    Previously bound values are restored on exit, so nested passes (a
    leaderboard resolving each of its rows) tag entries with the innermost
    character only while it is being resolved.

    Args:
        character_id: Id of the character being resolved.

    Yields:
        Nothing; the binding lasts for the block.
    """
    with structlog.contextvars.bound_contextvars(character_id=character_id):
        yield


__all__ = [
    "app_stamp",
    "build_processors",
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "character_context",
]
