"""Severity levels understood by the logging facade.

The eight levels form a closed, totally ordered enumeration.  Each one
maps onto a stdlib :mod:`logging` level number so records can be handed
to any ordinary handler; ``NOTICE``, ``SUCCESS`` and ``PANIC`` have no
stdlib equivalent and are registered as custom level names.
"""

from __future__ import annotations

import logging
from enum import IntEnum


class LogLevel(IntEnum):
    """Log severities ordered from least to most severe."""

    DEBUG = 0
    NOTICE = 1
    INFO = 2
    SUCCESS = 3
    WARN = 4
    ERROR = 5
    FATAL = 6
    PANIC = 7

    @classmethod
    def parse(cls, name: str | None) -> LogLevel:
        """Map a level name to a :class:`LogLevel`.

        Total function: matching is case-insensitive, ``"warning"`` is
        accepted as an alias of ``"warn"``, and every unrecognised name
        (including ``None`` and ``""``) maps to :attr:`ERROR`.
        """
        key = (name or "").strip().upper()
        if key == "WARNING":
            key = "WARN"
        try:
            return cls[key]
        except KeyError:
            return cls.ERROR

    @property
    def stdlib_level(self) -> int:
        """The :mod:`logging` level number records are emitted with."""
        return _STDLIB_LEVELS[self]


NOTICE_LEVEL: int = 15
SUCCESS_LEVEL: int = 25
PANIC_LEVEL: int = 60

_STDLIB_LEVELS: dict[LogLevel, int] = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.NOTICE: NOTICE_LEVEL,
    LogLevel.INFO: logging.INFO,
    LogLevel.SUCCESS: SUCCESS_LEVEL,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.FATAL: logging.CRITICAL,
    LogLevel.PANIC: PANIC_LEVEL,
}

logging.addLevelName(NOTICE_LEVEL, "NOTICE")
logging.addLevelName(SUCCESS_LEVEL, "SUCCESS")
logging.addLevelName(PANIC_LEVEL, "PANIC")
