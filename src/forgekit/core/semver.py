"""Pure helpers for parsing and comparing dotted version strings.

A version such as ``v1.4.0-rc.1`` is reduced to its numeric core
``(1, 4, 0)``.  Anything that is not a plain non-negative integer makes
the whole parse fail with an empty tuple, which callers treat as
"unparseable" rather than "version zero".
"""

from __future__ import annotations

from forgekit.core.models import VersionTuple


def parse_version(text: str) -> VersionTuple:
    """Return the integer parts of *text*, or ``()`` when unparseable."""
    if not text:
        return ()

    core = text.split("-", 1)[0]
    if core.startswith("v"):
        core = core[1:]

    parts: list[int] = []
    for part in core.split("."):
        if not (part.isascii() and part.isdigit()):
            return ()
        parts.append(int(part))
    return tuple(parts)


def format_version(parts: VersionTuple) -> str:
    """Join integer parts back into a dotted string."""
    return ".".join(str(part) for part in parts)


def compare_versions(left: VersionTuple, right: VersionTuple) -> int:
    """Compare two versions component-wise, left to right.

    Returns ``-1``, ``0`` or ``1``.  Only the common prefix is compared;
    callers are expected to reject tuples of different length first.
    """
    for a, b in zip(left, right):
        if a < b:
            return -1
        if a > b:
            return 1
    return 0


def version_at_most(version: VersionTuple, maximum: VersionTuple) -> bool:
    """Return ``True`` when *version* is lower than or equal to *maximum*."""
    return compare_versions(version, maximum) != 1
