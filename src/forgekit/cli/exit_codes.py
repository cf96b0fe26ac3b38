"""Process exit codes returned by :func:`forgekit.cli.app.main`.

Command handlers return these values; :func:`forgekit.cli.app.cli` hands
them to ``sys.exit``.
"""

from __future__ import annotations

SUCCESS: int = 0
"""The command ran to completion."""

GENERAL_ERROR: int = 1
"""A ForgeKitError was reported (bad manifest, failed lookup, ...)."""

KEYBOARD_INTERRUPT: int = 130
"""Interrupted with Ctrl+C (128 + SIGINT)."""

UNEXPECTED_ERROR: int = 2
"""Any other exception reached the error boundary."""
