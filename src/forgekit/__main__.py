"""Allow ``python -m forgekit`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m forgekit`` behaves identically to the ``forgekit``
console script.
"""

from __future__ import annotations

from forgekit.cli.app import cli

if __name__ == "__main__":
    cli()
