"""Shared utilities — cross-cutting concerns importable by any layer.

Rules
-----
* No business logic.
* No imports from ``cli``.
* Output only through the logging facade in :mod:`forgekit.utils.logger`.
"""
