"""Core / service layer — business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O; remote lookups go through a
  :class:`~forgekit.core.protocols.TagProvider`.
* No imports from ``cli`` or ``infra``.
* Diagnostics only through :mod:`forgekit.utils.logger`.
"""

from forgekit.core.models import Manifest, VersionTuple
from forgekit.core.protocols import TagProvider
from forgekit.core.semver import (
    compare_versions,
    format_version,
    parse_version,
    version_at_most,
)
from forgekit.core.version_service import VersionService

__all__: list[str] = [
    "Manifest",
    "TagProvider",
    "VersionService",
    "VersionTuple",
    "compare_versions",
    "format_version",
    "parse_version",
    "version_at_most",
]
