"""Infrastructure layer — external system integration.

This layer wraps all interaction with the filesystem (the manifest) and
the network (the Git forge).  Every raw third-party exception must be
caught here and re-raised as a :class:`~forgekit.exceptions.ForgeKitError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from forgekit.infra.manifest_loader import get_manifest, load_manifest, reset_manifest
from forgekit.infra.tag_provider import HttpTagProvider

__all__: list[str] = [
    "HttpTagProvider",
    "get_manifest",
    "load_manifest",
    "reset_manifest",
]
