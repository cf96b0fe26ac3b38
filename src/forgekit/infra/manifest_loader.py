"""Infrastructure: load the application manifest.

The manifest is a JSON document bundled with the package
(``forgekit/manifest.json``).  Setting ``FORGEKIT_MANIFEST`` to a file
path loads that file instead.

Rules
-----
* JSON decoding and file access happen here and nowhere else.
* Every failure surfaces as :class:`~forgekit.exceptions.ManifestError`.
* The manifest is loaded once per process and then reused.
"""

from __future__ import annotations

import json
import threading
from importlib import resources
from pathlib import Path
from typing import Any

from forgekit.core.models import Manifest
from forgekit.exceptions import ManifestError
from forgekit.utils.settings import get_settings

ENV_MANIFEST: str = "FORGEKIT_MANIFEST"
BUNDLED_MANIFEST: str = "manifest.json"

_manifest: Manifest | None = None
_manifest_lock = threading.Lock()


def load_manifest(path: str | Path | None = None) -> Manifest:
    """Read and validate a manifest.

    Parameters
    ----------
    path:
        Explicit manifest file.  When ``None``, ``FORGEKIT_MANIFEST`` is
        consulted, then the bundled ``manifest.json``.

    Raises
    ------
    ManifestError
        If the file is missing, unreadable, not valid JSON, not a JSON
        object, or lacks a required field.
    ConfigError
        If ``FORGEKIT_*`` environment settings are invalid.
    """
    if path is None:
        path = get_settings().manifest

    if path is not None:
        source = str(path)
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ManifestError(
                f"Cannot read manifest {source}: {exc.strerror or exc}",
                hint=f"Check the path set in {ENV_MANIFEST}.",
            ) from exc
    else:
        source = BUNDLED_MANIFEST
        try:
            text = (
                resources.files("forgekit")
                .joinpath(BUNDLED_MANIFEST)
                .read_text(encoding="utf-8")
            )
        except OSError as exc:
            raise ManifestError(
                "The bundled manifest.json is missing.",
                hint="Reinstall forgekit.",
            ) from exc

    return Manifest.from_dict(_decode(text, source))


def _decode(text: str, source: str) -> dict[str, Any]:
    try:
        raw: object = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError(
            f"Manifest {source} is not valid JSON: {exc.msg} "
            f"(line {exc.lineno}, column {exc.colno})",
        ) from exc
    if not isinstance(raw, dict):
        raise ManifestError(f"Manifest {source} must contain a JSON object.")
    return raw


def get_manifest() -> Manifest:
    """Return the process-wide manifest, loading it on first use."""
    global _manifest
    if _manifest is None:
        with _manifest_lock:
            if _manifest is None:
                _manifest = load_manifest()
    return _manifest


def reset_manifest() -> None:
    """Forget the cached manifest; the next call reloads it."""
    global _manifest
    with _manifest_lock:
        _manifest = None
