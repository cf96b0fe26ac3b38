"""Domain models for forgekit.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and construction from raw dicts.  They
carry zero I/O and zero dependencies on external packages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from forgekit.exceptions import ManifestError

VersionTuple = tuple[int, ...]
"""Integer parts of a dotted version string.  ``()`` means unparseable."""


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Manifest:
    """Static identity, version and repository metadata for the application.

    Loaded once at process start by
    :func:`~forgekit.infra.manifest_loader.get_manifest` and read-only
    thereafter.
    """

    name: str
    """Project name (e.g. ``forgekit``)."""

    version: str
    """Version of the running build (e.g. ``1.4.0``)."""

    repository: str = ""
    """Git repository URL, possibly ending in ``.git``."""

    private: bool = False
    """When ``True`` no remote version lookup is ever attempted."""

    bin: str = ""
    """Executable name; also used as the logger name."""

    application: str = ""
    aliases: tuple[str, ...] = ()
    homepage: str = ""
    description: str = ""
    main: str = ""
    author: str = ""
    license: str = ""
    keywords: tuple[str, ...] = ()
    platforms: tuple[str, ...] = ()

    log_level: str = ""
    """Default log level name, used when no environment override is set."""

    debug: bool = False
    show_trace: bool = False

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Manifest:
        """Build a :class:`Manifest` from decoded manifest JSON.

        Raises
        ------
        ManifestError
            If ``name`` or ``version`` is missing or not a string, or a
            flag field holds anything but a JSON boolean.
        """
        for key in ("name", "version"):
            value = raw.get(key)
            if not isinstance(value, str) or not value.strip():
                raise ManifestError(
                    f"Manifest field '{key}' is missing or empty.",
                    hint="Check the manifest.json bundled with the application.",
                )

        name = str(raw["name"])
        return cls(
            name=name,
            version=str(raw["version"]),
            repository=str(raw.get("repository") or ""),
            private=_flag(raw, "private"),
            bin=str(raw.get("bin") or name),
            application=str(raw.get("application") or ""),
            aliases=_str_tuple(raw.get("aliases")),
            homepage=str(raw.get("homepage") or ""),
            description=str(raw.get("description") or ""),
            main=str(raw.get("main") or ""),
            author=str(raw.get("author") or ""),
            license=str(raw.get("license") or ""),
            keywords=_str_tuple(raw.get("keywords")),
            platforms=_str_tuple(raw.get("platforms")),
            log_level=str(raw.get("log_level") or ""),
            debug=_flag(raw, "debug"),
            show_trace=_flag(raw, "show_trace"),
        )


def _str_tuple(value: object) -> tuple[str, ...]:
    """Coerce an optional JSON list into a tuple of strings."""
    if not isinstance(value, list):
        return ()
    return tuple(str(item) for item in value)


def _flag(raw: dict[str, Any], key: str) -> bool:
    """Return a boolean manifest field; absent or ``null`` means ``False``."""
    value = raw.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ManifestError(
            f"Manifest field '{key}' must be true or false, got {value!r}.",
            hint="Use an unquoted JSON boolean in manifest.json.",
        )
    return value
