"""Custom exception hierarchy for forgekit.

All exceptions that cross layer boundaries must inherit from
:class:`ForgeKitError`.  Raw third-party exceptions (e.g. from httpx)
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
ForgeKitError
├── ManifestError
├── ConfigError
├── VersionError
│   ├── InvalidVersionError
│   ├── VersionMismatchError
│   └── PrivateRepositoryError
├── TagFetchError
│   ├── RepositoryNotSetError
│   ├── UnexpectedStatusError
│   ├── UnexpectedContentTypeError
│   └── NoTagsFoundError
└── MissingDependencyError
"""

from __future__ import annotations


class ForgeKitError(Exception):
    """Base exception for all forgekit errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Manifest --------------------------------------------------------------

class ManifestError(ForgeKitError):
    """Raised when the application manifest is missing or malformed."""


# --- Environment settings --------------------------------------------------

class ConfigError(ForgeKitError):
    """Raised when a ``FORGEKIT_*`` environment variable holds an invalid value."""


# --- Version comparison ----------------------------------------------------

class VersionError(ForgeKitError):
    """Base class for version lookup and comparison failures."""


class InvalidVersionError(VersionError):
    """Raised when a version string cannot be parsed into integer parts."""


class VersionMismatchError(VersionError):
    """Raised when two versions have a different number of parts."""


class PrivateRepositoryError(VersionError):
    """Raised when a remote lookup is requested for a private repository."""


# --- Remote tag lookup -----------------------------------------------------

class TagFetchError(ForgeKitError):
    """Raised when the latest tag cannot be fetched from the repository."""


class RepositoryNotSetError(TagFetchError):
    """Raised when the manifest carries no repository URL."""


class UnexpectedStatusError(TagFetchError):
    """Raised when the repository answers with a non-200 status."""

    def __init__(
        self, message: str, *, status_code: int, hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code: int = status_code


class UnexpectedContentTypeError(TagFetchError):
    """Raised when the tags endpoint does not answer with JSON."""


class NoTagsFoundError(TagFetchError):
    """Raised when the repository has no tags at all."""


# --- Environment / tooling -------------------------------------------------

class MissingDependencyError(ForgeKitError):
    """Raised when an optional runtime dependency is not installed."""
