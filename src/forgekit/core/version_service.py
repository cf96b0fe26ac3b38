"""Core version service — is the running build the latest one?

The service compares the manifest version with the newest tag published
in the source repository.  It depends on a
:class:`~forgekit.core.protocols.TagProvider` injected at construction
time, keeping the core free of any HTTP imports.

Caching
-------
* The current version is read from the manifest once.
* The latest version is fetched on the first lookup that finds the cache
  empty, then reused for the rest of the process.
  :meth:`VersionService.update_latest_version` forces a refetch.
* ``last_checked_at`` is stamped after every fetch attempt that got past
  the private-repository guard, whether it succeeded or not.

Guarantees
----------
* Private repositories are rejected before any network access.
* Only :class:`~forgekit.exceptions.ForgeKitError` subclasses escape.
"""

from __future__ import annotations

import logging
from datetime import datetime

from forgekit.core.models import Manifest
from forgekit.core.protocols import TagProvider
from forgekit.core.semver import parse_version, version_at_most
from forgekit.exceptions import (
    ForgeKitError,
    InvalidVersionError,
    PrivateRepositoryError,
    TagFetchError,
    VersionMismatchError,
)
from forgekit.utils.levels import LogLevel
from forgekit.utils.logger import LogFacade, get_facade

NO_REPOSITORY: str = "No repository URL set in the manifest."


class VersionService:
    """Stateful service answering "which version am I, which is newest?".

    Parameters
    ----------
    manifest:
        Identity and repository metadata of the running build.
    tag_provider:
        Any object satisfying the :class:`TagProvider` protocol.
    facade:
        Logging facade to report through.  Defaults to the process-wide
        one.
    logger:
        Optional dedicated sink; ``None`` logs through the process-wide
        sink.
    """

    def __init__(
        self,
        manifest: Manifest,
        tag_provider: TagProvider,
        *,
        facade: LogFacade | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._manifest: Manifest = manifest
        self._tag_provider: TagProvider = tag_provider
        self._facade: LogFacade | None = facade
        self.logger: logging.Logger | None = logger
        self._current_version: str = ""
        self._latest_version: str = ""
        self.last_checked_at: datetime | None = None

    # ------------------------------------------------------------------
    # Manifest accessors
    # ------------------------------------------------------------------

    def get_name(self) -> str:
        return self._manifest.name

    def get_version(self) -> str:
        return self._manifest.version

    def get_repository(self) -> str:
        return self._manifest.repository or NO_REPOSITORY

    def is_private(self) -> bool:
        return self._manifest.private

    @property
    def latest_version(self) -> str:
        """Cached latest version; empty until the first successful fetch."""
        return self._latest_version

    def version_info(self) -> str:
        """Two-line summary of the running version and its repository."""
        return f"Version: {self.get_version()}\nGit repository: {self.get_repository()}"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_current_version(self) -> str:
        """Return the manifest version, cached after the first read."""
        if not self._current_version:
            self._current_version = self._manifest.version
        return self._current_version

    def get_latest_version(self) -> str:
        """Return the newest tag, fetching it when nothing is cached.

        Raises
        ------
        PrivateRepositoryError
            If the manifest marks the repository private.
        TagFetchError
            If the remote lookup fails.
        """
        self._ensure_public("Cannot fetch latest version for private repositories.")
        if not self._latest_version:
            self.update_latest_version()
        return self._latest_version

    def is_latest_version(self) -> bool:
        """Return ``True`` unless the latest tag is newer than the current version.

        Raises
        ------
        PrivateRepositoryError
            If the manifest marks the repository private.
        TagFetchError
            If the remote lookup fails.
        InvalidVersionError
            If either version cannot be parsed.
        VersionMismatchError
            If the two versions have a different number of parts.
        """
        self._ensure_public("Cannot check version for private repositories.")
        if not self._latest_version:
            self.update_latest_version()

        current = parse_version(self.get_current_version())
        latest = parse_version(self._latest_version)

        if not current or not latest:
            raise InvalidVersionError(
                "invalid version format",
                hint=f"current={self.get_current_version()!r} latest={self._latest_version!r}",
            )
        if len(current) != len(latest):
            raise VersionMismatchError(
                "version parts length mismatch",
                hint=f"current={self.get_current_version()!r} latest={self._latest_version!r}",
            )
        return version_at_most(latest, current)

    def update_latest_version(self) -> str:
        """Fetch the newest tag from the repository and cache it.

        Raises
        ------
        PrivateRepositoryError
            If the manifest marks the repository private.  No fetch is
            attempted and ``last_checked_at`` is left untouched.
        TagFetchError
            If the remote lookup fails for any reason.
        """
        self._ensure_public("Cannot fetch latest version for private repositories.")
        try:
            tag = self._tag_provider.latest_tag(self._repository_without_git())
        except ForgeKitError:
            raise
        except Exception as exc:
            self._log(LogLevel.ERROR, f"Recovered from error in latest tag lookup: {exc}")
            raise TagFetchError(
                f"Unexpected error while fetching latest tag: {exc}",
            ) from exc
        finally:
            self._set_last_checked_at(datetime.now().astimezone())

        self._latest_version = tag
        return tag

    def get_latest_release(self) -> str:
        """Return the tag the repository's latest-release page points at.

        Unlike :meth:`get_latest_version` this is never cached.

        Raises
        ------
        PrivateRepositoryError
            If the manifest marks the repository private.
        TagFetchError
            If the release page cannot be resolved.
        """
        self._ensure_public("Cannot fetch latest version for private repositories.")
        try:
            return self._tag_provider.latest_release(self._repository_without_git())
        except ForgeKitError:
            raise
        except Exception as exc:
            raise TagFetchError(
                f"Unexpected error while fetching latest release: {exc}",
            ) from exc

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_public(self, message: str) -> None:
        if self._manifest.private:
            raise PrivateRepositoryError(message)

    def _repository_without_git(self) -> str:
        return self._manifest.repository.strip().removesuffix(".git")

    def _set_last_checked_at(self, when: datetime) -> None:
        self.last_checked_at = when
        self._log(LogLevel.DEBUG, f"Last checked at: {when.isoformat(timespec='seconds')}")

    def _log(self, severity: LogLevel, *messages: object) -> None:
        facade = self._facade if self._facade is not None else get_facade()
        facade.obj_log(self, severity, *messages, stacklevel=2)
