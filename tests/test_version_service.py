"""Tests for VersionService (core/version_service.py).

The :class:`TagProvider` dependency is **mocked** — no internet access.
These tests verify:

* Current / latest version lookups and caching
* The at-most comparison and its error cases
* Private repositories rejected before any network call
* ``last_checked_at`` stamping after fetch attempts
* Unexpected provider errors wrapped as ``TagFetchError``
"""

from __future__ import annotations

import dataclasses
from unittest.mock import MagicMock

import pytest

from conftest import RecordCollector, attach_collector
from forgekit.core.models import Manifest
from forgekit.core.version_service import NO_REPOSITORY, VersionService
from forgekit.exceptions import (
    InvalidVersionError,
    NoTagsFoundError,
    PrivateRepositoryError,
    TagFetchError,
    VersionMismatchError,
)
from forgekit.utils.levels import LogLevel
from forgekit.utils.logger import LogFacade


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _fake_provider(tag: str | Exception = "1.5.0") -> MagicMock:
    """Return a mock TagProvider.

    If *tag* is a string, ``latest_tag`` returns it.
    If *tag* is an exception, ``latest_tag`` raises it.
    """
    provider = MagicMock()
    if isinstance(tag, Exception):
        provider.latest_tag.side_effect = tag
    else:
        provider.latest_tag.return_value = tag
    provider.latest_release.return_value = "v1.5.0"
    return provider


def _service(
    manifest: Manifest,
    collector: RecordCollector,
    provider: MagicMock,
    **changes: object,
) -> VersionService:
    if changes:
        manifest = dataclasses.replace(manifest, **changes)
    facade = LogFacade(
        manifest,
        sink=collector.sink,  # type: ignore[attr-defined]
        level=LogLevel.DEBUG,
    )
    return VersionService(manifest, provider, facade=facade)


# ---------------------------------------------------------------------------
# End-to-end lookups
# ---------------------------------------------------------------------------

class TestLookups:
    def test_outdated_build(self, manifest: Manifest, collector: RecordCollector) -> None:
        service = _service(manifest, collector, _fake_provider("1.5.0"))

        assert service.get_latest_version() == "1.5.0"
        assert service.is_latest_version() is False
        assert service.get_current_version() == "1.4.0"

    def test_up_to_date_build(self, manifest: Manifest, collector: RecordCollector) -> None:
        service = _service(manifest, collector, _fake_provider("v1.4.0"))
        assert service.is_latest_version() is True

    def test_newer_than_latest_tag(
        self, manifest: Manifest, collector: RecordCollector,
    ) -> None:
        service = _service(manifest, collector, _fake_provider("1.3.9"))
        assert service.is_latest_version() is True

    @pytest.mark.parametrize(
        ("latest", "expected"),
        [("1.4.1", False), ("2.0.0", False), ("1.4.0", True), ("0.9.9", True)],
    )
    def test_latest_answer_follows_tag(
        self,
        manifest: Manifest,
        collector: RecordCollector,
        latest: str,
        expected: bool,
    ) -> None:
        service = _service(manifest, collector, _fake_provider(latest))
        assert service.is_latest_version() is expected

    def test_prerelease_suffix_ignored(
        self, manifest: Manifest, collector: RecordCollector,
    ) -> None:
        service = _service(
            manifest, collector, _fake_provider("1.4.0-rc.2"), version="1.4.0-dev",
        )
        assert service.is_latest_version() is True

    def test_latest_is_cached(self, manifest: Manifest, collector: RecordCollector) -> None:
        provider = _fake_provider("1.5.0")
        service = _service(manifest, collector, provider)

        service.get_latest_version()
        service.get_latest_version()
        service.is_latest_version()

        provider.latest_tag.assert_called_once_with("https://example.com/org/app")

    def test_git_suffix_stripped(
        self, manifest: Manifest, collector: RecordCollector,
    ) -> None:
        provider = _fake_provider()
        service = _service(
            manifest, collector, provider,
            repository="https://example.com/org/app.git",
        )
        service.get_latest_version()
        provider.latest_tag.assert_called_once_with("https://example.com/org/app")

    def test_update_forces_refetch(
        self, manifest: Manifest, collector: RecordCollector,
    ) -> None:
        provider = _fake_provider("1.5.0")
        service = _service(manifest, collector, provider)

        service.get_latest_version()
        provider.latest_tag.return_value = "1.6.0"

        assert service.update_latest_version() == "1.6.0"
        assert service.latest_version == "1.6.0"
        assert provider.latest_tag.call_count == 2

    def test_latest_release(self, manifest: Manifest, collector: RecordCollector) -> None:
        provider = _fake_provider()
        service = _service(manifest, collector, provider)

        assert service.get_latest_release() == "v1.5.0"
        provider.latest_release.assert_called_once_with("https://example.com/org/app")


# ---------------------------------------------------------------------------
# Comparison errors
# ---------------------------------------------------------------------------

class TestComparisonErrors:
    def test_arity_mismatch_is_error(
        self, manifest: Manifest, collector: RecordCollector,
    ) -> None:
        service = _service(manifest, collector, _fake_provider("1.2.3"), version="1.2")
        with pytest.raises(VersionMismatchError, match="length mismatch"):
            service.is_latest_version()

    def test_unparseable_latest(
        self, manifest: Manifest, collector: RecordCollector,
    ) -> None:
        service = _service(manifest, collector, _fake_provider("nightly"))
        with pytest.raises(InvalidVersionError, match="invalid version format"):
            service.is_latest_version()

    def test_unparseable_current(
        self, manifest: Manifest, collector: RecordCollector,
    ) -> None:
        service = _service(manifest, collector, _fake_provider(), version="dev")
        with pytest.raises(InvalidVersionError):
            service.is_latest_version()


# ---------------------------------------------------------------------------
# Private repositories
# ---------------------------------------------------------------------------

class TestPrivateRepository:
    @pytest.mark.parametrize(
        "operation",
        [
            "get_latest_version",
            "is_latest_version",
            "update_latest_version",
            "get_latest_release",
        ],
    )
    def test_rejected_without_network(
        self, manifest: Manifest, collector: RecordCollector, operation: str,
    ) -> None:
        provider = _fake_provider()
        service = _service(manifest, collector, provider, private=True)

        with pytest.raises(PrivateRepositoryError, match="private repositories"):
            getattr(service, operation)()

        provider.latest_tag.assert_not_called()
        provider.latest_release.assert_not_called()
        assert service.latest_version == ""
        assert service.last_checked_at is None

    def test_current_version_still_available(
        self, manifest: Manifest, collector: RecordCollector,
    ) -> None:
        service = _service(manifest, collector, _fake_provider(), private=True)
        assert service.get_current_version() == "1.4.0"


# ---------------------------------------------------------------------------
# Fetch bookkeeping
# ---------------------------------------------------------------------------

class TestFetchBookkeeping:
    def test_timestamp_after_success(
        self, manifest: Manifest, collector: RecordCollector,
    ) -> None:
        service = _service(manifest, collector, _fake_provider())
        service.update_latest_version()

        assert service.last_checked_at is not None
        assert any(m.startswith("Last checked at: ") for m in collector.messages)

    def test_timestamp_after_failure(
        self, manifest: Manifest, collector: RecordCollector,
    ) -> None:
        service = _service(manifest, collector, _fake_provider(NoTagsFoundError("No tags found")))

        with pytest.raises(NoTagsFoundError):
            service.get_latest_version()

        assert service.last_checked_at is not None
        assert service.latest_version == ""

    def test_unexpected_error_wrapped(
        self, manifest: Manifest, collector: RecordCollector,
    ) -> None:
        cause = RuntimeError("kaboom")
        service = _service(manifest, collector, _fake_provider(cause))

        with pytest.raises(TagFetchError, match="kaboom") as exc_info:
            service.update_latest_version()

        assert exc_info.value.__cause__ is cause
        assert service.last_checked_at is not None
        assert any("Recovered from error" in m for m in collector.messages)

    def test_dedicated_logger_receives_records(
        self, manifest: Manifest, collector: RecordCollector,
    ) -> None:
        own_sink, own_records = attach_collector("forgekit.tests.service.own")
        service = _service(manifest, collector, _fake_provider())
        service.logger = own_sink

        service.update_latest_version()

        assert any(m.startswith("Last checked at: ") for m in own_records.messages)
        assert collector.messages == []
        own_sink.removeHandler(own_records)


# ---------------------------------------------------------------------------
# Manifest accessors
# ---------------------------------------------------------------------------

class TestAccessors:
    def test_identity(self, manifest: Manifest, collector: RecordCollector) -> None:
        service = _service(manifest, collector, _fake_provider())
        assert service.get_name() == "app"
        assert service.get_version() == "1.4.0"
        assert service.get_repository() == "https://example.com/org/app"
        assert service.version_info() == (
            "Version: 1.4.0\nGit repository: https://example.com/org/app"
        )

    def test_missing_repository(
        self, manifest: Manifest, collector: RecordCollector,
    ) -> None:
        service = _service(manifest, collector, _fake_provider(), repository="")
        assert service.get_repository() == NO_REPOSITORY
