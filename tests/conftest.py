"""Shared pytest fixtures and configuration for the forgekit test suite.

Guidelines
----------
* No internet access in any test — HTTP goes through ``httpx.MockTransport``
  or a mocked :class:`TagProvider`.
* Process-wide singletons (manifest, log facade, version service) are
  reset around every test.
* Tests must not depend on the caller's ``FORGEKIT_*`` environment.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from forgekit.cli.version_cmd import reset_version_service
from forgekit.core.models import Manifest
from forgekit.infra.manifest_loader import reset_manifest
from forgekit.utils.logger import CONTEXT_ATTR, reset_logger
from forgekit.utils.settings import get_settings

_ENV_VARS: tuple[str, ...] = (
    "FORGEKIT_LOG_LEVEL",
    "FORGEKIT_DEBUG",
    "FORGEKIT_SHOW_TRACE",
    "FORGEKIT_PRINT_BANNER",
    "FORGEKIT_MANIFEST",
)

TEST_BIN: str = "forgekit-test"


class RecordCollector(logging.Handler):
    """Handler that keeps every record it receives."""

    def __init__(self) -> None:
        super().__init__(level=logging.NOTSET)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    @property
    def messages(self) -> list[str]:
        return [record.getMessage() for record in self.records]

    def contexts(self) -> list[dict[str, Any]]:
        return [getattr(record, CONTEXT_ATTR, {}) for record in self.records]


def attach_collector(name: str) -> tuple[logging.Logger, RecordCollector]:
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    collector = RecordCollector()
    logger.addHandler(collector)
    return logger, collector


@pytest.fixture(autouse=True)
def _isolate(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    reset_logger()
    reset_manifest()
    reset_version_service()
    yield
    get_settings.cache_clear()
    reset_logger()
    reset_manifest()
    reset_version_service()


@pytest.fixture
def manifest() -> Manifest:
    return Manifest(
        name="app",
        version="1.4.0",
        repository="https://example.com/org/app",
        bin="app",
        application="App",
    )


@pytest.fixture
def collector(request: pytest.FixtureRequest) -> Iterator[RecordCollector]:
    """Collector on a throwaway sink; the sink is ``collector.sink``."""
    logger, handler = attach_collector(f"forgekit.tests.{request.node.name}")
    handler.sink = logger  # type: ignore[attr-defined]
    yield handler
    logger.removeHandler(handler)


@pytest.fixture
def manifest_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Write a manifest to disk and point ``FORGEKIT_MANIFEST`` at it."""
    path = tmp_path / "manifest.json"
    path.write_text(
        json.dumps(
            {
                "name": "forgekit-test",
                "application": "ForgeKit Test",
                "bin": TEST_BIN,
                "version": "1.4.0",
                "repository": "https://example.com/org/app.git",
                "log_level": "info",
                "private": False,
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("FORGEKIT_MANIFEST", str(path))
    return path


@pytest.fixture
def bin_collector() -> Iterator[RecordCollector]:
    """Collector on the sink the CLI builds for :data:`TEST_BIN`."""
    logger, handler = attach_collector(TEST_BIN)
    yield handler
    logger.removeHandler(handler)
