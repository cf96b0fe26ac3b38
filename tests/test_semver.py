"""Tests for version parsing and comparison (core/semver.py).

Pure functions only — no I/O, no mocks.
"""

from __future__ import annotations

import pytest

from forgekit.core.semver import (
    compare_versions,
    format_version,
    parse_version,
    version_at_most,
)


# ---------------------------------------------------------------------------
# parse_version
# ---------------------------------------------------------------------------

class TestParseVersion:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("1.4.0", (1, 4, 0)),
            ("v1.4.0", (1, 4, 0)),
            ("1.4.0-rc.1", (1, 4, 0)),
            ("v2.0.10-beta-2", (2, 0, 10)),
            ("10", (10,)),
            ("0.0.1", (0, 0, 1)),
        ],
    )
    def test_valid(self, text: str, expected: tuple[int, ...]) -> None:
        assert parse_version(text) == expected

    @pytest.mark.parametrize(
        "text",
        ["", "latest", "1.x.0", "1..2", "1.2.", "vv1.2", "1.2.3b", " 1.2"],
    )
    def test_unparseable_is_empty(self, text: str) -> None:
        assert parse_version(text) == ()

    def test_negative_part_is_unparseable(self) -> None:
        # "-" starts the pre-release suffix, so nothing numeric remains
        assert parse_version("-1.2") == ()

    def test_non_ascii_digits_rejected(self) -> None:
        assert parse_version("1.²") == ()

    @pytest.mark.parametrize("text", ["v3.2.1-alpha", "3.2.1", "v0.12"])
    def test_round_trip_numeric_core(self, text: str) -> None:
        core = text.split("-", 1)[0].removeprefix("v")
        assert format_version(parse_version(text)) == core


# ---------------------------------------------------------------------------
# compare_versions / version_at_most
# ---------------------------------------------------------------------------

class TestCompareVersions:
    @pytest.mark.parametrize(
        ("left", "right", "expected"),
        [
            ((1, 4, 0), (1, 5, 0), -1),
            ((1, 5, 0), (1, 4, 9), 1),
            ((2, 0, 0), (1, 9, 9), 1),
            ((1, 4, 0), (1, 4, 0), 0),
            ((0, 0, 1), (0, 0, 2), -1),
        ],
    )
    def test_ordering(
        self, left: tuple[int, ...], right: tuple[int, ...], expected: int,
    ) -> None:
        assert compare_versions(left, right) == expected

    @pytest.mark.parametrize(
        ("left", "right"),
        [((1, 2, 3), (1, 2, 4)), ((3, 0), (2, 9)), ((7,), (8,))],
    )
    def test_antisymmetric(
        self, left: tuple[int, ...], right: tuple[int, ...],
    ) -> None:
        assert compare_versions(left, right) == -compare_versions(right, left)
        assert compare_versions(left, left) == 0

    def test_only_common_prefix_compared(self) -> None:
        assert compare_versions((1, 2), (1, 2, 3)) == 0


class TestVersionAtMost:
    def test_older_is_at_most(self) -> None:
        assert version_at_most((1, 4, 0), (1, 5, 0)) is True

    def test_equal_is_at_most(self) -> None:
        assert version_at_most((1, 5, 0), (1, 5, 0)) is True

    def test_newer_is_not(self) -> None:
        assert version_at_most((1, 6, 0), (1, 5, 0)) is False
