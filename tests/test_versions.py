"""Tests for relkit.versions."""

from __future__ import annotations

import pytest

from relkit.versions import (
    InvalidVersionError,
    ReleaseType,
    candidate_stages,
    current_stage,
    increment,
    is_valid,
    parse_version,
)


class TestParseVersion:
    def test_full_semver(self) -> None:
        v = parse_version("1.2.3-rc.1+build.7")
        assert (v.major, v.minor, v.patch) == (1, 2, 3)
        assert v.prerelease == "rc.1"
        assert v.build == "build.7"

    @pytest.mark.parametrize("value", ["1.2", "v1.2.3", "01.2.3", "", "latest"])
    def test_rejects_invalid(self, value: str) -> None:
        with pytest.raises(InvalidVersionError) as excinfo:
            parse_version(value)
        assert excinfo.value.value == value
        assert repr(value) in str(excinfo.value)

    def test_is_valid(self) -> None:
        assert is_valid("2.0.0-alpha.0")
        assert not is_valid("2.0")


class TestPlainBumps:
    @pytest.mark.parametrize(
        ("release_type", "expected"),
        [
            (ReleaseType.PATCH, "1.2.4"),
            (ReleaseType.MINOR, "1.3.0"),
            (ReleaseType.MAJOR, "2.0.0"),
        ],
    )
    def test_stable(self, release_type: ReleaseType, expected: str) -> None:
        assert increment("1.2.3", release_type) == expected

    def test_clears_prerelease_and_build(self) -> None:
        assert increment("1.2.3-beta.1+sha.abc", ReleaseType.MINOR) == "1.3.0"
        assert increment("1.2.3-beta.1", ReleaseType.MAJOR) == "2.0.0"

    def test_patch_finalizes_prerelease(self) -> None:
        assert increment("1.2.4-rc.0", ReleaseType.PATCH) == "1.2.4"

    def test_minor_finalizes_minor_prerelease(self) -> None:
        assert increment("1.3.0-alpha.2", ReleaseType.MINOR) == "1.3.0"


class TestPreBumps:
    def test_prepatch(self) -> None:
        assert increment("1.2.3", ReleaseType.PREPATCH, "alpha") == "1.2.4-alpha.0"

    def test_preminor(self) -> None:
        assert increment("1.2.3", ReleaseType.PREMINOR, "beta") == "1.3.0-beta.0"

    def test_premajor(self) -> None:
        assert increment("1.2.3", ReleaseType.PREMAJOR, "rc") == "2.0.0-rc.0"

    def test_prerelease_from_stable(self) -> None:
        assert increment("1.2.3", ReleaseType.PRERELEASE, "alpha") == "1.2.4-alpha.0"

    def test_prerelease_same_stage_bumps_counter(self) -> None:
        assert increment("1.2.4-beta.0", ReleaseType.PRERELEASE, "beta") == "1.2.4-beta.1"

    def test_prerelease_next_stage_restarts_counter(self) -> None:
        assert increment("1.2.4-beta.3", ReleaseType.PRERELEASE, "rc") == "1.2.4-rc.0"

    def test_prerelease_bumps_last_numeric_identifier(self) -> None:
        assert increment("1.2.4-beta.1.5", ReleaseType.PRERELEASE, "beta") == "1.2.4-beta.1.6"
        assert increment("1.2.4-rc.2.x", ReleaseType.PRERELEASE, "rc") == "1.2.4-rc.3.x"

    def test_prerelease_always_moves_forward(self) -> None:
        for current, stage in [
            ("1.2.4-beta.1.5", "beta"),
            ("1.2.4-beta.1.5", "rc"),
            ("1.2.4-alpha.x", "alpha"),
            ("1.2.3", "alpha"),
        ]:
            nxt = increment(current, ReleaseType.PRERELEASE, stage)
            assert parse_version(nxt) > parse_version(current)

    def test_prerelease_without_counter(self) -> None:
        assert increment("1.2.4-rc", ReleaseType.PRERELEASE, "rc") == "1.2.4-rc.0"

    def test_default_stage_is_alpha(self) -> None:
        assert increment("1.2.3", ReleaseType.PREMINOR) == "1.3.0-alpha.0"

    def test_unknown_stage(self) -> None:
        with pytest.raises(ValueError, match="stage"):
            increment("1.2.3", ReleaseType.PREPATCH, "dev")

    def test_custom_is_not_computed(self) -> None:
        with pytest.raises(ValueError):
            increment("1.2.3", ReleaseType.CUSTOM)


class TestStages:
    def test_current_stage(self) -> None:
        assert current_stage("1.2.4-beta.3") == "beta"
        assert current_stage("1.2.4-rc") == "rc"
        assert current_stage("1.2.4") is None
        assert current_stage("1.2.4-dev.1") is None

    def test_prerelease_from_beta_drops_alpha(self) -> None:
        assert candidate_stages(ReleaseType.PRERELEASE, "1.2.4-beta.0") == ["beta", "rc"]

    def test_prerelease_from_stable_offers_all(self) -> None:
        assert candidate_stages(ReleaseType.PRERELEASE, "1.2.3") == ["alpha", "beta", "rc"]

    def test_prerelease_from_rc_is_single(self) -> None:
        assert candidate_stages(ReleaseType.PRERELEASE, "1.2.4-rc.1") == ["rc"]

    def test_new_prerelease_line_offers_all(self) -> None:
        assert candidate_stages(ReleaseType.PREMINOR, "1.2.4-rc.1") == [
            "alpha",
            "beta",
            "rc",
        ]


class TestReleaseType:
    def test_menu_order(self) -> None:
        assert [t.value for t in ReleaseType] == [
            "patch",
            "minor",
            "major",
            "prerelease",
            "prepatch",
            "preminor",
            "premajor",
            "custom",
        ]

    def test_flags(self) -> None:
        assert ReleaseType.PREMAJOR.is_pre
        assert not ReleaseType.PATCH.is_pre
        assert ReleaseType.MINOR.changes_line
        assert not ReleaseType.PREMINOR.changes_line
