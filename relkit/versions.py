"""Version parsing and bumping utilities.

Wraps the ``semver`` library with the increment rules used by the release
procedure: plain ``patch``/``minor``/``major`` bumps, ``pre*`` bumps that
start a new prerelease line, and ``prerelease`` bumps that advance the
current one.
"""

from __future__ import annotations

from enum import Enum

import semver

PRERELEASE_STAGES: tuple[str, ...] = ("alpha", "beta", "rc")


class ReleaseType(str, Enum):
    """Kinds of version bump offered to the operator, in menu order."""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"
    PRERELEASE = "prerelease"
    PREPATCH = "prepatch"
    PREMINOR = "preminor"
    PREMAJOR = "premajor"
    CUSTOM = "custom"

    @property
    def is_pre(self) -> bool:
        return self.value.startswith("pre")

    @property
    def changes_line(self) -> bool:
        """Whether the bump moves the major.minor line."""
        return self in (ReleaseType.MINOR, ReleaseType.MAJOR)


class InvalidVersionError(ValueError):
    """Raised when a string is not a valid semantic version."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid semantic version: {value!r}")
        self.value = value


def is_valid(version_str: str) -> bool:
    """Check a string against the semantic versioning grammar.

    Strict: "1.2.3" and "1.2.3-rc.1+build.5" pass, "v1.2.3" and "1.2" do not.
    """
    return semver.Version.is_valid(version_str)


def parse_version(version_str: str) -> semver.Version:
    """Parse a version string into a semver.Version object.

    Raises:
        InvalidVersionError: If the string is not valid semver.
    """
    if not is_valid(version_str):
        raise InvalidVersionError(version_str)
    return semver.Version.parse(version_str)


def current_stage(version_str: str) -> str | None:
    """Return the prerelease stage of a version, if it has a known one.

    Examples:
        "1.2.4-beta.3" → "beta"
        "1.2.4-rc"     → "rc"
        "1.2.4"        → None
        "1.2.4-dev.1"  → None
    """
    prerelease = parse_version(version_str).prerelease
    if not prerelease:
        return None
    stage = prerelease.split(".", 1)[0]
    return stage if stage in PRERELEASE_STAGES else None


def candidate_stages(release_type: ReleaseType, current: str) -> list[str]:
    """Prerelease stages the operator may pick for a ``pre*`` bump.

    Stages only move forward: when advancing an existing prerelease
    (``prerelease``), stages earlier than the current one are dropped.
    Introducing a new prerelease line (``prepatch`` and friends) always
    offers every stage.
    """
    stages = list(PRERELEASE_STAGES)
    if release_type is ReleaseType.PRERELEASE:
        stage = current_stage(current)
        if stage is not None:
            stages = stages[stages.index(stage) :]
    return stages


def _start_prerelease(version: semver.Version, stage: str) -> semver.Version:
    return version.replace(prerelease=f"{stage}.0", build=None)


def _next_prerelease(version: semver.Version, stage: str) -> semver.Version:
    """Advance a prerelease, or start one on the next patch of a stable version.

    Within the same stage the last numeric identifier is incremented
    ("beta.1.5" → "beta.1.6"), or ".0" is appended when there is none.
    """
    if not version.prerelease:
        return _start_prerelease(version.bump_patch(), stage)
    identifiers = version.prerelease.split(".")
    if identifiers[0] != stage:
        return _start_prerelease(version, stage)
    for i in range(len(identifiers) - 1, 0, -1):
        if identifiers[i].isdigit():
            identifiers[i] = str(int(identifiers[i]) + 1)
            break
    else:
        identifiers.append("0")
    return version.replace(prerelease=".".join(identifiers), build=None)


def increment(
    version_str: str, release_type: ReleaseType, stage: str | None = None
) -> str:
    """Compute the next version for a bump kind.

    Examples:
        increment("1.2.3", ReleaseType.MINOR)                   → "1.3.0"
        increment("1.2.4-rc.0", ReleaseType.PATCH)              → "1.2.4"
        increment("1.2.3", ReleaseType.PREMINOR, "alpha")       → "1.3.0-alpha.0"
        increment("1.2.3", ReleaseType.PRERELEASE, "beta")      → "1.2.4-beta.0"
        increment("1.2.4-beta.0", ReleaseType.PRERELEASE, "beta") → "1.2.4-beta.1"
        increment("1.2.4-beta.1", ReleaseType.PRERELEASE, "rc") → "1.2.4-rc.0"

    Raises:
        InvalidVersionError: If version_str is not valid semver.
        ValueError: For ``custom`` (no computed increment) or an unknown stage.
    """
    version = parse_version(version_str)
    if release_type in (ReleaseType.PATCH, ReleaseType.MINOR, ReleaseType.MAJOR):
        return str(version.next_version(release_type.value).replace(build=None))

    if release_type is ReleaseType.CUSTOM:
        raise ValueError("custom versions are entered, not computed")

    stage = stage or PRERELEASE_STAGES[0]
    if stage not in PRERELEASE_STAGES:
        raise ValueError(f"Unknown prerelease stage: {stage!r}")

    if release_type is ReleaseType.PRERELEASE:
        return str(_next_prerelease(version, stage))
    if release_type is ReleaseType.PREPATCH:
        return str(_start_prerelease(version.bump_patch(), stage))
    if release_type is ReleaseType.PREMINOR:
        return str(_start_prerelease(version.bump_minor(), stage))
    return str(_start_prerelease(version.bump_major(), stage))
