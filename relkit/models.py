"""Data models for relkit.

These Pydantic models carry the release configuration and the record of a
version change through the release procedure.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Commands(BaseModel):
    """External commands run by the gated steps.

    Each command is an argv list. ``{name}``, ``{version}`` and
    ``{registry_url}`` are substituted before running, and glob arguments
    such as ``dist/*`` are expanded.

    Attributes:
        lint: Lints staged files (pre-commit checks the staging area by default).
        build: Builds the distribution.
        package_lint: Validates the built distribution.
        publish: Uploads to the registry at ``registry_url``.
        mirror_sync: Optional best-effort mirror sync; its result is ignored.
    """

    model_config = ConfigDict(extra="forbid")

    lint: list[str] = Field(default_factory=lambda: ["pre-commit", "run"])
    build: list[str] = Field(default_factory=lambda: ["uv", "build"])
    package_lint: list[str] = Field(
        default_factory=lambda: ["uvx", "twine", "check", "--strict", "dist/*"]
    )
    publish: list[str] = Field(
        default_factory=lambda: ["uv", "publish", "--publish-url", "{registry_url}"]
    )
    mirror_sync: list[str] | None = None


class ReleaseConfig(BaseModel):
    """Settings from ``[tool.relkit]``.

    Attributes:
        manifest: Manifest file holding name and version, relative to the root.
        docs: Documentation files whose ``name@major.minor`` references
              follow minor and major releases.
        registry_url: Upload URL passed to the publish command.
        remote: Git remote the tag is pushed to.
        tag_prefix: Prefix for release tags (``v`` gives ``v1.2.3``).
        commit_message: Release commit message; ``{version}`` is substituted.
        json_indent: Indent used when rewriting a JSON manifest.
    """

    model_config = ConfigDict(extra="forbid")

    manifest: str = "pyproject.toml"
    docs: list[str] = Field(default_factory=lambda: ["README.md"])
    registry_url: str = "https://upload.pypi.org/legacy/"
    remote: str = "origin"
    tag_prefix: str = "v"
    commit_message: str = "chore(release): v{version}"
    json_indent: int = Field(default=2, ge=1)
    commands: Commands = Field(default_factory=Commands)


class VersionBump(BaseModel):
    """Records the version change made by a release.

    Attributes:
        name: Package name from the manifest.
        old: The version before bumping.
        new: The version after bumping.
    """

    name: str
    old: str
    new: str
