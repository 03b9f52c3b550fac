"""Release procedure: sync → lint → build → check → bump → commit → tag → publish.

This module orchestrates a single package release:
1. Pull the latest changes
2. Lint staged files, build, and validate the built distribution
3. Ask the operator for the kind of version bump and compute the target
4. Confirm the target version
5. Update documentation references (minor/major only) and the manifest
6. Stage, commit, push, tag, and push the tag
7. Publish to the registry, then (best effort) sync the mirror

Every gated step either succeeds or stops the whole run. The only
compensating action is restoring the manifest version when the commit is
rejected (e.g. by a pre-commit hook).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic import BaseModel

from .docs import rewrite_docs
from .manifest import Manifest, load_manifest
from .models import ReleaseConfig, VersionBump
from .prompts import Prompter
from .shell import fatal, git, run_command, step
from .versions import (
    InvalidVersionError,
    ReleaseType,
    candidate_stages,
    increment,
    is_valid,
)


@dataclass
class Step:
    """A named gated step.

    Attributes:
        name: Shown as the step header and reported when the step fails.
        action: Runs the step; returns True on success.
        on_failure: Compensating action run before aborting, if any.
    """

    name: str
    action: Callable[[], bool]
    on_failure: Callable[[], None] | None = None


class ReleaseOutcome(BaseModel):
    """How a run ended.

    Attributes:
        status: "released", "declined" (operator said no), or "failed".
        failed_step: Name of the step that stopped the run, if it failed.
        bump: The version change, once the target version is known.
    """

    status: Literal["released", "declined", "failed"]
    failed_step: str | None = None
    bump: VersionBump | None = None


def run_steps(steps: Sequence[Step]) -> Step | None:
    """Run steps in order, stopping at the first failure.

    Returns:
        The step that failed (after its compensating action ran), or None
        if every step succeeded.
    """
    for s in steps:
        step(s.name)
        if s.action():
            continue
        if s.on_failure is not None:
            s.on_failure()
        return s
    return None


def choose_release_type(prompter: Prompter) -> ReleaseType:
    """Ask the operator which kind of release this is."""
    return prompter.select(
        "Select release type", [(t.value, t) for t in ReleaseType]
    )


def choose_target_version(
    current: str, release_type: ReleaseType, prompter: Prompter
) -> str:
    """Work out the version to release.

    - patch/minor/major: the standard increment of the current version.
    - pre*: pick a prerelease stage, unless only one stage is possible, in
      which case it is used without asking.
    - custom: the operator types the version.

    Raises:
        InvalidVersionError: If the result is not a valid semantic version.
    """
    if release_type is ReleaseType.CUSTOM:
        target = prompter.text(f"Enter the version to release (current: {current})")
    elif release_type.is_pre:
        stages = candidate_stages(release_type, current)
        if len(stages) == 1:
            target = increment(current, release_type, stages[0])
        else:
            choices = []
            for stage in stages:
                version = increment(current, release_type, stage)
                choices.append((f"{stage} ({version})", version))
            target = prompter.select("Select prerelease stage", choices)
    else:
        target = increment(current, release_type)

    if not is_valid(target):
        raise InvalidVersionError(target)
    return target


class ReleaseProcedure:
    """Drives one release of the package checked out at ``root``.

    Args:
        config: Release settings; ``config.docs`` lists the documentation
                files kept in step with minor/major releases.
        prompter: Source of operator decisions.
        root: Package checkout holding the manifest and docs. Defaults to
              the working directory, where the external commands run.
    """

    def __init__(
        self, config: ReleaseConfig, prompter: Prompter, root: Path | None = None
    ) -> None:
        self.config = config
        self.prompter = prompter
        self.root = root if root is not None else Path.cwd()

    def _command(self, argv: Sequence[str], **placeholders: str) -> Callable[[], bool]:
        placeholders.setdefault("registry_url", self.config.registry_url)
        return lambda: run_command(argv, **placeholders)

    def _git(self, *args: str) -> Callable[[], bool]:
        return lambda: git(*args)

    def preflight_steps(self) -> list[Step]:
        """Steps that run before anything is changed."""
        commands = self.config.commands
        return [
            Step("Pulling latest changes", self._git("pull")),
            Step("Linting staged files", self._command(commands.lint)),
            Step("Building", self._command(commands.build)),
            Step("Checking the built package", self._command(commands.package_lint)),
        ]

    def release_steps(
        self, manifest: Manifest, bump: VersionBump, release_type: ReleaseType
    ) -> list[Step]:
        """Steps that write, commit, tag, and publish the new version."""
        tag = f"{self.config.tag_prefix}{bump.new}"
        placeholders = {"name": bump.name, "version": bump.new}
        steps: list[Step] = []

        if release_type.changes_line:

            def update_docs() -> bool:
                docs = [self.root / d for d in self.config.docs]
                rewrite_docs(docs, bump.name, bump.old, bump.new)
                return True

            steps.append(Step("Updating documentation references", update_docs))

        def write_manifest() -> bool:
            manifest.set_version(bump.new)
            manifest.save()
            print(f"  {manifest.path.name}: {bump.old} → {bump.new}")
            return True

        def restore_manifest() -> None:
            manifest.set_version(bump.old)
            manifest.save()
            print(f"  {manifest.path.name}: restored to {bump.old}")

        message = self.config.commit_message.replace("{version}", bump.new)
        steps += [
            Step("Writing manifest", write_manifest),
            Step("Staging changes", self._git("add", "-A")),
            Step("Committing", self._git("commit", "-m", message), restore_manifest),
            Step("Pushing commits", self._git("push")),
            Step(f"Tagging {tag}", self._git("tag", tag)),
            Step(f"Pushing {tag}", self._git("push", self.config.remote, tag)),
            Step(
                f"Publishing {bump.name} {bump.new}",
                self._command(self.config.commands.publish, **placeholders),
            ),
        ]
        return steps

    def sync_mirror(self, bump: VersionBump) -> None:
        """Best-effort mirror sync; failure is ignored."""
        step("Syncing mirror")
        argv = self.config.commands.mirror_sync
        if not argv:
            print("  no mirror_sync command configured, skipped")
            return
        if not self._command(argv, name=bump.name, version=bump.new)():
            print("  mirror sync failed (ignored)")

    def run(self, release_type: ReleaseType | None = None) -> ReleaseOutcome:
        """Run the procedure.

        Args:
            release_type: Pre-selected bump kind; asked for when None.

        Raises:
            ManifestError: If the manifest is missing or malformed.
            InvalidVersionError: If the target version is not valid semver.
        """
        failed = run_steps(self.preflight_steps())
        if failed is not None:
            return ReleaseOutcome(status="failed", failed_step=failed.name)

        manifest = load_manifest(
            self.root / self.config.manifest, indent=self.config.json_indent
        )
        step(f"Releasing {manifest.name} (current version {manifest.version})")

        if release_type is None:
            release_type = choose_release_type(self.prompter)
        target = choose_target_version(manifest.version, release_type, self.prompter)
        bump = VersionBump(name=manifest.name, old=manifest.version, new=target)

        if not self.prompter.confirm(f"Release {bump.name} {bump.new}?"):
            return ReleaseOutcome(status="declined", bump=bump)

        failed = run_steps(self.release_steps(manifest, bump, release_type))
        if failed is not None:
            return ReleaseOutcome(status="failed", failed_step=failed.name, bump=bump)

        self.sync_mirror(bump)
        return ReleaseOutcome(status="released", bump=bump)


def run_release(
    config: ReleaseConfig,
    prompter: Prompter,
    release_type: ReleaseType | None = None,
    root: Path | None = None,
) -> ReleaseOutcome:
    """Execute the release procedure and report how it ended.

    A failed step or any error exits with status 1. Declining the
    confirmation is not an error.
    """
    try:
        outcome = ReleaseProcedure(config, prompter, root).run(release_type)
    except Exception as exc:  # noqa: BLE001
        fatal(str(exc) or type(exc).__name__)

    if outcome.status == "declined":
        print("\nRelease cancelled.")
    elif outcome.status == "failed":
        fatal(f"{outcome.failed_step} failed; release aborted.")
    elif outcome.bump is not None:
        print(f"\n{'=' * 60}\nReleased {outcome.bump.name} {outcome.bump.new}\n{'=' * 60}")
    return outcome
