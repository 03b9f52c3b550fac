"""CLI entry point for relkit."""

from __future__ import annotations

from pathlib import Path

import click

from relkit.config import ConfigError, load_config
from relkit.pipeline import run_release
from relkit.prompts import ClickPrompter
from relkit.versions import (
    PRERELEASE_STAGES,
    InvalidVersionError,
    ReleaseType,
    increment,
)

RELEASE_TYPES = [t.value for t in ReleaseType]


@click.group()
@click.version_option(package_name="relkit")
def cli() -> None:
    """Release a package: lint, build, bump, tag, push, and publish."""


@cli.command()
@click.option(
    "-t",
    "--type",
    "release_type",
    type=click.Choice(RELEASE_TYPES),
    default=None,
    help="Release type. Asked for interactively when omitted.",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: [tool.relkit] in ./pyproject.toml).",
)
def release(release_type: str | None, config_path: Path | None) -> None:
    """Run the interactive release procedure in the current directory."""
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    run_release(
        config,
        ClickPrompter(),
        ReleaseType(release_type) if release_type else None,
    )


@cli.command("next-version")
@click.argument("current")
@click.argument(
    "release_type", type=click.Choice([t for t in RELEASE_TYPES if t != "custom"])
)
@click.option(
    "-s",
    "--stage",
    type=click.Choice(PRERELEASE_STAGES),
    default=None,
    help="Prerelease stage for pre* types (default: alpha).",
)
def next_version(current: str, release_type: str, stage: str | None) -> None:
    """Print the version CURRENT would be bumped to."""
    try:
        click.echo(increment(current, ReleaseType(release_type), stage))
    except InvalidVersionError as exc:
        raise click.ClickException(str(exc)) from exc
