"""Operator interaction.

The release procedure only talks to a ``Prompter``, so its decisions can be
driven by a scripted responder in tests. ``ClickPrompter`` is the terminal
implementation.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, TypeVar

import click

T = TypeVar("T")


class Prompter(Protocol):
    """What the release procedure needs from an operator."""

    def select(self, message: str, choices: Sequence[tuple[str, T]]) -> T:
        """Pick one value from labelled choices."""
        ...

    def text(self, message: str) -> str:
        """Read free text."""
        ...

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question."""
        ...


class ClickPrompter:
    """Interactive prompts on the terminal via click."""

    def select(self, message: str, choices: Sequence[tuple[str, T]]) -> T:
        click.echo(message)
        for i, (label, _) in enumerate(choices, start=1):
            click.echo(f"  {i}) {label}")
        index = click.prompt(
            "Choose",
            type=click.IntRange(1, len(choices)),
            default=1,
            show_default=True,
        )
        return choices[index - 1][1]

    def text(self, message: str) -> str:
        return click.prompt(message, type=str).strip()

    def confirm(self, message: str) -> bool:
        return click.confirm(message, default=False)
