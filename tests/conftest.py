"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest


class ScriptedPrompter:
    """Prompter that answers from pre-recorded responses.

    ``selections`` may name the value of a choice, its label, or the first
    word of its label (``"rc"`` for ``"rc (1.2.4-rc.0)"``).
    Every question asked is recorded so tests can check what was offered.
    """

    def __init__(
        self,
        selections: Sequence[Any] = (),
        texts: Sequence[str] = (),
        confirms: Sequence[bool] = (),
    ) -> None:
        self.selections = list(selections)
        self.texts = list(texts)
        self.confirms = list(confirms)
        self.select_calls: list[tuple[str, list[tuple[str, Any]]]] = []
        self.text_calls: list[str] = []
        self.confirm_calls: list[str] = []

    def select(self, message: str, choices: Sequence[tuple[str, Any]]) -> Any:
        self.select_calls.append((message, list(choices)))
        wanted = self.selections.pop(0)
        for label, value in choices:
            if wanted in (label, value, label.split()[0]):
                return value
        raise AssertionError(f"{wanted!r} not among {choices!r}")

    def text(self, message: str) -> str:
        self.text_calls.append(message)
        return self.texts.pop(0)

    def confirm(self, message: str) -> bool:
        self.confirm_calls.append(message)
        return self.confirms.pop(0)


@pytest.fixture
def scripted_prompter() -> Callable[..., ScriptedPrompter]:
    """Factory for prompters that answer from pre-recorded responses."""
    return ScriptedPrompter


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A package checkout at version 1.2.3 with a README, as the working dir."""
    (tmp_path / "pyproject.toml").write_text(
        """\
# Build settings
[project]
name = "mypkg"
version = "1.2.3"  # bumped by relkit
dependencies = ["click>=8.0"]

[tool.relkit]
docs = ["README.md"]
"""
    )
    (tmp_path / "README.md").write_text(
        "Install with `pip install mypkg@1.2`.\n\nPinned: mypkg@1.2, not mypkg@1.25.\n"
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def package_json(tmp_path: Path) -> Path:
    """A JSON manifest with extra fields."""
    path = tmp_path / "package.json"
    path.write_text(
        '{\n  "name": "mypkg",\n  "version": "0.4.0-beta.2",\n'
        '  "scripts": {\n    "build": "tsc"\n  },\n  "private": false\n}\n'
    )
    return path
