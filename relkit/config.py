"""Configuration loading.

Settings live in the ``[tool.relkit]`` table of the project's
``pyproject.toml``. A standalone ``relkit.toml`` may be passed instead; it
can hold the settings at top level or under ``[tool.relkit]``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
from pydantic import ValidationError
from tomlkit.exceptions import ParseError

from .models import ReleaseConfig


class ConfigError(Exception):
    """Raised when the configuration can't be read or is invalid."""


def _tool_table(doc: Any) -> Any:
    return doc.get("tool", {}).get("relkit")


def load_config(path: Path | None = None) -> ReleaseConfig:
    """Load release settings.

    Args:
        path: Explicit config file. When omitted, ``pyproject.toml`` in the
              working directory is used if present, otherwise defaults.

    Raises:
        ConfigError: If an explicit path is missing, or the file doesn't
            parse or validate.
    """
    if path is None:
        path = Path.cwd() / "pyproject.toml"
        if not path.is_file():
            return ReleaseConfig()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        doc = tomlkit.parse(path.read_text(encoding="utf-8"))
    except ParseError as exc:
        raise ConfigError(f"{path}: invalid TOML: {exc}") from exc

    table = _tool_table(doc)
    if table is None and path.name != "pyproject.toml":
        table = doc
    data = table.unwrap() if table is not None else {}

    try:
        return ReleaseConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"{path}: invalid [tool.relkit] settings:\n{exc}") from exc
