"""Package manifest reading and writing.

A manifest is the file that carries the package's name and version. Two
formats are supported, picked by file name:

- ``pyproject.toml``: ``[project].name`` / ``[project].version``. Uses
  tomlkit to preserve formatting and comments, keeping the release commit
  diff down to the one changed line.
- ``*.json`` (e.g. ``package.json``): top-level ``name`` / ``version``,
  rewritten with a stable indent and the original key order.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import ParseError


class ManifestError(Exception):
    """Raised when a manifest is missing or lacks a name/version."""


class Manifest:
    """An in-memory manifest that can be saved back to where it came from."""

    def __init__(self, path: Path, doc: Any, table: Any, indent: int = 2) -> None:
        self.path = path
        self._doc = doc
        self._table = table
        self.indent = indent
        for key in ("name", "version"):
            if not isinstance(table.get(key), str) or not table.get(key):
                raise ManifestError(f"{path}: missing or invalid '{key}' field")

    @property
    def name(self) -> str:
        return str(self._table["name"])

    @property
    def version(self) -> str:
        return str(self._table["version"])

    @property
    def is_json(self) -> bool:
        return self.path.suffix == ".json"

    def set_version(self, version: str) -> None:
        self._table["version"] = version

    def dumps(self) -> str:
        if self.is_json:
            return json.dumps(self._doc, indent=self.indent, ensure_ascii=False) + "\n"
        return tomlkit.dumps(self._doc)

    def save(self) -> None:
        """Write the manifest back to disk, keeping every other field."""
        self.path.write_text(self.dumps(), encoding="utf-8")


def load_manifest(path: Path, indent: int = 2) -> Manifest:
    """Load and parse a manifest file.

    Args:
        path: Path to pyproject.toml or a JSON manifest.
        indent: Indent used when a JSON manifest is written back.

    Raises:
        ManifestError: If the file is missing, unparsable, or has no
            name/version.
    """
    if not path.is_file():
        raise ManifestError(f"Manifest not found: {path}")
    text = path.read_text(encoding="utf-8")

    if path.suffix == ".json":
        try:
            doc = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ManifestError(f"{path}: invalid JSON: {exc}") from exc
        if not isinstance(doc, dict):
            raise ManifestError(f"{path}: expected a JSON object")
        return Manifest(path, doc, doc, indent=indent)

    try:
        doc = tomlkit.parse(text)
    except ParseError as exc:
        raise ManifestError(f"{path}: invalid TOML: {exc}") from exc
    project = doc.get("project")
    if not isinstance(project, dict):
        raise ManifestError(f"{path}: no [project] table")
    return Manifest(path, doc, project, indent=indent)
