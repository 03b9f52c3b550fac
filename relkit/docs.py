"""Keep ``name@major.minor`` references in documentation in step with releases."""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

from .versions import parse_version


def line_reference(name: str, version_str: str) -> str:
    """Format the major.minor reference for a version, e.g. ``mypkg@1.2``."""
    version = parse_version(version_str)
    return f"{name}@{version.major}.{version.minor}"


def rewrite_doc_references(path: Path, name: str, current: str, target: str) -> int:
    """Replace every current-line reference in a file with the target line.

    ``mypkg@1.2`` becomes ``mypkg@1.3`` everywhere in the file, while
    ``mypkg@1.25`` is left alone. The file is only written when something
    changed.

    Returns:
        Number of references replaced.
    """
    old = line_reference(name, current)
    new = line_reference(name, target)
    pattern = re.compile(re.escape(old) + r"(?!\d)")
    text = path.read_text(encoding="utf-8")
    updated, count = pattern.subn(new, text)
    if count:
        path.write_text(updated, encoding="utf-8")
    return count


def rewrite_docs(
    paths: Iterable[Path], name: str, current: str, target: str
) -> dict[Path, int]:
    """Rewrite references in each tracked documentation file.

    Files that don't exist are reported and skipped.
    """
    counts: dict[Path, int] = {}
    for path in paths:
        if not path.is_file():
            print(f"  {path}: not found, skipped")
            continue
        counts[path] = rewrite_doc_references(path, name, current, target)
        print(f"  {path}: {counts[path]} reference(s) updated")
    return counts
