"""Shell and git utilities.

Provides simple wrappers around subprocess calls for running the external
tools the release procedure depends on, plus output formatting helpers.
"""

from __future__ import annotations

import glob
import subprocess
import sys
from collections.abc import Sequence
from typing import NoReturn

GLOB_CHARS = ("*", "?", "[")


def git(*args: str) -> bool:
    """Run a git command, streaming its output.

    Args:
        *args: Arguments to pass to git (e.g., "push", "origin", "v1.2.3").

    Returns:
        True if git exited with status 0.
    """
    return _succeeded(["git", *args])


def run(*args: str, check: bool = True) -> subprocess.CompletedProcess[bytes]:
    """Run an arbitrary shell command.

    Output isn't captured - it streams directly to the terminal so
    users can see lint and build progress, hook output, etc.

    Args:
        *args: Command and arguments (e.g., "uv", "build").
        check: If True (default), raise on non-zero exit.

    Returns:
        CompletedProcess with returncode for checking success.
    """
    return subprocess.run(args, check=check)


def _succeeded(args: list[str]) -> bool:
    print(f"  $ {' '.join(args)}")
    try:
        result = run(*args, check=False)
    except FileNotFoundError:
        print(f"  command not found: {args[0]}", file=sys.stderr)
        return False
    return result.returncode == 0


def expand_args(argv: Sequence[str], **placeholders: str) -> list[str]:
    """Fill ``{placeholder}`` fields and expand glob arguments.

    Commands are not run through a shell, so patterns such as ``dist/*``
    are expanded here. A pattern that matches nothing is passed through
    unchanged and left for the tool to complain about.

    Examples:
        expand_args(["uv", "publish", "--publish-url", "{registry_url}"],
                    registry_url="https://test.pypi.org/legacy/")
        → ["uv", "publish", "--publish-url", "https://test.pypi.org/legacy/"]
    """
    expanded: list[str] = []
    for arg in argv:
        for key, value in placeholders.items():
            arg = arg.replace("{" + key + "}", value)
        if any(c in arg for c in GLOB_CHARS):
            matches = sorted(glob.glob(arg))
            expanded.extend(matches or [arg])
        else:
            expanded.append(arg)
    return expanded


def run_command(argv: Sequence[str], **placeholders: str) -> bool:
    """Run a configured command and report whether it exited cleanly.

    A missing executable is reported and treated like any other failure.
    """
    return _succeeded(expand_args(argv, **placeholders))


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate the phases of the release procedure in terminal output.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def fatal(msg: str) -> NoReturn:
    """Print an error message and exit with code 1.

    Use for unrecoverable errors that should halt the procedure.
    """
    print(f"ERROR: {msg}", file=sys.stderr)
    sys.exit(1)
