"""File counting probe backed by GNU ``find``."""

from __future__ import annotations

import os
import time
from typing import List, Optional

from src.domain.entities.probe import Fact, Failed, FileCount, ProbeOutcome

from .command import CommandResult, run_command

# find keeps going past these and exits 1; whatever it printed still counts.
_WALK_ERRORS = ("No such file or directory", "Permission denied")
_QUOTES = "'\"`\u2018\u2019"


def glob_filters(root: str, pattern: str) -> List[str]:
    """Translate a ``**/``-style glob relative to ``root`` into find arguments.

    ``**/name`` matches at any depth by name, ``**/dir/name`` by path
    suffix. A pattern without ``**`` matches at its exact depth.
    """

    if pattern.startswith("**/"):
        rest = pattern[3:]
        if "/" not in rest:
            return ["-name", rest]
        return ["-path", f"*/{rest}"]
    depth = str(pattern.count("/") + 1)
    return [
        "-mindepth", depth,
        "-maxdepth", depth,
        "-path", os.path.join(root, pattern),
    ]


def find_command(
    root: str,
    pattern: str,
    output_format: str,
    *,
    now: float,
    min_age: Optional[float] = None,
    max_age: Optional[float] = None,
) -> List[str]:
    """Build the ``find`` argv listing regular files under ``root``.

    ``min_age``/``max_age`` are seconds relative to ``now``.
    """

    root = os.path.normpath(root)
    filters = glob_filters(root, pattern)
    # Depth options must precede the tests.
    depth, tests = (filters[:4], filters[4:]) if filters[0] == "-mindepth" else ([], filters)
    argv = ["find", root, *depth, "-type", "f", *tests]
    if max_age is not None:
        argv += ["-newermt", f"@{now - max_age:.0f}"]
    if min_age is not None:
        argv += ["!", "-newermt", f"@{now - min_age:.0f}"]
    return argv + ["-printf", output_format]


def root_missing(result: CommandResult, root: str) -> bool:
    """Whether find complained that ``root`` itself does not exist."""
    if result.returncode == 0:
        return False
    root = os.path.normpath(root)
    for line in result.stderr.splitlines():
        # find: '/data': No such file or directory
        parts = line.split(": ")
        if len(parts) >= 3 and parts[-1].strip() == "No such file or directory":
            if parts[1].strip(_QUOTES) == root:
                return True
    return False


def walk_failure(result: CommandResult) -> Optional[str]:
    """Reason a finished ``find`` run cannot be trusted, ``None`` if it can.

    A missing root or unreadable subdirectory only shortens the walk.
    """

    if result.returncode == 0:
        return None
    lines = [line for line in result.stderr.splitlines() if line.strip()]
    if lines and all(any(err in line for err in _WALK_ERRORS) for line in lines):
        return None
    return f"find exited with {result.returncode}: {result.stderr}"


class FileCountProbe:
    async def query(
        self,
        path: str,
        pattern: str,
        timeout: float,
        *,
        min_age: Optional[float] = None,
        max_age: Optional[float] = None,
    ) -> ProbeOutcome[FileCount]:
        argv = find_command(
            path, pattern, ".", now=time.time(), min_age=min_age, max_age=max_age
        )
        outcome = await run_command(argv, timeout)
        if not isinstance(outcome, Fact):
            return outcome

        reason = walk_failure(outcome.value)
        if reason:
            return Failed(reason)
        return Fact(FileCount(count=outcome.value.stdout.count("."), pattern=pattern))
