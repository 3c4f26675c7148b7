"""File listing probe: ``find -printf`` with mtime and size per file."""

from __future__ import annotations

import time
from typing import List, Optional

from src.domain.entities.probe import Fact, Failed, FileEntry, FileListing, ProbeOutcome

from .command import run_command
from .file_count_probe import find_command, root_missing, walk_failure

# <mtime epoch> <size bytes> <path>
LISTING_FORMAT = "%T@ %s %p\\n"


def parse_listing(output: str) -> List[FileEntry]:
    entries = []
    for line in output.splitlines():
        parts = line.split(" ", 2)
        if len(parts) < 3:
            continue
        try:
            modified, size = float(parts[0]), int(parts[1])
        except ValueError:
            continue
        entries.append(FileEntry(path=parts[2], size_bytes=size, modified=modified))
    return entries


class FileListProbe:
    async def query(
        self,
        path: str,
        pattern: str,
        timeout: float,
        *,
        max_age: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> ProbeOutcome[FileListing]:
        argv = find_command(path, pattern, LISTING_FORMAT, now=time.time(), max_age=max_age)
        outcome = await run_command(argv, timeout)
        if not isinstance(outcome, Fact):
            return outcome

        result = outcome.value
        reason = walk_failure(result)
        if reason:
            return Failed(reason)
        if root_missing(result, path):
            return Fact(FileListing(root_exists=False))

        entries = sorted(parse_listing(result.stdout), key=lambda e: e.modified, reverse=True)
        if limit is not None:
            entries = entries[:limit]
        return Fact(FileListing(entries=tuple(entries)))
