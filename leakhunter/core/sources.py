"""
LeakHunter File Sources

Turns a directory or an explicit file list into FileRecords.
Content is read lazily, when the content scanner asks for it.
"""

from __future__ import annotations

import mimetypes
from fnmatch import fnmatch
from pathlib import Path, PurePath
from typing import Iterable, Iterator, Sequence

from leakhunter.core.finding import FileRecord


def _record(file_path: Path, root: Path) -> FileRecord:
    content_type, _ = mimetypes.guess_type(file_path.name)
    return FileRecord.from_path(file_path, root=root, content_type=content_type)


def is_excluded(relative: PurePath, exclude: Sequence[str]) -> bool:
    """True if a whole path segment equals or glob-matches an exclusion entry."""
    for entry in exclude:
        entry = entry.strip("/")
        if "/" in entry:
            # Multi-segment entries match a run of leading segments
            if relative.as_posix() == entry or relative.as_posix().startswith(entry + "/"):
                return True
            continue
        if any(part == entry or fnmatch(part, entry) for part in relative.parts):
            return True
    return False


def iter_directory(target_path: Path, exclude: Iterable[str] = ()) -> Iterator[FileRecord]:
    """Yield records for every file under ``target_path`` in sorted order."""
    exclude = list(exclude)

    if target_path.is_file():
        yield _record(target_path, target_path.parent)
        return

    for file_path in sorted(target_path.rglob("*")):
        if not file_path.is_file():
            continue
        relative = file_path.relative_to(target_path)
        if ".git" in relative.parts:
            continue
        if is_excluded(relative, exclude):
            continue
        yield _record(file_path, target_path)


def records_from_paths(paths: Iterable[Path]) -> list[FileRecord]:
    """Records for an explicit list of files, displayed by their given path."""
    records = []
    for path in paths:
        content_type, _ = mimetypes.guess_type(path.name)
        records.append(FileRecord.from_path(path, content_type=content_type))
    return records
