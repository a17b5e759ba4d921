"""Go source discovery."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


DEFAULT_EXCLUDES = {".git", ".hg", ".svn", "vendor", "node_modules", "testdata"}


def iter_go_files(root: str | Path, excludes: Iterable[str] | None = None) -> list[str]:
    root_path = Path(root)
    exclude_set = set(DEFAULT_EXCLUDES if excludes is None else excludes)
    matches: list[str] = []

    for path in sorted(root_path.rglob("*.go")):
        relative = path.relative_to(root_path)
        if any(part in exclude_set for part in relative.parts[:-1]):
            continue
        matches.append(str(path))

    return matches
