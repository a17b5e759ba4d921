"""Line snapshot helpers and bracket depth tracking shared by the scanners.

None of the helpers here understand string or comment literals: a brace or
paren inside a string counts like any other.
"""

from __future__ import annotations

import re
from typing import Iterable, Protocol, Sequence

from .errors import ScanCancelled
from .models import SourceLine


COMMENT_PREFIX = "//"

INTERFACE_OPEN_RE = re.compile(r"^type\s+(\w+)\s+interface\s*{")
METHOD_START_RE = re.compile(r"^\s*(\w+)\s*\(")
RECEIVER_METHOD_RE = re.compile(
    r"^func\s*\(\s*"
    r"(?:(\w+)(?:\s+|\s*(?=\*)))?"  # optional receiver name
    r"\*?\s*(\w+)"  # receiver type, pointer marker dropped
    r"(?:\[[^\]]*\])?"  # generic type parameters
    r"\s*\)\s*(\w+)\s*\("
)
FUNC_KEYWORD_RE = re.compile(r"^func\b")


class CancelSignal(Protocol):
    def is_set(self) -> bool: ...


def split_lines(text: str) -> tuple[SourceLine, ...]:
    """Return an immutable, line-indexed snapshot of ``text``."""
    return tuple(SourceLine(idx, line) for idx, line in enumerate(text.splitlines()))


def as_lines(source: str | Iterable[SourceLine] | Iterable[str]) -> Sequence[SourceLine]:
    if isinstance(source, str):
        return split_lines(source)
    lines = tuple(source)
    if lines and isinstance(lines[0], str):
        return tuple(SourceLine(idx, text) for idx, text in enumerate(lines))
    return lines


def is_comment(text: str) -> bool:
    return text.strip().startswith(COMMENT_PREFIX)


def is_blank(text: str) -> bool:
    return not text.strip()


def strip_line_comment(text: str) -> str:
    idx = text.find(COMMENT_PREFIX)
    if idx == -1:
        return text
    return text[:idx]


def update_depth(counter: int, text: str, open_char: str, close_char: str) -> int:
    """Add the opening and subtract the closing characters found in ``text``."""
    return counter + text.count(open_char) - text.count(close_char)


def balance_point(
    text: str, counter: int, open_char: str, close_char: str, start: int = 0
) -> int | None:
    """Return the index just past the character that brings ``counter`` to zero.

    Scanning starts at ``start``. ``None`` means the line ends unbalanced.
    """
    for idx in range(start, len(text)):
        ch = text[idx]
        if ch == open_char:
            counter += 1
        elif ch == close_char:
            counter -= 1
            if counter <= 0:
                return idx + 1
    return None


def find_word(text: str, word: str) -> int:
    """Column of the first whole-word occurrence of ``word``, else first substring."""
    match = re.search(rf"\b{re.escape(word)}\b", text)
    if match:
        return match.start()
    return text.find(word)


def check_cancelled(cancel: CancelSignal | None) -> None:
    if cancel is not None and cancel.is_set():
        raise ScanCancelled("scan cancelled")
