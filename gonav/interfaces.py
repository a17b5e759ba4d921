"""Find Go interface declarations and the method signatures they declare."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable

from .lines import (
    INTERFACE_OPEN_RE,
    METHOD_START_RE,
    CancelSignal,
    as_lines,
    balance_point,
    check_cancelled,
    is_blank,
    is_comment,
    strip_line_comment,
    update_depth,
)
from .models import InterfaceBlock, MethodSignature, SourceLine


logger = logging.getLogger(__name__)

DEFAULT_LOOKAHEAD = 3

# Signature states.
_IN_PARAMS = "params"
_IN_RETURNS = "returns"
_AWAIT_TAIL = "tail"

# A line that starts something new after a finished parameter list.
_TERMINATOR_RE = re.compile(r"^(\w|;|})")


@dataclass
class _PendingSignature:
    name: str
    line: int
    end: int
    paren: int = 1
    state: str = _IN_PARAMS
    remaining: int = 0


@dataclass
class _OpenBlock:
    name: str
    start: int
    depth: int
    lookahead: int
    log: logging.Logger
    methods: list[MethodSignature] = field(default_factory=list)
    seen: set[tuple[int, str]] = field(default_factory=set)
    pending: _PendingSignature | None = None

    def feed(self, line: SourceLine) -> None:
        text = line.text
        if is_blank(text) or is_comment(text):
            return

        pending = self.pending
        if pending is not None and pending.state == _AWAIT_TAIL:
            stripped = text.strip()
            if stripped.startswith("("):
                pending.state = _IN_RETURNS
                pending.paren = 0
            elif _TERMINATOR_RE.match(stripped):
                self._finish()
                pending = None
            else:
                pending.end = line.index
                pending.remaining -= 1
                if pending.remaining <= 0:
                    self._finish()
                return

        if pending is not None:
            code = strip_line_comment(text)
            pending.end = line.index
            if pending.state == _IN_RETURNS:
                pending.paren = update_depth(pending.paren, code, "(", ")")
                if pending.paren <= 0:
                    self._finish()
            else:
                self._consume_params(code, 0)
            return

        match = METHOD_START_RE.match(text)
        if not match:
            return
        self.pending = _PendingSignature(
            name=match.group(1), line=line.index, end=line.index
        )
        self._consume_params(strip_line_comment(text), match.end())

    def close(self, end_line: int) -> InterfaceBlock:
        if self.pending is not None:
            self._finish()
        self.log.debug("Interface %s spans lines %d-%d", self.name, self.start + 1, end_line + 1)
        return InterfaceBlock(
            name=self.name,
            start_line=self.start,
            end_line=end_line,
            methods=tuple(self.methods),
        )

    def _consume_params(self, code: str, start: int) -> None:
        pending = self.pending
        close_at = balance_point(code, pending.paren, "(", ")", start=start)
        if close_at is None:
            pending.paren = update_depth(pending.paren, code[start:], "(", ")")
            return
        tail = code[close_at:]
        returns_depth = update_depth(0, tail, "(", ")")
        if returns_depth > 0:
            pending.state = _IN_RETURNS
            pending.paren = returns_depth
        elif tail.strip():
            self._finish()
        else:
            pending.state = _AWAIT_TAIL
            pending.remaining = self.lookahead

    def _finish(self) -> None:
        pending = self.pending
        self.pending = None
        key = (pending.line, pending.name)
        if key in self.seen:
            return
        self.seen.add(key)
        self.log.debug(
            "Found method %s.%s at line %d", self.name, pending.name, pending.line + 1
        )
        self.methods.append(
            MethodSignature(
                owner_name=self.name,
                line=pending.line,
                name=pending.name,
                span_end_line=pending.end,
            )
        )


def scan_interfaces(
    source: str | Iterable[SourceLine],
    cancel: CancelSignal | None = None,
    lookahead: int = DEFAULT_LOOKAHEAD,
    diagnostics: logging.Logger | None = None,
) -> list[InterfaceBlock]:
    """Return every ``type X interface {...}`` block with its method signatures.

    Unbalanced input never raises: a block still open at the end of the
    document is closed on its last line, and a signature whose completion
    cannot be decided ends after ``lookahead`` continuation lines.
    """
    log = diagnostics or logger
    lines = as_lines(source)
    blocks: list[InterfaceBlock] = []
    current: _OpenBlock | None = None

    for line in lines:
        check_cancelled(cancel)
        text = line.text

        match = INTERFACE_OPEN_RE.match(text.strip())
        if match:
            if current is not None:
                blocks.append(current.close(line.index - 1))
            current = _OpenBlock(
                name=match.group(1),
                start=line.index,
                depth=update_depth(0, text, "{", "}"),
                lookahead=lookahead,
                log=log,
            )
            if current.depth <= 0:
                blocks.append(current.close(line.index))
                current = None
            continue

        if current is None:
            continue

        current.depth = update_depth(current.depth, text, "{", "}")
        if current.depth <= 0:
            blocks.append(current.close(line.index))
            current = None
            continue

        current.feed(line)

    if current is not None:
        blocks.append(current.close(lines[-1].index))

    return blocks
