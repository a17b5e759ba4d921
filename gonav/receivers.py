"""Find Go methods declared with a receiver (``func (r *T) Name(...)``)."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .lines import (
    RECEIVER_METHOD_RE,
    CancelSignal,
    as_lines,
    check_cancelled,
    is_comment,
    update_depth,
)
from .models import ReceiverMethodDecl, SourceLine


logger = logging.getLogger(__name__)


def scan_receiver_methods(
    source: str | Iterable[SourceLine],
    cancel: CancelSignal | None = None,
    diagnostics: logging.Logger | None = None,
) -> list[ReceiverMethodDecl]:
    log = diagnostics or logger
    lines = as_lines(source)
    decls: list[ReceiverMethodDecl] = []

    for position, line in enumerate(lines):
        check_cancelled(cancel)
        if is_comment(line.text):
            continue
        match = RECEIVER_METHOD_RE.match(line.text.strip())
        if not match:
            continue

        receiver_name, receiver_type, name = match.groups()
        end_line = _declaration_end(lines, position, line.text.strip()[match.end():])
        log.debug(
            "Found method (%s) %s at lines %d-%d",
            receiver_type,
            name,
            line.index + 1,
            end_line + 1,
        )
        decls.append(
            ReceiverMethodDecl(
                receiver_type=receiver_type,
                receiver_name=receiver_name or "",
                name=name,
                start_line=line.index,
                end_line=end_line,
            )
        )

    return decls


def _declaration_end(lines: Sequence[SourceLine], position: int, rest: str) -> int:
    """Line index where the parameter list and any body have both closed."""
    paren = update_depth(1, rest, "(", ")")
    brace = update_depth(0, rest, "{", "}")
    if paren <= 0 and brace <= 0:
        return lines[position].index

    for line in lines[position + 1 :]:
        if is_comment(line.text):
            continue
        paren = update_depth(paren, line.text, "(", ")")
        brace = update_depth(brace, line.text, "{", "}")
        if paren <= 0 and brace <= 0:
            return line.index

    # Unbalanced to the end of the document.
    return lines[-1].index
