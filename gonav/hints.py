"""Turn scanned declarations into navigation hints."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .interfaces import DEFAULT_LOOKAHEAD, scan_interfaces
from .lines import CancelSignal, as_lines, find_word
from .models import (
    KIND_INTERFACE,
    KIND_RECEIVER,
    InterfaceBlock,
    NavigationHint,
    ReceiverMethodDecl,
    SourceLine,
)
from .receivers import scan_receiver_methods


@dataclass
class ScannedFile:
    path: str | None
    interfaces: list[InterfaceBlock] = field(default_factory=list)
    methods: list[ReceiverMethodDecl] = field(default_factory=list)
    hints: list[NavigationHint] = field(default_factory=list)


def interface_hints(
    blocks: Iterable[InterfaceBlock], lines: Sequence[SourceLine]
) -> list[NavigationHint]:
    texts = _texts_by_index(lines)
    hints = []
    for block in blocks:
        for signature in block.methods:
            hints.append(
                _anchor(texts, signature.line, signature.name, KIND_INTERFACE, block.name)
            )
    return hints


def receiver_hints(
    decls: Iterable[ReceiverMethodDecl], lines: Sequence[SourceLine]
) -> list[NavigationHint]:
    texts = _texts_by_index(lines)
    return [
        _anchor(texts, decl.start_line, decl.name, KIND_RECEIVER, decl.receiver_type)
        for decl in decls
    ]


def scan_document(
    source: str | Iterable[SourceLine],
    path: str | None = None,
    cancel: CancelSignal | None = None,
    lookahead: int = DEFAULT_LOOKAHEAD,
    diagnostics: logging.Logger | None = None,
) -> ScannedFile:
    """Run both scanners over one document snapshot.

    Hints are ordered by anchor position. If ``cancel`` fires, ``ScanCancelled``
    propagates and nothing is returned.
    """
    lines = as_lines(source)
    blocks = scan_interfaces(
        lines, cancel=cancel, lookahead=lookahead, diagnostics=diagnostics
    )
    decls = scan_receiver_methods(lines, cancel=cancel, diagnostics=diagnostics)
    hints = interface_hints(blocks, lines) + receiver_hints(decls, lines)
    hints.sort(key=lambda hint: (hint.anchor_line, hint.anchor_start_col))
    return ScannedFile(path=path, interfaces=blocks, methods=decls, hints=hints)


def build_hints(
    source: str | Iterable[SourceLine],
    cancel: CancelSignal | None = None,
    lookahead: int = DEFAULT_LOOKAHEAD,
    diagnostics: logging.Logger | None = None,
) -> list[NavigationHint]:
    return scan_document(
        source, cancel=cancel, lookahead=lookahead, diagnostics=diagnostics
    ).hints


def hint_at(hints: Iterable[NavigationHint], line: int, column: int) -> NavigationHint | None:
    """Return the hint whose anchor covers ``line``/``column``, if any."""
    for hint in hints:
        if hint.anchor_line != line:
            continue
        if hint.anchor_start_col <= column < hint.anchor_end_col:
            return hint
    return None


def _texts_by_index(lines: Sequence[SourceLine]) -> dict[int, str]:
    return {line.index: line.text for line in lines}


def _anchor(
    texts: dict[int, str], line: int, name: str, kind: str, context: str
) -> NavigationHint:
    column = max(find_word(texts.get(line, ""), name), 0)
    return NavigationHint(
        anchor_line=line,
        anchor_start_col=column,
        anchor_end_col=column + len(name),
        method_name=name,
        kind=kind,
        context=context,
    )
