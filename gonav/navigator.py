"""Resolve a navigation hint into jump targets using an implementation oracle.

The scanners never decide which concrete method satisfies which interface.
That question goes to the oracle when a hint is activated; this module only
narrows and labels what comes back:

* interface-side hints list every implementation the oracle reports,
  labelled with the receiver type recovered by re-scanning the target file;
* receiver-side hints keep only locations that sit inside an interface
  block of their document and are not themselves ``func`` declarations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, Sequence

from .errors import OracleError
from .interfaces import DEFAULT_LOOKAHEAD, scan_interfaces
from .lines import FUNC_KEYWORD_RE, RECEIVER_METHOD_RE
from .models import (
    KIND_INTERFACE,
    InterfaceBlock,
    Location,
    NavigationHint,
    SourceLine,
)


logger = logging.getLogger(__name__)

ACTION_JUMP = "jump"
ACTION_PICK = "pick"
ACTION_NONE = "none"
ACTION_ERROR = "error"


class ImplementationOracle(Protocol):
    def lookup(self, document_id: str, line: int, column: int) -> list[Location]: ...


class DocumentAccessor(Protocol):
    def open(self, document_id: str) -> Sequence[SourceLine]: ...


@dataclass(frozen=True)
class NavigationTarget:
    location: Location
    label: str
    description: str


@dataclass(frozen=True)
class NavigationResult:
    action: str  # jump | pick | none | error
    method_name: str
    targets: tuple[NavigationTarget, ...] = ()
    placeholder: str | None = None
    notice: str | None = None

    def to_dict(self) -> dict:
        return {
            "action": self.action,
            "method": self.method_name,
            "placeholder": self.placeholder,
            "notice": self.notice,
            "targets": [
                {
                    "label": target.label,
                    "description": target.description,
                    "document": target.location.document_id,
                    "line": target.location.line,
                    "column": target.location.column,
                    "end_line": target.location.end_line,
                    "end_column": target.location.end_column,
                }
                for target in self.targets
            ],
        }


class Navigator:
    def __init__(
        self,
        oracle: ImplementationOracle,
        documents: DocumentAccessor,
        lookahead: int = DEFAULT_LOOKAHEAD,
    ) -> None:
        self.oracle = oracle
        self.documents = documents
        self.lookahead = lookahead

    def navigate(self, document_id: str, hint: NavigationHint) -> NavigationResult:
        interface_side = hint.kind == KIND_INTERFACE
        logger.debug(
            "Looking up %s at %s:%d:%d",
            hint.method_name,
            document_id,
            hint.anchor_line + 1,
            hint.anchor_start_col,
        )
        try:
            locations = self.oracle.lookup(
                document_id, hint.anchor_line, hint.anchor_start_col
            )
        except OracleError as exc:
            logger.warning("Lookup for %s failed: %s", hint.method_name, exc)
            return NavigationResult(
                action=ACTION_ERROR,
                method_name=hint.method_name,
                notice=f"Error while finding implementations: {exc}",
            )

        cache: dict[str, _ScannedDocument | None] = {}
        targets: list[NavigationTarget] = []
        seen: set[Location] = set()
        for location in locations:
            if location in seen:
                continue
            seen.add(location)
            document = self._document(location.document_id, cache)
            if interface_side:
                targets.append(self._implementation_target(location, document, hint))
                continue
            block = _interface_member(location, document)
            if block is not None:
                targets.append(
                    NavigationTarget(
                        location=location,
                        label=f"{block.name}.{hint.method_name}",
                        description=location.document_id,
                    )
                )

        logger.debug("%d target(s) for %s", len(targets), hint.method_name)
        if not targets:
            noun = "implementations" if interface_side else "interfaces"
            return NavigationResult(
                action=ACTION_NONE,
                method_name=hint.method_name,
                notice=f"No {noun} found for {hint.method_name}",
            )
        if len(targets) == 1:
            return NavigationResult(
                action=ACTION_JUMP,
                method_name=hint.method_name,
                targets=tuple(targets),
            )
        noun = "implementation" if interface_side else "interface"
        return NavigationResult(
            action=ACTION_PICK,
            method_name=hint.method_name,
            targets=tuple(targets),
            placeholder=f"Select {noun} of {hint.method_name}",
        )

    def _document(
        self, document_id: str, cache: dict[str, _ScannedDocument | None]
    ) -> _ScannedDocument | None:
        if document_id in cache:
            return cache[document_id]
        try:
            lines = tuple(self.documents.open(document_id))
        except OSError as exc:
            logger.warning("Could not open %s: %s", document_id, exc)
            cache[document_id] = None
            return None
        texts = {line.index: line.text for line in lines}
        blocks = scan_interfaces(lines, lookahead=self.lookahead)
        cache[document_id] = _ScannedDocument(texts=texts, interfaces=blocks)
        return cache[document_id]

    def _implementation_target(
        self,
        location: Location,
        document: _ScannedDocument | None,
        hint: NavigationHint,
    ) -> NavigationTarget:
        label = hint.method_name
        if document is not None:
            text = document.texts.get(location.line, "")
            match = RECEIVER_METHOD_RE.match(text.strip())
            if match:
                label = f"({match.group(2)}) {match.group(3)}"
            else:
                label = _preview(text, location) or hint.method_name
        return NavigationTarget(
            location=location, label=label, description=location.document_id
        )


@dataclass(frozen=True)
class _ScannedDocument:
    texts: dict[int, str]
    interfaces: list[InterfaceBlock]


def _interface_member(
    location: Location, document: _ScannedDocument | None
) -> InterfaceBlock | None:
    if document is None:
        return None
    text = document.texts.get(location.line, "")
    if FUNC_KEYWORD_RE.match(text.strip()):
        return None
    for block in document.interfaces:
        if block.contains(location.line):
            return block
    return None


def _preview(text: str, location: Location) -> str:
    if location.end_line == location.line and location.end_column is not None:
        snippet = text[location.column : location.end_column]
    else:
        snippet = text[location.column :]
    return snippet.strip()
