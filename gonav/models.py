"""Lightweight data models for scanned Go declarations."""

from __future__ import annotations

from dataclasses import dataclass


KIND_INTERFACE = "interface"  # anchor on an interface method
KIND_RECEIVER = "receiver"  # anchor on a concrete method with a receiver


@dataclass(frozen=True)
class SourceLine:
    index: int
    text: str


@dataclass(frozen=True)
class MethodSignature:
    owner_name: str
    line: int
    name: str
    span_end_line: int


@dataclass(frozen=True)
class InterfaceBlock:
    name: str
    start_line: int
    end_line: int
    methods: tuple[MethodSignature, ...] = ()

    def contains(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line


@dataclass(frozen=True)
class ReceiverMethodDecl:
    receiver_type: str
    receiver_name: str
    name: str
    start_line: int
    end_line: int


@dataclass(frozen=True)
class NavigationHint:
    anchor_line: int
    anchor_start_col: int
    anchor_end_col: int
    method_name: str
    kind: str  # interface | receiver
    context: str

    def to_dict(self) -> dict:
        return {
            "line": self.anchor_line,
            "start_col": self.anchor_start_col,
            "end_col": self.anchor_end_col,
            "method": self.method_name,
            "kind": self.kind,
            "context": self.context,
        }


@dataclass(frozen=True)
class Location:
    document_id: str
    line: int
    column: int
    end_line: int | None = None
    end_column: int | None = None
