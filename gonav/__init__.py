"""Grammar-free scanner for Go interfaces and receiver methods."""

from .hints import ScannedFile, build_hints, scan_document
from .interfaces import scan_interfaces
from .lines import split_lines
from .models import (
    InterfaceBlock,
    MethodSignature,
    NavigationHint,
    ReceiverMethodDecl,
    SourceLine,
)
from .navigator import Navigator, NavigationResult
from .receivers import scan_receiver_methods

__all__ = [
    "InterfaceBlock",
    "MethodSignature",
    "NavigationHint",
    "NavigationResult",
    "Navigator",
    "ReceiverMethodDecl",
    "ScannedFile",
    "SourceLine",
    "build_hints",
    "scan_document",
    "scan_interfaces",
    "scan_receiver_methods",
    "split_lines",
]
