"""NetworkX index of the interfaces and receiver methods found in a repository."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import networkx as nx

from .hints import ScannedFile
from .models import KIND_INTERFACE, KIND_RECEIVER, NavigationHint


NODE_FILE = "File"
NODE_INTERFACE = "Interface"
NODE_INTERFACE_METHOD = "InterfaceMethod"
NODE_TYPE = "Type"
NODE_METHOD = "Method"

EDGE_CONTAINS = "CONTAINS"
EDGE_DECLARES = "DECLARES"
EDGE_HAS_METHOD = "HAS_METHOD"


def file_node_id(path: str) -> str:
    return f"file:{path}"


def interface_node_id(path: str, name: str) -> str:
    return f"iface:{path}:{name}"


def interface_method_node_id(path: str, interface: str, name: str) -> str:
    return f"imethod:{path}:{interface}.{name}"


def type_node_id(package: str, name: str) -> str:
    return f"type:{package}:{name}"


def method_node_id(path: str, receiver_type: str, name: str) -> str:
    return f"method:{path}:{receiver_type}.{name}"


def package_of(path: str) -> str:
    return str(Path(path).parent)


def build_graph(scanned: Iterable[ScannedFile]) -> nx.DiGraph:
    graph = nx.DiGraph()

    for entry in scanned:
        path = entry.path
        if not path:
            continue
        file_id = file_node_id(path)
        _ensure_node(graph, file_id, type=NODE_FILE, name=path, path=path)
        anchors = _anchor_index(entry.hints)

        for block in entry.interfaces:
            iface_id = interface_node_id(path, block.name)
            _ensure_node(
                graph,
                iface_id,
                type=NODE_INTERFACE,
                name=block.name,
                qualname=block.name,
                path=path,
                line=block.start_line,
                end_line=block.end_line,
            )
            graph.add_edge(file_id, iface_id, type=EDGE_CONTAINS)

            for signature in block.methods:
                method_id = interface_method_node_id(path, block.name, signature.name)
                start_col, end_col = anchors.get(
                    (KIND_INTERFACE, signature.line, signature.name), (0, 0)
                )
                _ensure_node(
                    graph,
                    method_id,
                    type=NODE_INTERFACE_METHOD,
                    name=signature.name,
                    qualname=f"{block.name}.{signature.name}",
                    path=path,
                    kind=KIND_INTERFACE,
                    context=block.name,
                    line=signature.line,
                    end_line=signature.span_end_line,
                    start_col=start_col,
                    end_col=end_col,
                )
                graph.add_edge(iface_id, method_id, type=EDGE_DECLARES)

        for decl in entry.methods:
            package = package_of(path)
            type_id = type_node_id(package, decl.receiver_type)
            _ensure_node(
                graph,
                type_id,
                type=NODE_TYPE,
                name=decl.receiver_type,
                qualname=decl.receiver_type,
                path=package,
            )
            method_id = method_node_id(path, decl.receiver_type, decl.name)
            start_col, end_col = anchors.get(
                (KIND_RECEIVER, decl.start_line, decl.name), (0, 0)
            )
            _ensure_node(
                graph,
                method_id,
                type=NODE_METHOD,
                name=decl.name,
                qualname=f"{decl.receiver_type}.{decl.name}",
                path=path,
                kind=KIND_RECEIVER,
                context=decl.receiver_type,
                receiver_name=decl.receiver_name,
                line=decl.start_line,
                end_line=decl.end_line,
                start_col=start_col,
                end_col=end_col,
            )
            graph.add_edge(file_id, method_id, type=EDGE_CONTAINS)
            graph.add_edge(type_id, method_id, type=EDGE_HAS_METHOD)

    return graph


def _anchor_index(hints: Iterable[NavigationHint]) -> dict[tuple[str, int, str], tuple[int, int]]:
    return {
        (hint.kind, hint.anchor_line, hint.method_name): (
            hint.anchor_start_col,
            hint.anchor_end_col,
        )
        for hint in hints
    }


def _ensure_node(graph: nx.DiGraph, node_id: str, **attrs) -> None:
    if node_id not in graph:
        graph.add_node(node_id, **attrs)
