"""Query helpers over a saved declaration index."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

import networkx as nx

from .graph import NODE_INTERFACE_METHOD, NODE_METHOD


HINT_NODE_TYPES = (NODE_INTERFACE_METHOD, NODE_METHOD)


@dataclass(frozen=True)
class IndexSnapshot:
    source_root: str | None
    generated_at: str | None
    node_count: int
    edge_count: int
    index_path: str | None


class IndexService:
    def __init__(self, graph: nx.DiGraph, index_path: str | None = None) -> None:
        self.graph = graph
        self.index_path = index_path
        self._nodes: list[dict] = []
        self._by_name: dict[str, list[dict]] = {}
        self._by_path: dict[str, list[dict]] = {}
        self._build_indexes()

    @classmethod
    def from_json(cls, path: str | Path) -> "IndexService":
        from .storage import load_graph

        return cls(load_graph(path), index_path=str(path))

    def snapshot(self) -> IndexSnapshot:
        snapshot = self.graph.graph.get("snapshot", {})
        return IndexSnapshot(
            source_root=snapshot.get("source_root"),
            generated_at=snapshot.get("generated_at"),
            node_count=self.graph.number_of_nodes(),
            edge_count=self.graph.number_of_edges(),
            index_path=self.index_path,
        )

    def metadata(self) -> dict:
        snap = self.snapshot()
        node_counts: dict[str, int] = {}
        for node in self._nodes:
            node_type = node.get("type") or "Unknown"
            node_counts[node_type] = node_counts.get(node_type, 0) + 1
        return {
            "source_root": snap.source_root,
            "generated_at": snap.generated_at,
            "node_count": snap.node_count,
            "edge_count": snap.edge_count,
            "index_path": snap.index_path,
            "node_counts": node_counts,
        }

    def search(
        self,
        query: str,
        node_types: list[str] | None = None,
        limit: int = 20,
    ) -> dict:
        q = query.lower()
        matches = []
        for node in self._nodes:
            if node_types and node.get("type") not in node_types:
                continue
            haystacks = (node.get("name"), node.get("qualname"), node.get("path"))
            if any(q in str(value).lower() for value in haystacks if value):
                matches.append(node)
                if len(matches) >= limit:
                    break
        return {"query": query, "matches": matches}

    def file_hints(self, path: str) -> list[dict]:
        """Hint records for one indexed file, in anchor order."""
        nodes = [
            node
            for node in self._by_path.get(path, [])
            if node.get("type") in HINT_NODE_TYPES
        ]
        nodes.sort(key=lambda node: (node.get("line", 0), node.get("start_col", 0)))
        return [_hint_view(node) for node in nodes]

    def methods_named(self, name: str) -> dict:
        """Interface methods and receiver methods sharing ``name``.

        This is a textual grouping only; it says nothing about which type
        satisfies which interface.
        """
        nodes = self._by_name.get(name, [])
        return {
            "name": name,
            "interface_methods": [
                node for node in nodes if node.get("type") == NODE_INTERFACE_METHOD
            ],
            "methods": [node for node in nodes if node.get("type") == NODE_METHOD],
        }

    def _build_indexes(self) -> None:
        for node_id, data in self.graph.nodes(data=True):
            node = {"id": node_id, **data}
            self._nodes.append(node)
            if data.get("name"):
                self._by_name.setdefault(data["name"], []).append(node)
            if data.get("path"):
                self._by_path.setdefault(data["path"], []).append(node)


def _hint_view(node: dict) -> dict:
    return {
        "line": node.get("line"),
        "start_col": node.get("start_col"),
        "end_col": node.get("end_col"),
        "method": node.get("name"),
        "kind": node.get("kind"),
        "context": node.get("context"),
    }


def ensure_snapshot(graph: nx.DiGraph, source_root: str | None = None) -> None:
    if graph.graph.get("snapshot"):
        return
    graph.graph["snapshot"] = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "source_root": source_root,
        "node_count": graph.number_of_nodes(),
        "edge_count": graph.number_of_edges(),
    }
