"""JSON persistence for the declaration index."""

from __future__ import annotations

import json
from pathlib import Path

import networkx as nx
from networkx.readwrite import json_graph


def save_graph(graph: nx.DiGraph, path: str | Path) -> None:
    payload = json_graph.node_link_data(graph, edges="links")
    Path(path).write_text(json.dumps(payload, indent=2), encoding="utf-8")


def load_graph(path: str | Path) -> nx.DiGraph:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    return json_graph.node_link_graph(payload, directed=True, edges="links")
