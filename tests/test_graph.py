from __future__ import annotations

from gonav.graph import (
    EDGE_CONTAINS,
    EDGE_DECLARES,
    EDGE_HAS_METHOD,
    NODE_INTERFACE_METHOD,
    NODE_METHOD,
    build_graph,
    interface_method_node_id,
    interface_node_id,
    method_node_id,
    type_node_id,
)
from gonav.hints import scan_document
from gonav.index import IndexService


STORE = """package store

type Store interface {
    Get(key string) ([]byte, error)
}
"""

MEM = """package store

func (m *memStore) Get(key string) ([]byte, error) {
    return nil, nil
}
"""

DISK = """package store

func (d diskStore) Get(key string) ([]byte, error) { return nil, nil }
func (d diskStore) Flush() {}
"""


def _graph():
    return build_graph(
        [
            scan_document(STORE, path="pkg/store.go"),
            scan_document(MEM, path="pkg/mem.go"),
            scan_document(DISK, path="pkg/disk.go"),
        ]
    )


def test_interface_nodes_and_edges():
    graph = _graph()
    iface = interface_node_id("pkg/store.go", "Store")
    method = interface_method_node_id("pkg/store.go", "Store", "Get")

    assert graph.nodes[iface]["end_line"] == 4
    assert graph.nodes[method]["qualname"] == "Store.Get"
    assert graph.nodes[method]["start_col"] == 4
    assert graph.edges["file:pkg/store.go", iface]["type"] == EDGE_CONTAINS
    assert graph.edges[iface, method]["type"] == EDGE_DECLARES


def test_receiver_types_grouped_by_package():
    graph = _graph()
    disk_type = type_node_id("pkg", "diskStore")
    flush = method_node_id("pkg/disk.go", "diskStore", "Flush")

    assert graph.edges[disk_type, flush]["type"] == EDGE_HAS_METHOD
    assert set(graph.successors(disk_type)) == {
        method_node_id("pkg/disk.go", "diskStore", "Get"),
        flush,
    }
    assert graph.nodes[method_node_id("pkg/mem.go", "memStore", "Get")]["receiver_name"] == "m"


def test_no_interface_satisfaction_edges():
    graph = _graph()
    for source, target in graph.edges():
        source_type = graph.nodes[source]["type"]
        target_type = graph.nodes[target]["type"]
        assert {source_type, target_type} != {NODE_INTERFACE_METHOD, NODE_METHOD}


def test_index_service_queries():
    service = IndexService(_graph())

    result = service.search("diskstore")
    assert result["matches"]

    named = service.methods_named("Get")
    assert len(named["interface_methods"]) == 1
    assert len(named["methods"]) == 2

    hints = service.file_hints("pkg/disk.go")
    assert [(hint["line"], hint["method"], hint["kind"]) for hint in hints] == [
        (2, "Get", "receiver"),
        (3, "Flush", "receiver"),
    ]

    metadata = service.metadata()
    assert metadata["node_counts"]["Method"] == 3
    assert metadata["node_counts"]["Interface"] == 1
