from __future__ import annotations

import logging
import threading

import pytest

from gonav.errors import ScanCancelled
from gonav.hints import build_hints, hint_at, scan_document
from gonav.models import KIND_INTERFACE, KIND_RECEIVER


SAMPLE = """package store

type Store interface {
    Get(key string) ([]byte, error)
    Close() error
}

type memStore struct{}

func (m *memStore) Get(key string) ([]byte, error) {
    return nil, nil
}

func (m *memStore) Close() error { return nil }
"""


def test_hints_cover_both_sides_in_anchor_order():
    hints = build_hints(SAMPLE)

    assert [
        (h.anchor_line, h.anchor_start_col, h.anchor_end_col, h.method_name, h.kind, h.context)
        for h in hints
    ] == [
        (3, 4, 7, "Get", KIND_INTERFACE, "Store"),
        (4, 4, 9, "Close", KIND_INTERFACE, "Store"),
        (9, 19, 22, "Get", KIND_RECEIVER, "memStore"),
        (13, 19, 24, "Close", KIND_RECEIVER, "memStore"),
    ]


def test_scan_document_keeps_declarations():
    scanned = scan_document(SAMPLE, path="store.go")

    assert scanned.path == "store.go"
    assert [block.name for block in scanned.interfaces] == ["Store"]
    assert [decl.name for decl in scanned.methods] == ["Get", "Close"]
    assert len(scanned.hints) == 4


def test_receiver_anchor_skips_type_name_prefix():
    (hint,) = build_hints("func (s *Server) Serve() {}\n")
    assert hint.anchor_start_col == 17
    assert hint.context == "Server"


def test_hint_at_position():
    hints = build_hints(SAMPLE)
    hint = hint_at(hints, 9, 20)
    assert hint is not None
    assert (hint.method_name, hint.kind) == ("Get", KIND_RECEIVER)
    assert hint_at(hints, 10, 4) is None


def test_hint_dict_view():
    hint = build_hints(SAMPLE)[0]
    assert hint.to_dict() == {
        "line": 3,
        "start_col": 4,
        "end_col": 7,
        "method": "Get",
        "kind": "interface",
        "context": "Store",
    }


def test_no_hints_for_plain_code():
    assert build_hints("") == []
    assert build_hints("package main\n\nfunc main() {}\n") == []


def test_hint_at_end_column_is_exclusive():
    hints = build_hints(SAMPLE)
    assert hint_at(hints, 9, 21).method_name == "Get"
    assert hint_at(hints, 9, 22) is None
    assert hint_at(hints, 9, 19).method_name == "Get"


def test_cancelled_document_scan_returns_nothing():
    event = threading.Event()
    event.set()
    with pytest.raises(ScanCancelled):
        scan_document(SAMPLE, path="store.go", cancel=event)


def test_build_hints_reports_to_injected_logger(caplog: pytest.LogCaptureFixture) -> None:
    sink = logging.getLogger("gonav_tests.sink")
    with caplog.at_level(logging.DEBUG, logger="gonav_tests.sink"):
        build_hints(SAMPLE, diagnostics=sink)

    messages = [record.getMessage() for record in caplog.records if record.name == "gonav_tests.sink"]
    assert "Found method Store.Get at line 4" in messages
    assert any(message.startswith("Found method (memStore) Close") for message in messages)
