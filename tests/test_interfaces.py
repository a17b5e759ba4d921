from __future__ import annotations

import threading

import pytest

from gonav.errors import ScanCancelled
from gonav.interfaces import scan_interfaces
from gonav.lines import split_lines


READER = """type Reader interface {
    Read(p []byte) (
        n int, err error)
}
"""

STORE = """package store

type Store interface {
    Put(
        key string,
        value []byte,
    ) error
    // Close releases the handle.
    Close()
}

type Pair interface {
    Split(s string)
        (a, b string)
    Join() string
}
"""


def _methods(block):
    return [(sig.name, sig.line, sig.span_end_line) for sig in block.methods]


def test_multiline_return_tuple_reported_once():
    blocks = scan_interfaces(READER)

    assert len(blocks) == 1
    block = blocks[0]
    assert (block.name, block.start_line, block.end_line) == ("Reader", 0, 3)
    assert _methods(block) == [("Read", 1, 2)]


def test_multiline_params_and_comments():
    blocks = scan_interfaces(STORE)

    assert [block.name for block in blocks] == ["Store", "Pair"]
    store, pair = blocks
    assert (store.start_line, store.end_line) == (2, 9)
    assert _methods(store) == [("Put", 3, 6), ("Close", 8, 8)]
    assert _methods(pair) == [("Split", 12, 13), ("Join", 14, 14)]


def test_comment_line_is_not_a_method():
    source = "type Doer interface {\n    // Read does X\n    Do() error\n}\n"
    (block,) = scan_interfaces(source)
    assert _methods(block) == [("Do", 2, 2)]


def test_embedded_interface_is_ignored():
    source = "type RW interface {\n    io.Reader\n    Write(p []byte) (int, error)\n}\n"
    (block,) = scan_interfaces(source)
    assert _methods(block) == [("Write", 2, 2)]


def test_methods_stay_with_their_interface():
    source = (
        "type A interface {\n"
        "    Foo()\n"
        "}\n"
        "type B interface {\n"
        "    Bar(x int) string\n"
        "}\n"
    )
    a, b = scan_interfaces(source)
    assert {sig.owner_name for sig in a.methods} == {"A"}
    assert {sig.owner_name for sig in b.methods} == {"B"}
    assert [sig.name for sig in a.methods] == ["Foo"]
    assert [sig.name for sig in b.methods] == ["Bar"]


def test_undecided_signature_ends_at_lookahead_boundary():
    source = (
        "type Weird interface {\n"
        "    Next()\n"
        "    .Dangling\n"
        "    *Other\n"
        "    [x]\n"
        "    -5\n"
        "}\n"
    )
    (block,) = scan_interfaces(source)
    assert _methods(block) == [("Next", 1, 4)]

    (block,) = scan_interfaces(source, lookahead=1)
    assert _methods(block) == [("Next", 1, 2)]


def test_unterminated_block_closes_at_last_line():
    source = "type Open interface {\n    Run(ctx context.Context) error\n"
    (block,) = scan_interfaces(source)
    assert (block.start_line, block.end_line) == (0, 1)
    assert _methods(block) == [("Run", 1, 1)]


def test_new_interface_closes_unbalanced_previous():
    source = (
        "type A interface {\n"
        "    Foo()\n"
        "type B interface {\n"
        "    Bar()\n"
        "}\n"
    )
    a, b = scan_interfaces(source)
    assert (a.start_line, a.end_line) == (0, 1)
    assert (b.start_line, b.end_line) == (2, 4)
    assert a.end_line < b.start_line


def test_empty_one_line_interface():
    (block,) = scan_interfaces("type Any interface{}\n")
    assert (block.name, block.start_line, block.end_line) == ("Any", 0, 0)
    assert block.methods == ()


def test_blocks_never_overlap_and_contain_their_methods():
    blocks = scan_interfaces(STORE + READER)
    for first, second in zip(blocks, blocks[1:]):
        assert first.end_line < second.start_line
    for block in blocks:
        for sig in block.methods:
            assert block.contains(sig.line)
            assert sig.line <= sig.span_end_line <= block.end_line


def test_scan_is_deterministic_and_accepts_snapshots():
    assert scan_interfaces(STORE) == scan_interfaces(STORE)
    assert scan_interfaces(split_lines(STORE)) == scan_interfaces(STORE)


def test_empty_inputs():
    assert scan_interfaces("") == []
    assert scan_interfaces("package main\n\nfunc main() {}\n") == []


def test_cancelled_scan_returns_nothing():
    event = threading.Event()
    event.set()
    with pytest.raises(ScanCancelled):
        scan_interfaces(STORE, cancel=event)
