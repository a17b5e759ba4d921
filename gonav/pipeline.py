"""Scan a repository into a declaration index."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

import networkx as nx

from .config import configure_logging, resolve_config
from .file_walker import iter_go_files
from .graph import build_graph
from .hints import ScannedFile, scan_document
from .index import ensure_snapshot
from .interfaces import DEFAULT_LOOKAHEAD
from .storage import save_graph


logger = logging.getLogger(__name__)


def scan_file(path: str | Path, lookahead: int = DEFAULT_LOOKAHEAD) -> ScannedFile:
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    return scan_document(text, path=str(path), lookahead=lookahead)


def build_graph_from_root(
    root: str | Path,
    output_path: str | Path | None = None,
    max_files: int | None = None,
    lookahead: int = DEFAULT_LOOKAHEAD,
) -> nx.DiGraph:
    root_path = Path(root)
    files = iter_go_files(root_path)
    if max_files is not None:
        files = files[:max_files]

    scanned = []
    for path in files:
        try:
            scanned.append(scan_file(path, lookahead=lookahead))
        except OSError as exc:
            logger.warning("Skipping %s: %s", path, exc)

    graph = build_graph(scanned)
    ensure_snapshot(graph, source_root=str(root_path))
    logger.info(
        "Indexed %d file(s): %d nodes, %d edges",
        len(scanned),
        graph.number_of_nodes(),
        graph.number_of_edges(),
    )

    if output_path:
        save_graph(graph, output_path)

    return graph


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Index Go interfaces and receiver methods for navigation"
    )
    parser.add_argument("--root", default=".", help="Root directory of the Go codebase")
    parser.add_argument(
        "--output",
        default="gonav_index.json",
        help="Output JSON path",
    )
    parser.add_argument(
        "--max-files",
        type=int,
        default=None,
        help="Limit number of files scanned (for quick checks)",
    )
    parser.add_argument(
        "--file",
        default=None,
        help="Print the navigation hints of a single file as JSON and exit",
    )
    args = parser.parse_args()

    config = resolve_config()
    configure_logging(config)

    if args.file:
        path = Path(args.file)
        if not path.is_file():
            raise SystemExit(f"File not found: {path}")
        scanned = scan_file(path, lookahead=config.lookahead)
        print(json.dumps([hint.to_dict() for hint in scanned.hints], indent=2))
        return 0

    root = Path(args.root)
    if not root.is_dir():
        raise SystemExit(f"Not a directory: {root}")
    graph = build_graph_from_root(root, args.output, args.max_files, config.lookahead)
    print(graph.number_of_nodes(), graph.number_of_edges())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
