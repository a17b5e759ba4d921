"""MCP server exposing Go navigation tools."""

from __future__ import annotations

import argparse
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from .config import GonavConfig, configure_logging, resolve_config
from .gopls import FileDocumentAccessor, GoplsOracle
from .hints import hint_at, scan_document
from .index import IndexService, ensure_snapshot
from .navigator import Navigator


def create_server(
    service: IndexService | None,
    navigator: Navigator,
    config: GonavConfig,
) -> FastMCP:
    mcp = FastMCP(
        name="Go Navigation",
        instructions=(
            "Navigate between Go interfaces and their implementations. Use hints() "
            "to list anchors in a file, then navigate() at an anchor to find "
            "implementations or the interfaces a method satisfies."
        ),
        json_response=True,
    )
    documents = FileDocumentAccessor()

    @mcp.tool()
    def metadata() -> dict:
        """Return metadata about the loaded index."""
        if service is None:
            return {"loaded": False}
        return {"loaded": True, **service.metadata()}

    @mcp.tool()
    def search(
        query: str,
        node_types: list[str] | None = None,
        limit: int = 20,
    ) -> dict:
        """Search indexed interfaces, methods and types by partial name or path."""
        if service is None:
            return {"query": query, "matches": [], "error": "No index loaded"}
        return service.search(query, node_types=node_types, limit=limit)

    @mcp.tool()
    def indexed_hints(path: str) -> dict:
        """Return the navigation anchors recorded in the index for a file."""
        if service is None:
            return {"path": path, "hints": [], "error": "No index loaded"}
        return {"path": path, "hints": service.file_hints(path)}

    @mcp.tool()
    def methods_named(name: str) -> dict:
        """List indexed interface methods and receiver methods called ``name``."""
        if service is None:
            return {"name": name, "interface_methods": [], "methods": [], "error": "No index loaded"}
        return service.methods_named(name)

    @mcp.tool()
    def hints(path: str) -> dict:
        """Scan a Go file and return its navigation anchors (0-based lines)."""
        scanned = scan_document(
            documents.open(path), path=path, lookahead=config.lookahead
        )
        return {"path": path, "hints": [hint.to_dict() for hint in scanned.hints]}

    @mcp.tool()
    def navigate(path: str, line: int, column: int) -> dict:
        """Resolve the anchor at a 0-based line/column of a Go file."""
        scanned = scan_document(
            documents.open(path), path=path, lookahead=config.lookahead
        )
        hint = hint_at(scanned.hints, line, column)
        if hint is None:
            return {
                "action": "none",
                "notice": f"No interface or receiver method at {path}:{line + 1}:{column}",
                "targets": [],
            }
        return navigator.navigate(path, hint).to_dict()

    return mcp


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run MCP server for Go navigation")
    parser.add_argument(
        "--index",
        default=None,
        help="Path to an index JSON built by gonav-index (optional)",
    )
    parser.add_argument(
        "--transport",
        default="stdio",
        choices=["stdio", "sse", "streamable-http"],
        help="Transport type",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Host for HTTP transports")
    parser.add_argument("--port", type=int, default=8001, help="Port for HTTP transports")
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Load the index and exit",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    config = resolve_config()
    configure_logging(config)

    service = None
    if args.index:
        index_path = Path(args.index)
        if not index_path.exists():
            raise SystemExit(f"Index not found: {index_path}")
        service = IndexService.from_json(index_path)
        ensure_snapshot(service.graph, source_root=str(index_path))

    if args.validate:
        print(service.metadata() if service else {"loaded": False})
        return 0

    navigator = Navigator(
        GoplsOracle.from_config(config),
        FileDocumentAccessor(),
        lookahead=config.lookahead,
    )
    mcp = create_server(service, navigator, config)
    mcp.settings.host = args.host
    mcp.settings.port = args.port
    mcp.run(transport=args.transport)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
