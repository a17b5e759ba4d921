from __future__ import annotations

import argparse
import sys

import anyio
from mcp.client.session import ClientSession
from mcp.client.stdio import StdioServerParameters, stdio_client


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="MCP stdio smoke test")
    parser.add_argument("file", help="Go file to request hints for")
    parser.add_argument("--index", default=None, help="Optional index JSON")
    return parser.parse_args()


async def run() -> None:
    args = parse_args()
    server_args = ["-m", "gonav.mcp_server", "--transport", "stdio"]
    if args.index:
        server_args += ["--index", args.index]
    params = StdioServerParameters(command=sys.executable, args=server_args)

    async with stdio_client(params) as (read_stream, write_stream):
        async with ClientSession(read_stream, write_stream) as session:
            await session.initialize()
            tools = await session.list_tools()
            hints = await session.call_tool("hints", {"path": args.file})

    payload = hints.structuredContent
    if payload is None and hints.content:
        payload = [item.model_dump() for item in hints.content]

    print({
        "tools": [tool.name for tool in tools.tools],
        "hints": payload,
    })


if __name__ == "__main__":
    anyio.run(run)
