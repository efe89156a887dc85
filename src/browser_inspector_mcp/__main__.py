"""Main entry point for the browser inspector MCP server."""

from __future__ import annotations

import sys

from browser_inspector_mcp.server import run_server


def main() -> None:
    """Main entry point."""
    # Parse command line arguments
    transport = "stdio"
    host = "0.0.0.0"
    port = 8000

    if len(sys.argv) > 1:
        transport = sys.argv[1]
    if len(sys.argv) > 2:
        host = sys.argv[2]
    if len(sys.argv) > 3:
        port = int(sys.argv[3])

    # stdout carries the protocol under stdio, so announce on stderr
    if transport == "stdio":
        print("Starting Browser Inspector MCP server on stdio...", file=sys.stderr)
    else:
        print(f"Starting Browser Inspector MCP server on {host}:{port} with {transport} transport...", file=sys.stderr)
    run_server(transport=transport, host=host, port=port)


if __name__ == "__main__":
    main()
