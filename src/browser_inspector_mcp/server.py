"""MCP server for browser-based page inspection."""

from __future__ import annotations

import asyncio
import logging
import signal
from collections.abc import Callable

import anyio
from mcp.server.fastmcp import FastMCP

from browser_inspector_mcp.admin import (
    api_config_get,
    api_config_update,
    api_stats,
    health_check,
)
from browser_inspector_mcp.core.session import BrowserSession, get_session
from browser_inspector_mcp.tools import register_inspection_tools

logger = logging.getLogger(__name__)

TERMINATION_SIGNALS = (signal.SIGTERM, signal.SIGINT)

# Stateless mode auto-creates sessions for unknown session IDs, making the
# server resilient to restarts
mcp = FastMCP(
    "Browser Inspector MCP",
    instructions=(
        "A browser automation MCP server that loads web pages in a headless "
        "browser and inspects them: page content, structure, network traffic, "
        "form interaction and error extraction."
    ),
    stateless_http=True,
)

register_inspection_tools(mcp)

mcp.custom_route("/healthz", methods=["GET"])(health_check)
mcp.custom_route("/api/stats", methods=["GET"])(api_stats)
mcp.custom_route("/api/config", methods=["GET"])(api_config_get)
mcp.custom_route("/api/config", methods=["POST"])(api_config_update)


def install_signal_cleanup(
    session: BrowserSession,
    signals: tuple[int, ...] = TERMINATION_SIGNALS,
    reraise: Callable[[int], None] = signal.raise_signal,
) -> Callable[[], None]:
    """Shut the browser session down when a termination signal arrives.

    The first signal removes the handlers, awaits the bounded
    ``session.shutdown()`` and then re-raises the signal, which now meets
    its default disposition.

    Returns:
        A function that removes the handlers again
    """
    loop = asyncio.get_running_loop()
    installed: list[int] = []
    tasks: set[asyncio.Task[None]] = set()

    def uninstall() -> None:
        while installed:
            loop.remove_signal_handler(installed.pop())

    async def terminate(signum: int) -> None:
        try:
            await session.shutdown()
        finally:
            reraise(signum)

    def handle(signum: int) -> None:
        logger.info(f"Received {signal.Signals(signum).name}, shutting down browser session")
        uninstall()
        task = loop.create_task(terminate(signum))
        tasks.add(task)
        task.add_done_callback(tasks.discard)

    for signum in signals:
        try:
            loop.add_signal_handler(signum, handle, signum)
        except (NotImplementedError, RuntimeError) as e:
            # Windows event loops and non-main threads
            logger.debug(f"Cannot handle {signal.Signals(signum).name}: {e}")
            continue
        installed.append(signum)

    return uninstall


async def serve(transport: str = "stdio") -> None:
    """Serve MCP over ``transport`` and close the browser when serving ends.

    HTTP transports run under uvicorn, which turns SIGINT/SIGTERM into a
    graceful exit; stdio needs its own handlers.
    """
    session = get_session()
    uninstall = install_signal_cleanup(session) if transport == "stdio" else None
    try:
        if transport == "stdio":
            await mcp.run_stdio_async()
        elif transport == "sse":
            await mcp.run_sse_async()
        elif transport == "streamable-http":
            await mcp.run_streamable_http_async()
        else:
            raise ValueError(f"Unknown transport: {transport}")
    finally:
        if uninstall is not None:
            uninstall()
        logger.info("Server stopping, shutting down browser session")
        with anyio.CancelScope(shield=True):
            await session.shutdown()


def run_server(transport: str = "stdio", host: str = "0.0.0.0", port: int = 8000) -> None:
    """Run the MCP server.

    Args:
        transport: Transport type ('stdio', 'streamable-http' or 'sse')
        host: Host to bind to for HTTP transports (default: 0.0.0.0)
        port: Port to bind to for HTTP transports (default: 8000)
    """
    mcp.settings.host = host
    mcp.settings.port = port

    anyio.run(serve, transport)


if __name__ == "__main__":
    run_server()
