"""Tests for server startup and termination handling."""

from __future__ import annotations

import asyncio
import os
import signal
import sys
from unittest.mock import AsyncMock, patch

import pytest

from browser_inspector_mcp.server import install_signal_cleanup, mcp, serve
from conftest import make_session

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="requires POSIX signals")


class TestServe:
    """Tests for the process-scoped serve() coroutine."""

    @pytest.mark.asyncio
    async def test_browser_closed_when_stdio_ends(self) -> None:
        """Test that the browser is closed once the stdio transport returns."""
        session, browser = make_session()
        await session.ensure()

        with (
            patch("browser_inspector_mcp.server.get_session", return_value=session),
            patch.object(mcp, "run_stdio_async", AsyncMock()) as run_stdio,
        ):
            await serve("stdio")

        run_stdio.assert_awaited_once()
        assert browser.close_calls == 1
        assert session.state == "closed"

    @pytest.mark.asyncio
    async def test_browser_closed_when_transport_fails(self) -> None:
        """Test that the browser is closed even if the transport raises."""
        session, browser = make_session()
        await session.ensure()

        with (
            patch("browser_inspector_mcp.server.get_session", return_value=session),
            patch.object(mcp, "run_streamable_http_async", AsyncMock(side_effect=OSError("port in use"))),
        ):
            with pytest.raises(OSError, match="port in use"):
                await serve("streamable-http")

        assert browser.close_calls == 1

    @pytest.mark.asyncio
    async def test_unknown_transport(self) -> None:
        session, _ = make_session()

        with patch("browser_inspector_mcp.server.get_session", return_value=session):
            with pytest.raises(ValueError, match="Unknown transport: carrier-pigeon"):
                await serve("carrier-pigeon")

        assert session.state == "closed"


@posix_only
class TestSignalCleanup:
    """Tests for install_signal_cleanup."""

    @pytest.mark.asyncio
    async def test_signal_shuts_down_then_reraises(self) -> None:
        """Test that a signal closes the browser before the signal is re-raised."""
        session, browser = make_session()
        await session.ensure()
        reraised: list[int] = []

        def reraise(signum: int) -> None:
            reraised.append(signum)

        uninstall = install_signal_cleanup(session, signals=(signal.SIGUSR1,), reraise=reraise)
        try:
            os.kill(os.getpid(), signal.SIGUSR1)
            for _ in range(100):
                if reraised:
                    break
                await asyncio.sleep(0.01)
        finally:
            uninstall()

        assert reraised == [signal.SIGUSR1]
        assert browser.close_calls == 1
        assert session.state == "closed"

    @pytest.mark.asyncio
    async def test_uninstall_removes_handlers(self) -> None:
        session, _ = make_session()
        loop = asyncio.get_running_loop()

        uninstall = install_signal_cleanup(session, signals=(signal.SIGUSR2,), reraise=lambda signum: None)
        uninstall()

        assert loop.remove_signal_handler(signal.SIGUSR2) is False
        assert session.state == "uninitialized"
