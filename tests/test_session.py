"""Tests for the shared browser session."""

from __future__ import annotations

import asyncio
from unittest.mock import patch

import pytest

from browser_inspector_mcp.core.session import BrowserSession
from browser_inspector_mcp.errors import LaunchFailure
from conftest import FakeBrowser, FakeDriver, FakePage, make_session


class TestEnsure:
    """Tests for BrowserSession.ensure."""

    @pytest.mark.asyncio
    async def test_launches_once_and_reuses_handle(self) -> None:
        """Test that repeated calls reuse the launched browser."""
        session, browser = make_session()

        first = await session.ensure()
        second = await session.ensure()

        assert first is browser
        assert second is browser
        assert session.launch_count == 1
        assert session.state == "running"

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_launch(self) -> None:
        """Test that N concurrent ensure() calls launch exactly one browser."""
        launches = 0

        async def slow_launcher() -> FakeBrowser:
            nonlocal launches
            launches += 1
            await asyncio.sleep(0.01)
            return FakeBrowser()

        session = BrowserSession(launcher=slow_launcher)
        handles = await asyncio.gather(*(session.ensure() for _ in range(10)))

        assert launches == 1
        assert all(handle is handles[0] for handle in handles)

    @pytest.mark.asyncio
    async def test_launch_failure_is_retryable(self) -> None:
        """Test that a failed launch leaves the session uninitialized."""
        attempts = 0

        async def flaky_launcher() -> FakeBrowser:
            nonlocal attempts
            attempts += 1
            if attempts == 1:
                raise RuntimeError("chromium binary missing")
            return FakeBrowser()

        session = BrowserSession(launcher=flaky_launcher)

        with pytest.raises(LaunchFailure, match="chromium binary missing"):
            await session.ensure()
        assert session.state == "uninitialized"

        browser = await session.ensure()
        assert isinstance(browser, FakeBrowser)
        assert attempts == 2
        assert session.state == "running"

    @pytest.mark.asyncio
    async def test_relaunches_disconnected_browser(self) -> None:
        """Test that a crashed browser is replaced on the next call."""
        browsers: list[FakeBrowser] = []

        async def launcher() -> FakeBrowser:
            browsers.append(FakeBrowser())
            return browsers[-1]

        session = BrowserSession(launcher=launcher)
        first = await session.ensure()
        first.connected = False

        second = await session.ensure()

        assert second is not first
        assert session.launch_count == 2

    @pytest.mark.asyncio
    async def test_relaunch_stops_previous_driver(self) -> None:
        """Test that relaunching after a crash stops the old Playwright driver."""
        drivers: list[FakeDriver] = []

        class FakeStarter:
            async def start(self) -> FakeDriver:
                drivers.append(FakeDriver())
                return drivers[-1]

        session = BrowserSession()
        with patch("browser_inspector_mcp.core.session.async_playwright", FakeStarter):
            first = await session.ensure()
            first.connected = False
            await session.ensure()

            assert len(drivers) == 2
            assert drivers[0].stopped == 1
            assert drivers[1].stopped == 0

            await session.shutdown()

        assert drivers[1].stopped == 1

    @pytest.mark.asyncio
    async def test_ensure_after_shutdown_fails(self) -> None:
        """Test that a closed session refuses to relaunch."""
        session, _ = make_session()
        await session.shutdown()

        with pytest.raises(LaunchFailure, match="shut down"):
            await session.ensure()


class TestPages:
    """Tests for per-operation pages."""

    @pytest.mark.asyncio
    async def test_page_closed_on_success(self) -> None:
        """Test that the page is closed once after a normal exit."""
        page = FakePage()
        session, browser = make_session(page)

        async with session.page() as opened:
            assert opened is page
            assert session.open_pages == 1

        assert page.closed == 1
        assert session.open_pages == 0
        assert browser.new_page_kwargs[0]["user_agent"]

    @pytest.mark.asyncio
    async def test_page_closed_on_error(self) -> None:
        """Test that the page is closed once when the block raises."""
        page = FakePage()
        session, _ = make_session(page)

        with pytest.raises(ValueError):
            async with session.page():
                raise ValueError("boom")

        assert page.closed == 1
        assert session.open_pages == 0


class TestShutdown:
    """Tests for BrowserSession.shutdown."""

    @pytest.mark.asyncio
    async def test_shutdown_closes_browser(self) -> None:
        """Test that shutdown closes the running browser."""
        session, browser = make_session()
        await session.ensure()

        await session.shutdown()

        assert browser.close_calls == 1
        assert session.state == "closed"

    @pytest.mark.asyncio
    async def test_shutdown_is_idempotent(self) -> None:
        """Test that a second shutdown is a no-op."""
        session, browser = make_session()
        await session.ensure()

        await session.shutdown()
        await session.shutdown()

        assert browser.close_calls == 1

    @pytest.mark.asyncio
    async def test_shutdown_without_launch(self) -> None:
        """Test that shutting down an unused session does nothing."""
        session, browser = make_session()

        await session.shutdown()

        assert browser.close_calls == 0
        assert session.state == "closed"

    @pytest.mark.asyncio
    async def test_shutdown_swallows_close_errors(self) -> None:
        """Test that errors while closing are logged, not raised."""
        session, browser = make_session()
        await session.ensure()

        async def broken_close() -> None:
            raise RuntimeError("already gone")

        browser.close = broken_close  # type: ignore[method-assign]

        await session.shutdown()

        assert session.state == "closed"

    @pytest.mark.asyncio
    async def test_shutdown_during_launch_closes_new_browser(self) -> None:
        """Test that a browser finishing its launch after shutdown is closed."""
        release = asyncio.Event()
        browser = FakeBrowser()

        async def gated_launcher() -> FakeBrowser:
            await release.wait()
            return browser

        session = BrowserSession(launcher=gated_launcher)
        pending = asyncio.create_task(session.ensure())
        await asyncio.sleep(0)

        await session.shutdown()
        release.set()

        with pytest.raises(LaunchFailure, match="shut down"):
            await pending
        assert browser.close_calls == 1
        assert session.state == "closed"
        assert session.launch_count == 0

    def test_status(self) -> None:
        """Test the status summary of a fresh session."""
        session, _ = make_session()

        assert session.status() == {
            "state": "uninitialized",
            "connected": False,
            "open_pages": 0,
            "launch_count": 0,
        }
