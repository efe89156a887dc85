"""Shared headless browser session."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from playwright.async_api import Browser, Page, Playwright, async_playwright

from browser_inspector_mcp.config import get_config
from browser_inspector_mcp.errors import LaunchFailure

logger = logging.getLogger(__name__)

LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]

UNINITIALIZED = "uninitialized"
RUNNING = "running"
CLOSED = "closed"

Launcher = Callable[[], Awaitable[Browser]]


class BrowserSession:
    """Owns one lazily launched browser and hands out single-use pages.

    Operations borrow the session; they never close the browser. Each call
    to :meth:`page` yields a fresh page that is closed when the ``async with``
    block exits, whatever the outcome.
    """

    def __init__(self, launcher: Launcher | None = None) -> None:
        """Initialize an unlaunched session.

        Args:
            launcher: Optional coroutine function returning a Browser.
                      Defaults to launching Chromium through Playwright.
        """
        self._launcher = launcher
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._lock = asyncio.Lock()
        self._closed = False
        self.open_pages = 0
        self.launch_count = 0

    @property
    def state(self) -> str:
        if self._closed:
            return CLOSED
        if self._browser is None:
            return UNINITIALIZED
        return RUNNING

    def _is_connected(self) -> bool:
        if self._browser is None:
            return False
        try:
            return bool(self._browser.is_connected())
        except Exception:
            return False

    async def ensure(self) -> Browser:
        """Return the running browser, launching it on first use.

        Concurrent callers share a single launch.

        Returns:
            The browser handle

        Raises:
            LaunchFailure: If the browser could not be started or the
                           session has been shut down
        """
        if self._closed:
            raise LaunchFailure("Browser session has been shut down")
        if self._browser is not None and self._is_connected():
            return self._browser

        async with self._lock:
            if self._closed:
                raise LaunchFailure("Browser session has been shut down")
            if self._browser is not None:
                if self._is_connected():
                    return self._browser
                logger.warning("Browser disconnected, relaunching")
                self._browser = None
                await self._stop_driver()

            try:
                launcher = self._launcher or self._launch_chromium
                browser = await launcher()
            except LaunchFailure:
                raise
            except Exception as e:
                await self._stop_driver()
                raise LaunchFailure(f"Failed to launch browser: {e}") from e

            # shutdown() ran while the launch was in flight
            if self._closed:
                await self._close_browser(browser)
                await self._stop_driver()
                raise LaunchFailure("Browser session has been shut down")

            self._browser = browser
            self.launch_count += 1
            logger.info(f"Browser launched (launch #{self.launch_count})")
            return browser

    async def _launch_chromium(self) -> Browser:
        headless = get_config("headless", True)
        logger.info(f"Launching Chromium (headless={headless})")
        self._playwright = await async_playwright().start()
        return await self._playwright.chromium.launch(headless=headless, args=LAUNCH_ARGS)

    async def _stop_driver(self) -> None:
        if self._playwright is None:
            return
        playwright, self._playwright = self._playwright, None
        try:
            await playwright.stop()
        except Exception as e:
            logger.warning(f"Error stopping Playwright driver: {e}")

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Page]:
        """Open a new page and close it when the block exits.

        Yields:
            A fresh Page owned by the caller for the duration of the block
        """
        browser = await self.ensure()
        page = await browser.new_page(
            user_agent=get_config("user_agent"),
            viewport={
                "width": get_config("viewport_width", 1280),
                "height": get_config("viewport_height", 800),
            },
        )
        self.open_pages += 1
        try:
            yield page
        finally:
            self.open_pages -= 1
            try:
                await page.close()
            except Exception as e:
                logger.debug(f"Error closing page: {e}")

    async def shutdown(self) -> None:
        """Close the browser if one is running.

        Safe to call repeatedly and from shutdown hooks: errors are logged
        and the wait is bounded by the ``shutdown_timeout`` setting.
        """
        if self._closed:
            return
        self._closed = True
        browser, self._browser = self._browser, None

        if browser is not None:
            await self._close_browser(browser)

        await self._stop_driver()

    async def _close_browser(self, browser: Browser) -> None:
        timeout = get_config("shutdown_timeout", 5.0)
        try:
            await asyncio.wait_for(browser.close(), timeout=timeout)
            logger.info("Browser closed")
        except asyncio.TimeoutError:
            logger.warning(f"Browser did not close within {timeout:g}s")
        except Exception as e:
            logger.warning(f"Error closing browser: {e}")

    def status(self) -> dict[str, Any]:
        """Describe the session for the stats endpoint."""
        return {
            "state": self.state,
            "connected": self._is_connected(),
            "open_pages": self.open_pages,
            "launch_count": self.launch_count,
        }


# Process-wide session used by the MCP server
default_session = BrowserSession()


def get_session() -> BrowserSession:
    """Get the process-wide browser session."""
    return default_session
