"""Pytest configuration and fixtures for browser-inspector-mcp tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from typing import Any

import pytest
import pytest_asyncio
from playwright.async_api import Browser, Page, async_playwright
from playwright.async_api import Error as PlaywrightError

from browser_inspector_mcp.config import reset_config, update_config
from browser_inspector_mcp.core.session import LAUNCH_ARGS, BrowserSession


class FakeRequest:
    """Request whose ``post_data`` decodes the body strictly, as Playwright does."""

    def __init__(
        self,
        url: str,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        post_data: str | bytes | None = None,
        failure: str | None = None,
    ) -> None:
        self.url = url
        self.method = method
        self.headers = headers or {}
        self.post_data_buffer = post_data.encode() if isinstance(post_data, str) else post_data
        self.failure = failure

    @property
    def post_data(self) -> str | None:
        if self.post_data_buffer is None:
            return None
        return self.post_data_buffer.decode()


class FakeResponse:
    def __init__(
        self,
        url: str,
        status: int = 200,
        status_text: str = "OK",
        headers: dict[str, str] | None = None,
    ) -> None:
        self.url = url
        self.status = status
        self.status_text = status_text
        self.headers = headers or {"content-type": "text/html"}


class FakeConsoleMessage:
    def __init__(self, type: str, text: str, location: dict[str, Any] | None = None) -> None:
        self.type = type
        self.text = text
        self.location = location or {}


class FakeFormElement:
    """Form handle whose fields are a name -> value dict."""

    def __init__(self, fields: list[str]) -> None:
        self.values: dict[str, str | None] = {name: None for name in fields}
        self.fill_attempts: list[dict[str, Any]] = []

    async def evaluate(self, script: str, arg: Any = None) -> dict[str, Any]:
        self.fill_attempts.append(arg)
        key = arg["key"]
        if key not in self.values:
            return {"success": False, "error": f"Field not found: {key}"}
        self.values[key] = arg["value"]
        return {"success": True, "error": None}


class FakePage:
    """Stand-in for a Playwright Page.

    ``navigation_events`` are (event, payload) pairs emitted during goto().
    ``evaluations`` maps a script to a return value, a callable taking the
    script argument, or an exception to raise.
    """

    def __init__(
        self,
        html: str = "<html><head><title>Fake</title></head><body><p>Hello</p></body></html>",
        title: str = "Fake",
        status: int = 200,
        navigation_events: list[tuple[str, Any]] | None = None,
        evaluations: dict[str, Any] | None = None,
        forms: dict[str, FakeFormElement] | None = None,
        goto_error: Exception | None = None,
        selector_error: Exception | None = None,
        final_url: str | None = None,
    ) -> None:
        self.html = html
        self._title = title
        self.status = status
        self.navigation_events = navigation_events or []
        self.evaluations = evaluations or {}
        self.forms = forms or {}
        self.goto_error = goto_error
        self.selector_error = selector_error
        self.final_url = final_url
        self.url = "about:blank"
        self.listeners: dict[str, list[Callable[..., Any]]] = {}
        self.goto_calls: list[dict[str, Any]] = []
        self.evaluate_calls: list[tuple[str, Any]] = []
        self.closed = 0
        self.listeners_at_goto: dict[str, int] = {}

    def on(self, event: str, handler: Callable[..., Any]) -> None:
        self.listeners.setdefault(event, []).append(handler)

    def remove_listener(self, event: str, handler: Callable[..., Any]) -> None:
        self.listeners[event].remove(handler)

    def emit(self, event: str, payload: Any) -> None:
        for handler in list(self.listeners.get(event, [])):
            handler(payload)

    def listener_count(self) -> int:
        return sum(len(handlers) for handlers in self.listeners.values())

    async def goto(self, url: str, wait_until: str = "load", timeout: float = 30000) -> FakeResponse:
        self.goto_calls.append({"url": url, "wait_until": wait_until, "timeout": timeout})
        self.listeners_at_goto = {event: len(h) for event, h in self.listeners.items()}
        if self.goto_error is not None:
            raise self.goto_error
        for event, payload in self.navigation_events:
            self.emit(event, payload)
        self.url = self.final_url or url
        return FakeResponse(self.url, status=self.status)

    async def wait_for_selector(self, selector: str, timeout: float = 30000) -> None:
        if self.selector_error is not None:
            raise self.selector_error

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        self.evaluate_calls.append((script, arg))
        result = self.evaluations.get(script)
        if isinstance(result, Exception):
            raise result
        if callable(result):
            return result(arg)
        return result

    async def content(self) -> str:
        return self.html

    async def title(self) -> str:
        return self._title

    async def screenshot(self, full_page: bool = False) -> bytes:
        return b"\x89PNG fake"

    async def query_selector(self, selector: str) -> FakeFormElement | None:
        return self.forms.get(selector)

    async def close(self) -> None:
        self.closed += 1


class FakeBrowser:
    def __init__(self, page_factory: Callable[[], FakePage] | None = None) -> None:
        self.page_factory = page_factory or FakePage
        self.pages: list[FakePage] = []
        self.new_page_kwargs: list[dict[str, Any]] = []
        self.connected = True
        self.close_calls = 0

    async def new_page(self, **kwargs: Any) -> FakePage:
        self.new_page_kwargs.append(kwargs)
        page = self.page_factory()
        self.pages.append(page)
        return page

    def is_connected(self) -> bool:
        return self.connected

    async def close(self) -> None:
        self.close_calls += 1
        self.connected = False


class FakeChromium:
    async def launch(self, headless: bool = True, args: list[str] | None = None) -> FakeBrowser:
        return FakeBrowser()


class FakeDriver:
    """Stand-in for a started Playwright driver."""

    def __init__(self) -> None:
        self.chromium = FakeChromium()
        self.stopped = 0

    async def stop(self) -> None:
        self.stopped += 1


def make_session(page: FakePage | None = None) -> tuple[BrowserSession, FakeBrowser]:
    """Build a session whose launcher returns a FakeBrowser serving ``page``."""
    browser = FakeBrowser(page_factory=(lambda: page) if page is not None else None)

    async def launcher() -> FakeBrowser:
        return browser

    return BrowserSession(launcher=launcher), browser


@pytest.fixture(autouse=True)
def fast_config():
    """Drop the post-click settle window and restore config afterwards."""
    update_config({"settle_seconds": 0})
    yield
    reset_config()


@pytest.fixture
def two_forms_scan() -> dict[str, Any]:
    """Structure scan result for a page with two forms."""
    return {
        "forms": [
            {
                "index": 0,
                "action": "https://example.com/signup",
                "method": "POST",
                "inputs": [
                    {"name": "email", "id": "email", "type": "text", "placeholder": "you@example.com", "required": True},
                    {"name": "password", "id": "", "type": "password", "placeholder": "", "required": False},
                ],
            },
            {
                "index": 1,
                "action": "",
                "method": "",
                "inputs": [{"name": "q", "id": "", "type": "search", "placeholder": "Search", "required": False}],
            },
        ],
        "buttons": [
            {"text": "Sign up", "type": "submit", "id": "go", "class_name": "btn", "has_click_handler": False},
            {"text": "Menu", "type": "button", "id": "", "class_name": "", "has_click_handler": True},
        ],
        "api_links": [{"href": "https://example.com/api/v1/users", "text": "Users API"}],
        "links": [{"href": "https://example.com/about", "text": "About"}],
        "errors": [],
        "structure": {
            "total_elements": 42,
            "scripts": 3,
            "stylesheets": 1,
            "images": 2,
            "frameworks": ["Vue"],
        },
    }


@pytest.fixture
def sample_html() -> str:
    """Sample HTML for text extraction."""
    return """
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <title>Test Page Title</title>
        <script>console.log('should be stripped');</script>
        <style>.test { color: red; }</style>
    </head>
    <body>
        <h1>Main Heading</h1>
        <p>This is a <strong>sample</strong> paragraph.</p>
        <noscript>No JavaScript content</noscript>
        <template><p>Template content</p></template>
    </body>
    </html>
    """


@pytest_asyncio.fixture
async def browser() -> AsyncIterator[Browser]:
    """A real headless Chromium, for running the in-page scripts on real DOM."""
    playwright = await async_playwright().start()
    try:
        try:
            chromium = await playwright.chromium.launch(headless=True, args=LAUNCH_ARGS)
        except PlaywrightError as e:
            pytest.skip(f"Chromium is not installed: {e.message}")
        yield chromium
        await chromium.close()
    finally:
        await playwright.stop()


@pytest_asyncio.fixture
async def dom_page(browser: Browser) -> AsyncIterator[Page]:
    """A blank page on the real browser; load markup with ``set_content``."""
    page = await browser.new_page()
    yield page
    await page.close()
