"""Base operation interface for page inspection."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, ClassVar

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, Response
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from pydantic import BaseModel

from browser_inspector_mcp.config import get_config
from browser_inspector_mcp.core.session import BrowserSession
from browser_inspector_mcp.errors import (
    EvaluationFailure,
    NavigationFailure,
    NavigationTimeout,
    SelectorWaitTimeout,
)
from browser_inspector_mcp.models.arguments import PageArgs
from browser_inspector_mcp.models.reports import (
    ConsoleErrorRecord,
    FailedRequestRecord,
    NetworkRequestRecord,
)

logger = logging.getLogger(__name__)


def decode_body(body: bytes | None) -> str | None:
    """Decode a request body for display; binary bytes become U+FFFD."""
    if body is None:
        return None
    return body.decode("utf-8", errors="replace")


def _guarded(event: str, handler: Callable[..., Any]) -> Callable[..., None]:
    # An exception escaping a listener is re-raised by Playwright at the next
    # API call on the connection, which may belong to another tool call.
    def listener(payload: Any) -> None:
        try:
            handler(payload)
        except Exception as e:
            logger.warning(f"Dropped {event} event: {e}")

    return listener


@dataclass
class PageContext:
    """State owned by one operation invocation.

    Listeners registered through :meth:`on` are removed by :meth:`detach`,
    so events from one call never leak into another.
    """

    page: Page
    url: str
    wait_for_selector: str | None = None
    response: Response | None = None
    requests: list[NetworkRequestRecord] = field(default_factory=list)
    console_errors: list[ConsoleErrorRecord] = field(default_factory=list)
    failed_requests: list[FailedRequestRecord] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    _listeners: list[tuple[str, Callable[..., Any]]] = field(default_factory=list)

    def on(self, event: str, handler: Callable[..., Any]) -> None:
        guarded = _guarded(event, handler)
        self.page.on(event, guarded)
        self._listeners.append((event, guarded))

    def detach(self) -> None:
        while self._listeners:
            event, handler = self._listeners.pop()
            try:
                self.page.remove_listener(event, handler)
            except Exception as e:
                logger.debug(f"Error removing {event} listener: {e}")

    # Event recorders, registered by operations that need them

    def record_request(self, request: Any) -> None:
        self.requests.append(
            NetworkRequestRecord(
                url=request.url,
                method=request.method,
                headers=dict(request.headers or {}),
                post_data=decode_body(request.post_data_buffer),
            )
        )

    def record_response(self, response: Any) -> None:
        for record in self.requests:
            if record.url == response.url and record.pending:
                record.status = response.status
                record.status_text = response.status_text
                record.response_headers = dict(response.headers or {})
                return

    def record_console(self, message: Any) -> None:
        if message.type != "error":
            return
        location = message.location or {}
        self.console_errors.append(
            ConsoleErrorRecord(
                text=message.text,
                url=location.get("url") or None,
                line_number=location.get("lineNumber"),
                column_number=location.get("columnNumber"),
            )
        )

    def record_page_error(self, error: Any) -> None:
        self.console_errors.append(ConsoleErrorRecord(text=f"Uncaught exception: {error}"))

    def record_request_failed(self, request: Any) -> None:
        self.failed_requests.append(
            FailedRequestRecord(
                url=request.url,
                method=request.method,
                failure=request.failure or "unknown error",
            )
        )


class PageOperation(ABC):
    """Abstract base class for page operations.

    Subclasses supply :meth:`instrument` and :meth:`extract`; navigation,
    selector waiting, timeouts and page release are handled here.
    """

    name: ClassVar[str]

    async def run(self, session: BrowserSession, args: PageArgs) -> BaseModel:
        """Run the operation on a fresh page.

        Args:
            session: Browser session to borrow a page from
            args: Validated tool arguments

        Returns:
            The operation's report model

        Raises:
            LaunchFailure: If the browser could not be started
            NavigationFailure: If the page could not be loaded
            EvaluationFailure: If an in-page script threw
        """
        async with session.page() as page:
            ctx = PageContext(
                page=page,
                url=args.url,
                wait_for_selector=getattr(args, "wait_for_selector", None),
            )
            try:
                self.instrument(ctx)
                await self.navigate(ctx)
                if ctx.wait_for_selector:
                    try:
                        await self.wait_for_selector(ctx, ctx.wait_for_selector)
                    except SelectorWaitTimeout as e:
                        logger.info(f"{self.name}: {e}")
                        ctx.warnings.append(str(e))
                return await self.extract(ctx, args)
            finally:
                ctx.detach()

    def instrument(self, ctx: PageContext) -> None:
        """Register page listeners before navigation. Default: none."""

    @abstractmethod
    async def extract(self, ctx: PageContext, args: Any) -> BaseModel:
        """Perform the operation-specific work on the loaded page.

        Args:
            ctx: Page context for this invocation
            args: Validated tool arguments

        Returns:
            Report model
        """
        pass

    async def navigate(self, ctx: PageContext) -> None:
        timeout = get_config("navigation_timeout", 30.0)
        wait_until = get_config("wait_until", "networkidle")
        logger.debug(f"{self.name}: navigating to {ctx.url} (wait_until={wait_until})")
        try:
            ctx.response = await ctx.page.goto(ctx.url, wait_until=wait_until, timeout=timeout * 1000)
        except PlaywrightTimeoutError as e:
            raise NavigationTimeout(ctx.url, timeout) from e
        except PlaywrightError as e:
            raise NavigationFailure(ctx.url, f"Navigation to {ctx.url} failed: {e.message}") from e

    async def wait_for_selector(self, ctx: PageContext, selector: str) -> None:
        timeout = get_config("selector_timeout", 10.0)
        try:
            await ctx.page.wait_for_selector(selector, timeout=timeout * 1000)
        except PlaywrightTimeoutError as e:
            raise SelectorWaitTimeout(selector, timeout) from e

    async def evaluate(self, target: Any, script: str, arg: Any = None) -> Any:
        """Evaluate a script on a page or element handle.

        Raises:
            EvaluationFailure: If the script threw or the context was destroyed
        """
        try:
            return await target.evaluate(script, arg)
        except PlaywrightError as e:
            raise EvaluationFailure(f"{self.name}: page script failed: {e.message}") from e
