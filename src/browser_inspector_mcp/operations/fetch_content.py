"""Fetch a page's content, text and optional screenshot."""

from __future__ import annotations

import base64
import logging
from datetime import datetime
from pathlib import Path

from playwright.async_api import Error as PlaywrightError

from browser_inspector_mcp.config import get_config
from browser_inspector_mcp.errors import EvaluationFailure
from browser_inspector_mcp.models.arguments import VisitWebpageArgs
from browser_inspector_mcp.models.reports import PageContentReport
from browser_inspector_mcp.operations.base import PageContext, PageOperation
from browser_inspector_mcp.utils import html_to_text, truncate

logger = logging.getLogger(__name__)

TEXT_LIMIT = 5000


class FetchContent(PageOperation):
    """Load a page and return its HTML, title, visible text and screenshot."""

    name = "visit_webpage"

    async def extract(self, ctx: PageContext, args: VisitWebpageArgs) -> PageContentReport:
        page = ctx.page
        try:
            html = await page.content()
            title = await page.title()
        except PlaywrightError as e:
            raise EvaluationFailure(f"{self.name}: could not read page: {e.message}") from e

        report = PageContentReport(
            requested_url=args.url,
            url=page.url,
            title=title,
            status_code=ctx.response.status if ctx.response is not None else None,
            html=html,
            html_length=len(html),
            text_content=truncate(html_to_text(html), TEXT_LIMIT),
            warnings=list(ctx.warnings),
        )

        if args.screenshot:
            await self._capture_screenshot(ctx, report)

        return report

    async def _capture_screenshot(self, ctx: PageContext, report: PageContentReport) -> None:
        try:
            png = await ctx.page.screenshot(full_page=True)
        except PlaywrightError as e:
            logger.warning(f"Screenshot of {ctx.url} failed: {e.message}")
            report.warnings.append(f"Screenshot failed: {e.message}")
            return

        report.screenshot = base64.b64encode(png).decode("ascii")

        screenshot_dir = get_config("screenshot_dir")
        if screenshot_dir:
            directory = Path(screenshot_dir)
            directory.mkdir(parents=True, exist_ok=True)
            path = directory / f"screenshot-{datetime.now():%Y%m%d-%H%M%S-%f}.png"
            path.write_bytes(png)
            report.screenshot_path = str(path)
            logger.debug(f"Screenshot saved to {path}")
