"""Collect page-visible, console and network errors."""

from __future__ import annotations

from pydantic import ValidationError

from browser_inspector_mcp.errors import EvaluationFailure
from browser_inspector_mcp.models.arguments import ExtractErrorsArgs
from browser_inspector_mcp.models.reports import ErrorReport, PageErrorElement
from browser_inspector_mcp.operations.base import PageContext, PageOperation
from browser_inspector_mcp.operations.scripts import ERROR_SCAN, ERROR_SELECTORS


class ExtractErrors(PageOperation):
    """Listen for console and request failures, then scan for error elements."""

    name = "extract_errors"

    def instrument(self, ctx: PageContext) -> None:
        ctx.on("console", ctx.record_console)
        ctx.on("pageerror", ctx.record_page_error)
        ctx.on("requestfailed", ctx.record_request_failed)

    async def extract(self, ctx: PageContext, args: ExtractErrorsArgs) -> ErrorReport:
        found = await self.evaluate(ctx.page, ERROR_SCAN, {"errorSelectors": ERROR_SELECTORS})
        try:
            page_errors = [PageErrorElement.model_validate(item) for item in found or []]
        except ValidationError as e:
            raise EvaluationFailure(f"{self.name}: malformed scan result: {e}") from e

        return ErrorReport(
            url=args.url,
            page_errors=page_errors,
            console_errors=list(ctx.console_errors),
            network_errors=list(ctx.failed_requests),
            warnings=list(ctx.warnings),
        )
