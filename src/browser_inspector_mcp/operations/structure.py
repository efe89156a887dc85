"""Structural analysis of a page in a single DOM scan."""

from __future__ import annotations

from pydantic import ValidationError

from browser_inspector_mcp.errors import EvaluationFailure
from browser_inspector_mcp.models.arguments import AnalyzePageContentArgs
from browser_inspector_mcp.models.reports import StructureReport
from browser_inspector_mcp.operations.base import PageContext, PageOperation
from browser_inspector_mcp.operations.scripts import ERROR_SELECTORS, STRUCTURE_SCAN


class AnalyzeStructure(PageOperation):
    """Collect forms, buttons, links, error indicators and framework hints."""

    name = "analyze_page_content"

    async def extract(self, ctx: PageContext, args: AnalyzePageContentArgs) -> StructureReport:
        # One evaluation so every field comes from the same DOM snapshot
        scan = await self.evaluate(ctx.page, STRUCTURE_SCAN, {"errorSelectors": ERROR_SELECTORS})
        if not isinstance(scan, dict):
            raise EvaluationFailure(f"{self.name}: unexpected scan result {type(scan).__name__}")

        try:
            return StructureReport.model_validate(
                {
                    **scan,
                    "url": args.url,
                    "focus_area": args.focus_area,
                    "warnings": list(ctx.warnings),
                }
            )
        except ValidationError as e:
            raise EvaluationFailure(f"{self.name}: malformed scan result: {e}") from e
