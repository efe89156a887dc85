"""Fill a form's fields and report per-field outcomes."""

from __future__ import annotations

import logging

from playwright.async_api import Error as PlaywrightError

from browser_inspector_mcp.errors import EvaluationFailure, FormNotFound
from browser_inspector_mcp.models.arguments import TestFormInteractionArgs
from browser_inspector_mcp.models.reports import FieldInteraction, FormInteractionReport
from browser_inspector_mcp.operations.base import PageContext, PageOperation
from browser_inspector_mcp.operations.scripts import FILL_FIELD

logger = logging.getLogger(__name__)


class TestFormInteraction(PageOperation):
    """Set form field values by name or id and fire input/change events."""

    __test__ = False  # not a pytest test class

    name = "test_form_interaction"

    async def extract(self, ctx: PageContext, args: TestFormInteractionArgs) -> FormInteractionReport:
        try:
            form = await ctx.page.query_selector(args.form_selector)
        except PlaywrightError as e:
            raise EvaluationFailure(
                f"{self.name}: invalid form selector '{args.form_selector}': {e.message}"
            ) from e

        if form is None:
            missing = FormNotFound(args.form_selector)
            logger.info(f"{self.name}: {missing}")
            return FormInteractionReport(
                url=args.url,
                form_selector=args.form_selector,
                form_found=False,
                errors=[str(missing)],
                warnings=list(ctx.warnings),
            )

        interactions = []
        for key, value in args.test_data.items():
            text = value if isinstance(value, str) else str(value)
            try:
                outcome = await self.evaluate(form, FILL_FIELD, {"key": key, "value": text})
            except EvaluationFailure as e:
                interactions.append(FieldInteraction(key=key, value=value, success=False, error=str(e)))
                continue
            outcome = outcome or {}
            interactions.append(
                FieldInteraction(
                    key=key,
                    value=value,
                    success=bool(outcome.get("success")),
                    error=outcome.get("error"),
                )
            )

        return FormInteractionReport(
            url=args.url,
            form_selector=args.form_selector,
            form_found=True,
            interactions=interactions,
            errors=[i.error for i in interactions if not i.success and i.error],
            warnings=list(ctx.warnings),
        )
