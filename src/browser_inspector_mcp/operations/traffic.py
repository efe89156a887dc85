"""Capture and classify the network traffic a page produces."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter

from browser_inspector_mcp.config import get_config
from browser_inspector_mcp.errors import EvaluationFailure
from browser_inspector_mcp.models.arguments import CheckApiEndpointsArgs
from browser_inspector_mcp.models.reports import TrafficReport
from browser_inspector_mcp.operations.base import PageContext, PageOperation
from browser_inspector_mcp.operations.scripts import CLICK_AFFORDANCES
from browser_inspector_mcp.utils import is_api_like

logger = logging.getLogger(__name__)


class CaptureTraffic(PageOperation):
    """Record requests during load, a listening window, and a few clicks."""

    name = "check_api_endpoints"

    def instrument(self, ctx: PageContext) -> None:
        ctx.on("request", ctx.record_request)
        ctx.on("response", ctx.record_response)

    async def extract(self, ctx: PageContext, args: CheckApiEndpointsArgs) -> TrafficReport:
        if args.duration > 0:
            logger.debug(f"{self.name}: listening for {args.duration:g}s on {ctx.url}")
            await asyncio.sleep(args.duration)

        clicks = 0
        try:
            clicks = await self.evaluate(
                ctx.page, CLICK_AFFORDANCES, {"limit": get_config("max_clicks", 3)}
            )
        except EvaluationFailure as e:
            # A click may navigate away and destroy the execution context
            logger.info(str(e))
            ctx.warnings.append(f"Click pass failed: {e}")

        settle = get_config("settle_seconds", 2.0)
        if settle > 0:
            await asyncio.sleep(settle)

        # Snapshot so late events cannot change the report while it is built
        requests = list(ctx.requests)
        return TrafficReport(
            url=args.url,
            duration=args.duration,
            requests=requests,
            api_requests=[r for r in requests if is_api_like(r.url, r.method)],
            method_counts=dict(Counter(r.method for r in requests)),
            clicks_performed=int(clicks or 0),
            warnings=list(ctx.warnings),
        )
