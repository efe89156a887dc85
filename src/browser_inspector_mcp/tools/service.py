"""Tool registry and dispatch for the inspection tools."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from browser_inspector_mcp.core.session import BrowserSession, get_session
from browser_inspector_mcp.errors import InvalidArguments, UnknownTool
from browser_inspector_mcp.metrics import record_call
from browser_inspector_mcp.models.arguments import (
    AnalyzePageContentArgs,
    CheckApiEndpointsArgs,
    ExtractErrorsArgs,
    TestFormInteractionArgs,
    VisitWebpageArgs,
)
from browser_inspector_mcp.operations import (
    AnalyzeStructure,
    CaptureTraffic,
    ExtractErrors,
    FetchContent,
    PageOperation,
    TestFormInteraction,
)
from browser_inspector_mcp.tools.formatting import (
    format_errors,
    format_form_interaction,
    format_page_content,
    format_structure,
    format_traffic,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolSpec:
    """A registered tool: its schema, operation and text formatter."""

    name: str
    description: str
    arguments: type[BaseModel]
    operation: PageOperation
    formatter: Callable[[Any], str]

    def input_schema(self) -> dict[str, Any]:
        schema = self.arguments.model_json_schema()
        schema.pop("title", None)
        schema.pop("description", None)
        for prop in schema.get("properties", {}).values():
            prop.pop("title", None)
        return schema


TOOLS: dict[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec(
            name="visit_webpage",
            description="Visit a web page and return its title, URL and text content",
            arguments=VisitWebpageArgs,
            operation=FetchContent(),
            formatter=format_page_content,
        ),
        ToolSpec(
            name="analyze_page_content",
            description="Analyze a page's structure: forms, buttons, links, error messages and frameworks",
            arguments=AnalyzePageContentArgs,
            operation=AnalyzeStructure(),
            formatter=format_structure,
        ),
        ToolSpec(
            name="check_api_endpoints",
            description="Monitor the network requests a page makes and list API endpoints",
            arguments=CheckApiEndpointsArgs,
            operation=CaptureTraffic(),
            formatter=format_traffic,
        ),
        ToolSpec(
            name="test_form_interaction",
            description="Fill a form on a page with test data and report each field",
            arguments=TestFormInteractionArgs,
            operation=TestFormInteraction(),
            formatter=format_form_interaction,
        ),
        ToolSpec(
            name="extract_errors",
            description="Extract error messages shown on a page, console errors and failed requests",
            arguments=ExtractErrorsArgs,
            operation=ExtractErrors(),
            formatter=format_errors,
        ),
    )
}


def error_reply(error: Exception | str) -> str:
    """Render an error as the single text block returned to the caller."""
    return f"Error: {error}"


class ToolDispatcher:
    """Validates tool arguments, runs the matching operation and renders it.

    No exception escapes :meth:`invoke`: every failure becomes an
    ``Error: ...`` reply so one bad call cannot take the server down.
    """

    def __init__(
        self,
        session: BrowserSession | None = None,
        tools: dict[str, ToolSpec] | None = None,
    ) -> None:
        self._session = session
        self.tools = tools if tools is not None else TOOLS

    @property
    def session(self) -> BrowserSession:
        return self._session if self._session is not None else get_session()

    def list_tools(self) -> list[dict[str, Any]]:
        """Describe every registered tool for capability discovery.

        Returns:
            List of {name, description, inputSchema} dictionaries
        """
        return [
            {
                "name": spec.name,
                "description": spec.description,
                "inputSchema": spec.input_schema(),
            }
            for spec in self.tools.values()
        ]

    def validate(self, name: str, arguments: dict[str, Any] | None) -> BaseModel:
        """Validate and default the arguments for a tool.

        Raises:
            UnknownTool: If no tool is registered under ``name``
            InvalidArguments: If the arguments do not match the schema
        """
        spec = self.tools.get(name)
        if spec is None:
            raise UnknownTool(name)
        try:
            return spec.arguments.model_validate(arguments or {})
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}"
                for err in e.errors()
            )
            raise InvalidArguments(f"Invalid arguments for {name}: {problems}") from e

    async def invoke(self, name: str, arguments: dict[str, Any] | None = None) -> str:
        """Run a tool and return its text reply.

        Args:
            name: Registered tool name
            arguments: Raw tool arguments

        Returns:
            The formatted report, or an ``Error: <message>`` line
        """
        url = (arguments or {}).get("url") if isinstance(arguments, dict) else None
        start = time.perf_counter()

        try:
            args = self.validate(name, arguments)
            spec = self.tools[name]
            logger.debug(f"Invoking {name} for {url}")
            report = await spec.operation.run(self.session, args)
            text = spec.formatter(report)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - start) * 1000
            error_msg = f"{type(e).__name__}: {e}"
            logger.warning(f"Tool {name} failed for {url}: {error_msg}")
            record_call(tool=name, success=False, url=url, elapsed_ms=elapsed_ms, error=error_msg)
            return error_reply(e)

        elapsed_ms = (time.perf_counter() - start) * 1000
        record_call(tool=name, success=True, url=url, elapsed_ms=elapsed_ms)
        return text


# Dispatcher bound to the process-wide session
default_dispatcher = ToolDispatcher()


def get_dispatcher() -> ToolDispatcher:
    """Get the dispatcher used by the MCP tools."""
    return default_dispatcher
