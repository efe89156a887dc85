"""Pydantic data models for tool arguments and inspection reports.

This module defines the data structures used throughout the inspector:
- Tool argument models, whose JSON schemas are published to MCP clients
- Report models returned by each page operation
- Event records captured from the page (network requests, console errors)

All models use Pydantic v2 for validation and serialization.
"""

from browser_inspector_mcp.models.arguments import (
    AnalyzePageContentArgs,
    CheckApiEndpointsArgs,
    ExtractErrorsArgs,
    PageArgs,
    TestFormInteractionArgs,
    VisitWebpageArgs,
)
from browser_inspector_mcp.models.reports import (
    ButtonInfo,
    ConsoleErrorRecord,
    ErrorReport,
    FailedRequestRecord,
    FieldInteraction,
    FormInfo,
    FormInput,
    FormInteractionReport,
    LinkInfo,
    NetworkRequestRecord,
    PageContentReport,
    PageErrorElement,
    PageStructure,
    StructureReport,
    TrafficReport,
)

__all__ = [
    # Argument models
    "PageArgs",
    "VisitWebpageArgs",
    "AnalyzePageContentArgs",
    "CheckApiEndpointsArgs",
    "TestFormInteractionArgs",
    "ExtractErrorsArgs",
    # Event records
    "NetworkRequestRecord",
    "ConsoleErrorRecord",
    "FailedRequestRecord",
    # Reports
    "PageContentReport",
    "StructureReport",
    "FormInfo",
    "FormInput",
    "ButtonInfo",
    "LinkInfo",
    "PageErrorElement",
    "PageStructure",
    "TrafficReport",
    "FormInteractionReport",
    "FieldInteraction",
    "ErrorReport",
]
