"""Page operations for different inspection tasks."""

from browser_inspector_mcp.operations.base import PageContext, PageOperation
from browser_inspector_mcp.operations.error_scan import ExtractErrors
from browser_inspector_mcp.operations.fetch_content import FetchContent
from browser_inspector_mcp.operations.forms import TestFormInteraction
from browser_inspector_mcp.operations.structure import AnalyzeStructure
from browser_inspector_mcp.operations.traffic import CaptureTraffic

__all__ = [
    "PageContext",
    "PageOperation",
    "FetchContent",
    "AnalyzeStructure",
    "CaptureTraffic",
    "TestFormInteraction",
    "ExtractErrors",
]
