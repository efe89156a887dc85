"""MCP inspection tools and dispatch logic.

This module exposes the page inspection operations as MCP tools:
- visit_webpage: Page content, title and optional screenshot
- analyze_page_content: Forms, buttons, links and framework detection
- check_api_endpoints: Network traffic capture and API classification
- test_form_interaction: Form filling with per-field results
- extract_errors: Page, console and network errors

The tools module follows a router -> service pattern:
- router.py: MCP tool definitions and registration
- service.py: Tool registry, argument validation and dispatch
- formatting.py: Text rendering of reports
"""

from browser_inspector_mcp.tools.router import (
    analyze_page_content,
    check_api_endpoints,
    extract_errors,
    register_inspection_tools,
    test_form_interaction,
    visit_webpage,
)
from browser_inspector_mcp.tools.service import (
    TOOLS,
    ToolDispatcher,
    ToolSpec,
    get_dispatcher,
)

__all__ = [
    # MCP tool functions
    "visit_webpage",
    "analyze_page_content",
    "check_api_endpoints",
    "test_form_interaction",
    "extract_errors",
    # Registration functions
    "register_inspection_tools",
    # Service
    "TOOLS",
    "ToolDispatcher",
    "ToolSpec",
    "get_dispatcher",
]
