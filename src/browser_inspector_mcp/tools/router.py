"""MCP tool definitions for page inspection."""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from browser_inspector_mcp.tools.service import get_dispatcher


async def visit_webpage(
    url: str,
    wait_for_selector: str | None = None,
    screenshot: bool = False,
) -> str:
    """Visit a web page and return its title, URL and text content.

    Args:
        url: URL of the page to open
        wait_for_selector: CSS selector to wait for before reading the page (optional)
        screenshot: Capture a full-page screenshot (default: False)

    Returns:
        Page metadata and a preview of the visible text
    """
    return await get_dispatcher().invoke(
        "visit_webpage",
        {"url": url, "wait_for_selector": wait_for_selector, "screenshot": screenshot},
    )


async def analyze_page_content(url: str, focus_area: str | None = None) -> str:
    """Analyze a page's structure: forms, buttons, links, error messages and frameworks.

    Args:
        url: URL of the page to analyze
        focus_area: Area to focus the analysis on (e.g. forms, navigation, content)

    Returns:
        Structure report
    """
    return await get_dispatcher().invoke(
        "analyze_page_content", {"url": url, "focus_area": focus_area}
    )


async def check_api_endpoints(url: str, duration: float = 10) -> str:
    """Monitor the network requests a page makes and list API endpoints.

    Args:
        url: URL of the page to monitor
        duration: Seconds to keep listening after the page loads (default: 10)

    Returns:
        Network traffic report
    """
    return await get_dispatcher().invoke("check_api_endpoints", {"url": url, "duration": duration})


async def test_form_interaction(
    url: str,
    form_selector: str = "form",
    test_data: dict[str, Any] | None = None,
) -> str:
    """Fill a form on a page with test data and report each field.

    Args:
        url: URL of the page containing the form
        form_selector: CSS selector of the form (default: "form")
        test_data: Field name (or id) to value mapping

    Returns:
        Form interaction report
    """
    return await get_dispatcher().invoke(
        "test_form_interaction",
        {"url": url, "form_selector": form_selector, "test_data": test_data or {}},
    )


async def extract_errors(url: str) -> str:
    """Extract error messages shown on a page, console errors and failed requests.

    Args:
        url: URL of the page to check

    Returns:
        Error report
    """
    return await get_dispatcher().invoke("extract_errors", {"url": url})


def register_inspection_tools(mcp: FastMCP) -> None:
    """Register the page inspection tools on the MCP server.

    Args:
        mcp: FastMCP server instance to register tools on
    """
    mcp.tool()(visit_webpage)
    mcp.tool()(analyze_page_content)
    mcp.tool()(check_api_endpoints)
    mcp.tool()(test_form_interaction)
    mcp.tool()(extract_errors)
