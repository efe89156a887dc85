"""Pydantic argument models for the inspection tools."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class PageArgs(BaseModel):
    """Arguments shared by every tool."""

    url: str = Field(description="URL of the page to open")


class VisitWebpageArgs(PageArgs):
    """Arguments for visit_webpage."""

    wait_for_selector: str | None = Field(
        default=None, description="CSS selector to wait for before reading the page (optional)"
    )
    screenshot: bool = Field(default=False, description="Capture a full-page screenshot")


class AnalyzePageContentArgs(PageArgs):
    """Arguments for analyze_page_content."""

    focus_area: str | None = Field(
        default=None, description="Area to focus the analysis on (e.g. forms, navigation, content)"
    )


class CheckApiEndpointsArgs(PageArgs):
    """Arguments for check_api_endpoints."""

    duration: float = Field(default=10, ge=0, description="Seconds to keep listening for traffic")


class TestFormInteractionArgs(PageArgs):
    """Arguments for test_form_interaction."""

    __test__ = False  # not a pytest test class

    form_selector: str = Field(default="form", description="CSS selector of the form to fill")
    test_data: dict[str, Any] = Field(
        default={}, description="Field name (or id) to value mapping"
    )


class ExtractErrorsArgs(PageArgs):
    """Arguments for extract_errors."""
