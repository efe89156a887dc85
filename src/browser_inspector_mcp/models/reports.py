"""Pydantic models for inspection reports."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class NetworkRequestRecord(BaseModel):
    """A request observed on the page, enriched when its response arrives."""

    url: str
    method: str
    headers: dict[str, str] = Field(default_factory=dict)
    post_data: str | None = None
    timestamp: datetime = Field(default_factory=datetime.now)
    status: int | None = Field(default=None, description="None while the response is pending")
    status_text: str | None = None
    response_headers: dict[str, str] | None = None

    @property
    def pending(self) -> bool:
        return self.status is None


class ConsoleErrorRecord(BaseModel):
    """A console error or uncaught exception raised by the page."""

    text: str
    url: str | None = None
    line_number: int | None = None
    column_number: int | None = None
    timestamp: datetime = Field(default_factory=datetime.now)


class FailedRequestRecord(BaseModel):
    """A request that failed at the network level."""

    url: str
    method: str
    failure: str


class PageContentReport(BaseModel):
    """Result of visit_webpage."""

    requested_url: str
    url: str = Field(description="Final URL after redirects")
    title: str
    status_code: int | None = None
    html: str
    html_length: int
    text_content: str = Field(description="Visible text, truncated")
    timestamp: datetime = Field(default_factory=datetime.now)
    screenshot: str | None = Field(default=None, description="Base64-encoded PNG")
    screenshot_path: str | None = None
    warnings: list[str] = Field(default_factory=list)


class FormInput(BaseModel):
    name: str = ""
    id: str = ""
    type: str = ""
    placeholder: str = ""
    required: bool = False


class FormInfo(BaseModel):
    index: int
    action: str = ""
    method: str = ""
    inputs: list[FormInput] = Field(default_factory=list)


class ButtonInfo(BaseModel):
    text: str = ""
    type: str = ""
    id: str = ""
    class_name: str = ""
    has_click_handler: bool = False


class LinkInfo(BaseModel):
    href: str
    text: str = ""


class PageErrorElement(BaseModel):
    """A visible element whose markup flags an error."""

    selector: str
    text: str
    class_name: str = ""


class PageStructure(BaseModel):
    total_elements: int = 0
    scripts: int = 0
    stylesheets: int = 0
    images: int = 0
    frameworks: list[str] = Field(default_factory=list)

    @property
    def primary_framework(self) -> str:
        return self.frameworks[0] if self.frameworks else "Vanilla JS"


class StructureReport(BaseModel):
    """Result of analyze_page_content."""

    url: str
    focus_area: str | None = None
    forms: list[FormInfo] = Field(default_factory=list)
    buttons: list[ButtonInfo] = Field(default_factory=list)
    api_links: list[LinkInfo] = Field(default_factory=list)
    links: list[LinkInfo] = Field(default_factory=list)
    errors: list[PageErrorElement] = Field(default_factory=list)
    structure: PageStructure = Field(default_factory=PageStructure)
    warnings: list[str] = Field(default_factory=list)


class TrafficReport(BaseModel):
    """Result of check_api_endpoints."""

    url: str
    duration: float
    requests: list[NetworkRequestRecord] = Field(default_factory=list)
    api_requests: list[NetworkRequestRecord] = Field(default_factory=list)
    method_counts: dict[str, int] = Field(default_factory=dict)
    clicks_performed: int = 0
    warnings: list[str] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.requests)

    @property
    def failed_requests(self) -> list[NetworkRequestRecord]:
        return [r for r in self.requests if r.status is not None and r.status >= 400]


class FieldInteraction(BaseModel):
    key: str
    value: Any = None
    success: bool
    error: str | None = None


class FormInteractionReport(BaseModel):
    """Result of test_form_interaction."""

    url: str
    form_selector: str
    form_found: bool
    interactions: list[FieldInteraction] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class ErrorReport(BaseModel):
    """Result of extract_errors."""

    url: str
    page_errors: list[PageErrorElement] = Field(default_factory=list)
    console_errors: list[ConsoleErrorRecord] = Field(default_factory=list)
    network_errors: list[FailedRequestRecord] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not (self.page_errors or self.console_errors or self.network_errors)
