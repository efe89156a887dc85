"""Exception hierarchy for browser inspection operations."""

from __future__ import annotations


class InspectorError(Exception):
    """Base class for all inspection errors."""


class LaunchFailure(InspectorError):
    """The headless browser could not be started."""


class NavigationFailure(InspectorError):
    """Navigation to the target URL failed."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(message)


class NavigationTimeout(NavigationFailure):
    """Navigation did not complete within the configured timeout."""

    def __init__(self, url: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(url, f"Navigation to {url} timed out after {timeout:g}s")


class SelectorWaitTimeout(InspectorError):
    """A selector did not appear in time.

    Recoverable: operations record it as a warning and carry on.
    """

    def __init__(self, selector: str, timeout: float) -> None:
        self.selector = selector
        self.timeout = timeout
        super().__init__(f"Selector '{selector}' not found within {timeout:g}s")


class ElementNotFound(InspectorError):
    """An element required by the operation is missing from the page."""


class FormNotFound(ElementNotFound):
    """No form matched the requested selector."""

    def __init__(self, selector: str) -> None:
        self.selector = selector
        super().__init__(f"Form not found: {selector}")


class EvaluationFailure(InspectorError):
    """A script evaluated inside the page threw."""


class UnknownTool(InspectorError):
    """The requested tool name is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class InvalidArguments(InspectorError):
    """Tool arguments failed schema validation."""
