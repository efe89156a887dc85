"""Core infrastructure shared across the application.

This module provides the browser session that every inspection operation
borrows: a single lazily launched Chromium instance plus per-call pages.
"""

from browser_inspector_mcp.core.session import (
    BrowserSession,
    default_session,
    get_session,
)

__all__ = [
    "BrowserSession",
    "default_session",
    "get_session",
]
