"""Admin service layer for configuration and stats."""

from __future__ import annotations

from typing import Any

from browser_inspector_mcp.config import get_current_config, update_config
from browser_inspector_mcp.core.session import get_session
from browser_inspector_mcp.metrics import get_metrics
from browser_inspector_mcp.tools.service import get_dispatcher


def get_stats() -> dict[str, Any]:
    """Get server statistics and metrics.

    Returns:
        Dictionary with tool call metrics, browser session status and
        the list of registered tools
    """
    stats = get_metrics().to_dict()
    stats["browser"] = get_session().status()
    stats["tools"] = [tool["name"] for tool in get_dispatcher().list_tools()]
    return stats


def get_config_snapshot() -> dict[str, Any]:
    return get_current_config()


def apply_config_updates(config_updates: dict[str, Any]) -> dict[str, Any]:
    """Apply runtime configuration overrides.

    Raises:
        ValueError: If the payload is not a mapping
    """
    if not isinstance(config_updates, dict):
        raise ValueError("'config' must be an object")
    return update_config(config_updates)
