"""Admin API functionality for configuration and monitoring.

This module provides administrative endpoints for:
- Health checks and server status
- Runtime configuration management
- Statistics on tool calls and the browser session

The admin module follows a router -> service pattern:
- router.py: HTTP endpoint handlers
- service.py: Business logic for config and stats
"""

from browser_inspector_mcp.admin.router import (
    api_config_get,
    api_config_update,
    api_stats,
    health_check,
)
from browser_inspector_mcp.admin.service import (
    apply_config_updates,
    get_config_snapshot,
    get_stats,
)

__all__ = [
    # Router functions
    "api_config_get",
    "api_config_update",
    "api_stats",
    "health_check",
    # Service functions
    "apply_config_updates",
    "get_config_snapshot",
    "get_stats",
]
