"""Admin API routes for health, stats and runtime config."""

import json

from starlette.requests import Request
from starlette.responses import JSONResponse

from browser_inspector_mcp.admin.service import (
    apply_config_updates,
    get_config_snapshot,
    get_stats,
)


async def health_check(request: Request) -> JSONResponse:
    """Health check endpoint for container orchestration.

    Returns:
        JSONResponse with status: healthy
    """
    return JSONResponse({"status": "healthy"})


async def api_stats(request: Request) -> JSONResponse:
    """Get server statistics and metrics as JSON.

    Returns:
        JSONResponse with tool call metrics and browser session status
    """
    return JSONResponse(get_stats())


async def api_config_get(request: Request) -> JSONResponse:
    """Get current runtime configuration.

    Returns:
        JSONResponse with current config values
    """
    return JSONResponse(get_config_snapshot())


async def api_config_update(request: Request) -> JSONResponse:
    """Update runtime configuration.

    Returns:
        JSONResponse with operation status
    """
    try:
        body = await request.json()
    except json.JSONDecodeError as e:
        return JSONResponse(
            {"status": "error", "message": f"Invalid JSON body: {e}"},
            status_code=400,
        )

    try:
        config_updates = body.get("config", {}) if isinstance(body, dict) else body
        result = apply_config_updates(config_updates)
        return JSONResponse(result)
    except ValueError as e:
        return JSONResponse(
            {"status": "error", "message": str(e)},
            status_code=400,
        )
    except Exception as e:
        return JSONResponse(
            {"status": "error", "message": str(e)},
            status_code=500,
        )
