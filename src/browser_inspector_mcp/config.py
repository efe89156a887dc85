"""Runtime configuration for the browser inspector.

Values are seeded from defaults and environment variables at import time and
may be overridden at runtime through the admin API. Overrides are not
persisted and reset on server restart.
"""

from __future__ import annotations

import logging
import os
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
)

# Playwright accepts these for page.goto(wait_until=...)
WAIT_UNTIL_CHOICES = ("commit", "domcontentloaded", "load", "networkidle")

DEFAULTS: dict[str, Any] = {
    "navigation_timeout": 30.0,
    "selector_timeout": 10.0,
    "wait_until": "networkidle",
    "settle_seconds": 2.0,
    "max_clicks": 3,
    "headless": True,
    "user_agent": DEFAULT_USER_AGENT,
    "viewport_width": 1280,
    "viewport_height": 800,
    "shutdown_timeout": 5.0,
    "screenshot_dir": "",
}


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={value!r}, using {default}")
        return default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={value!r}, using {default}")
        return default


def _load_runtime_config() -> dict[str, Any]:
    config = dict(DEFAULTS)
    config["navigation_timeout"] = _env_float("NAVIGATION_TIMEOUT", DEFAULTS["navigation_timeout"])
    config["selector_timeout"] = _env_float("SELECTOR_TIMEOUT", DEFAULTS["selector_timeout"])
    config["settle_seconds"] = _env_float("SETTLE_SECONDS", DEFAULTS["settle_seconds"])
    config["max_clicks"] = _env_int("MAX_CLICKS", DEFAULTS["max_clicks"])
    config["headless"] = os.getenv("BROWSER_HEADLESS", "true").lower() in ("true", "1", "yes")
    config["user_agent"] = os.getenv("USER_AGENT", DEFAULTS["user_agent"])
    config["screenshot_dir"] = os.getenv("SCREENSHOT_DIR", "")

    wait_until = os.getenv("WAIT_UNTIL", DEFAULTS["wait_until"])
    if wait_until in WAIT_UNTIL_CHOICES:
        config["wait_until"] = wait_until
    else:
        logger.warning(f"Ignoring invalid WAIT_UNTIL={wait_until!r}")

    return config


_runtime_config: dict[str, Any] = _load_runtime_config()


def get_config(key: str, default: Any = None) -> Any:
    """Get a configuration value with runtime override support.

    Args:
        key: Configuration key
        default: Default value if key not found

    Returns:
        Configuration value or default
    """
    return _runtime_config.get(key, default)


def get_current_config() -> dict[str, Any]:
    """Get current runtime configuration.

    Returns:
        Dictionary with current config, defaults, and note
    """
    return {
        "config": dict(_runtime_config),
        "defaults": dict(DEFAULTS),
        "note": "Changes are not persisted and will reset on server restart",
    }


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def update_config(config_updates: dict[str, Any]) -> dict[str, Any]:
    """Update runtime configuration.

    Unknown keys and values failing validation are skipped and listed under
    ``rejected``.

    Args:
        config_updates: Dictionary of config key-value pairs to update

    Returns:
        Dictionary with status, message, updated keys, rejected keys,
        and current config
    """
    updated = []
    rejected = []
    for key, value in config_updates.items():
        if key in ("navigation_timeout", "selector_timeout", "shutdown_timeout") and _is_number(value) and value > 0:
            _runtime_config[key] = float(value)
        elif key == "settle_seconds" and _is_number(value) and value >= 0:
            _runtime_config[key] = float(value)
        elif key == "max_clicks" and isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 50:
            _runtime_config[key] = value
        elif key in ("viewport_width", "viewport_height") and isinstance(value, int) and not isinstance(value, bool) and value > 0:
            _runtime_config[key] = value
        elif key == "headless" and isinstance(value, bool):
            _runtime_config[key] = value
        elif key == "wait_until" and value in WAIT_UNTIL_CHOICES:
            _runtime_config[key] = value
        elif key in ("user_agent", "screenshot_dir") and isinstance(value, str):
            _runtime_config[key] = value
        else:
            rejected.append(key)
            continue
        updated.append(key)

    if updated:
        logger.info(f"Runtime config updated: {', '.join(updated)}")

    return {
        "status": "success",
        "message": f"Updated {len(updated)} config value(s)",
        "updated": updated,
        "rejected": rejected,
        "current_config": dict(_runtime_config),
    }


def reset_config() -> None:
    """Restore the configuration loaded at startup."""
    _runtime_config.clear()
    _runtime_config.update(_load_runtime_config())
