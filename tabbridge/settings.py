"""
Goal: Centralized configuration for Tab Bridge (log paths, transport binary, agent bind).
Everything is read from the environment once, validated, and falls back to a sane default.
Nothing here touches the disk; sinks create their folders when they need them.
"""

import os
import re
from pathlib import Path

APP_NAME = "TabBridge"
VERSION = "0.4.0"

_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


def _validate_port(port_str: str, default: int) -> int:
    """Validate port number is in valid range."""
    try:
        port = int(port_str)
        if 1024 <= port <= 65535:
            return port
    except ValueError:
        pass
    return default


def _validate_host(host_str: str, default: str) -> str:
    """Validate host is localhost or valid IP."""
    if not host_str:
        return default

    # Only allow localhost variants and private IPs
    allowed_hosts = {"127.0.0.1", "localhost", "::1"}
    if host_str in allowed_hosts:
        return host_str

    # Validate private IP ranges
    if re.match(r"^192\.168\.\d{1,3}\.\d{1,3}$", host_str) or \
       re.match(r"^10\.\d{1,3}\.\d{1,3}\.\d{1,3}$", host_str) or \
       re.match(r"^172\.(1[6-9]|2[0-9]|3[0-1])\.\d{1,3}\.\d{1,3}$", host_str):
        return host_str

    return default


def _validate_level(level_str: str, default: str) -> str:
    """Accept only level names loguru knows about."""
    level = (level_str or "").strip().upper()
    return level if level in _LOG_LEVELS else default


def _default_log_dir() -> Path:
    # Alfred hands every workflow a private cache folder; use it when we run inside one
    workflow_cache = os.getenv("alfred_workflow_cache")
    if workflow_cache:
        return Path(workflow_cache)
    return Path.home() / "Library" / "Logs" / APP_NAME


LOG_DIR = Path(os.getenv("TABBRIDGE_LOG_DIR") or _default_log_dir())
LOG_LEVEL = _validate_level(os.getenv("TABBRIDGE_LOG_LEVEL", "INFO"), "INFO")
CONSOLE_LOG_LEVEL = _validate_level(
    os.getenv("TABBRIDGE_CONSOLE_LOG_LEVEL", "WARNING"), "WARNING"
)

# The binary that speaks Apple Events for us
OSASCRIPT = os.getenv("TABBRIDGE_OSASCRIPT") or "osascript"

# Local agent; a different default port than other bridges so both can run side by side
AGENT_HOST = _validate_host(os.getenv("TABBRIDGE_HOST", "127.0.0.1"), "127.0.0.1")
AGENT_PORT = _validate_port(os.getenv("TABBRIDGE_PORT", "5026"), 5026)

# Empty token means the /v1 API stays closed
AGENT_TOKEN = os.getenv("TABBRIDGE_TOKEN", "").strip()
