"""
Configuration from environment variables

CLI flags and server arguments override these defaults.
"""
import os
from pathlib import Path
from typing import Optional

DEFAULT_PORT = 5002
DEFAULT_HOST = "127.0.0.1"
DEFAULT_GRACE_PERIOD = 3.0
DEFAULT_MAX_RESULTS = 200

_FALSE_VALUES = {"0", "false", "no", "off", ""}


def get_rg_path() -> Optional[str]:
    """Explicit ripgrep executable, if configured"""
    return os.environ.get("RG_PATH") or None


def get_bundle_dir() -> Path:
    """Directory searched for a bundled rg binary"""
    return Path(os.environ.get("RG_BUNDLE_DIR") or Path.cwd())


def get_search_root() -> Path:
    """Default directory for searches"""
    return Path(os.environ.get("SEARCH_ROOT") or Path.cwd())


def get_grace_period() -> float:
    """Seconds to wait after terminate before killing the search process"""
    value = os.environ.get("RG_GRACE_PERIOD", str(DEFAULT_GRACE_PERIOD))
    try:
        grace = float(value)
    except ValueError:
        msg = f"Invalid RG_GRACE_PERIOD value: {value}"
        raise ValueError(msg) from None
    if grace < 0:
        raise ValueError(f"Invalid RG_GRACE_PERIOD value: {value}")
    return grace


def get_max_results() -> int:
    """Default result cap for MCP tools"""
    value = os.environ.get("MAX_RESULTS", str(DEFAULT_MAX_RESULTS))
    try:
        return int(value)
    except ValueError:
        msg = f"Invalid MAX_RESULTS value: {value}"
        raise ValueError(msg) from None


def get_heading() -> bool:
    """Whether rg is asked to group hits under file header lines"""
    return os.environ.get("RG_HEADING", "1").strip().lower() not in _FALSE_VALUES


def get_port() -> int:
    """Get server port from environment or use default"""
    port_str = os.environ.get("PORT", str(DEFAULT_PORT))
    try:
        return int(port_str)
    except ValueError:
        msg = f"Invalid PORT value: {port_str}"
        raise ValueError(msg) from None


def get_host() -> str:
    return os.environ.get("HTTP_HOST", DEFAULT_HOST)
