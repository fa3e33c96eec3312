"""
Configuration settings for tempreg.
"""

import os
import tempfile

# Name reported by the MCP server
SERVER_NAME = "TempReg"

# Prefix used for temporary files and directories when the caller gives none
DEFAULT_PREFIX = "tempreg_"

# Temp root override from environment variable
TEMP_ROOT_ENV = "TEMPREG_TEMP_ROOT"

# Logging level for the server process
LOG_LEVEL = os.environ.get("TEMPREG_LOG_LEVEL", "INFO").upper()


def _resolve_temp_root() -> str:
    configured = os.environ.get(TEMP_ROOT_ENV, "").strip()
    if configured:
        return os.path.abspath(os.path.expanduser(configured))
    return tempfile.gettempdir()


def get_temp_root() -> str:
    """Get the directory temporary resources are created under.

    The environment is read on every call so a changed TEMPREG_TEMP_ROOT
    takes effect without re-importing. The directory is created if missing.

    Returns:
        Absolute path to the temp root
    """
    temp_root = _resolve_temp_root()
    os.makedirs(temp_root, exist_ok=True)
    return temp_root
