"""
Temporary resource tools for MCP clients.

Clients may only create or register paths strictly inside the temp root.
"""

import logging
import os
from typing import Any

from fastmcp import FastMCP

from tempreg.config import DEFAULT_PREFIX, get_temp_root
from tempreg.registry import get_registry
from tempreg.temp_files import create_temp_directory, create_temp_file
from tempreg.utils.fs import is_nested_directory


def _inside_temp_root(path: str) -> bool:
    temp_root = get_temp_root()
    if os.path.realpath(path) == os.path.realpath(temp_root):
        return False
    return is_nested_directory(temp_root, path)


def _has_separator(name: str | None) -> bool:
    if not name:
        return False
    return os.sep in name or bool(os.altsep and os.altsep in name)


def create_temp_file_tool(
    prefix: str = DEFAULT_PREFIX, suffix: str | None = None, directory: str | None = None
) -> dict[str, Any]:
    """Create a temporary file that is removed when the server exits."""
    if _has_separator(prefix) or _has_separator(suffix):
        return {"success": False, "error": "Prefix and suffix must not contain path separators"}
    if directory and not _inside_temp_root(directory):
        logging.warning(f"Rejected temporary file directory outside temp root: {directory}")
        return {"success": False, "error": f"Directory is outside the temp root: {directory}"}
    try:
        path = create_temp_file(prefix, directory, suffix)
    except OSError as e:
        logging.error(f"Error creating temporary file: {str(e)}")
        return {"success": False, "error": str(e)}
    logging.info(f"Created temporary file {path}")
    return {"success": True, "path": path}


def create_temp_directory_tool(prefix: str = DEFAULT_PREFIX) -> dict[str, Any]:
    """Create a temporary directory that is removed when the server exits."""
    if _has_separator(prefix):
        return {"success": False, "error": "Prefix must not contain path separators"}
    try:
        path = create_temp_directory(prefix)
    except OSError as e:
        logging.error(f"Error creating temporary directory: {str(e)}")
        return {"success": False, "error": str(e)}
    logging.info(f"Created temporary directory {path}")
    return {"success": True, "path": path}


def register_temp_path_tool(path: str) -> dict[str, Any]:
    """Register a path inside the temp root for removal at server exit."""
    if not path:
        return {"success": False, "error": "A path is required"}
    if not _inside_temp_root(path):
        logging.warning(f"Rejected registration outside temp root: {path}")
        return {"success": False, "error": f"Path is outside the temp root: {path}"}
    get_registry().register(path)
    return {"success": True, "path": path}


def list_temp_paths_tool() -> dict[str, Any]:
    """List paths scheduled for removal, in registration order."""
    paths = get_registry().list_registered()
    return {"success": True, "paths": paths, "count": len(paths)}


def register_temp_tools(mcp: FastMCP) -> None:
    """Register temporary resource tools with the MCP server.

    Args:
        mcp: The FastMCP server instance
    """

    @mcp.tool()
    def create_temp_file(
        prefix: str = DEFAULT_PREFIX, suffix: str | None = None, directory: str | None = None
    ) -> dict[str, Any]:
        """Create a uniquely named temporary file.

        The file, and the unsuffixed placeholder next to it, are deleted when
        the server shuts down.

        Args:
            prefix: File name prefix
            suffix: Optional file suffix, e.g. ".sql"
            directory: Directory inside the temp root (default: temp root)
        """
        return create_temp_file_tool(prefix, suffix, directory)

    @mcp.tool()
    def create_temp_directory(prefix: str = DEFAULT_PREFIX) -> dict[str, Any]:
        """Create a uniquely named temporary directory under the temp root."""
        return create_temp_directory_tool(prefix)

    @mcp.tool()
    def register_temp_path(path: str) -> dict[str, Any]:
        """Schedule a file or directory inside the temp root for deletion at shutdown."""
        return register_temp_path_tool(path)

    @mcp.tool()
    def list_temp_paths() -> dict[str, Any]:
        """List the paths scheduled for deletion."""
        return list_temp_paths_tool()
