"""
Creation of temporary files and directories.

create_temp_file() and create_temp_directory() register what they create
with a TempRegistry so it is removed at process exit. temp_file() and
temp_directory() are scoped alternatives that delete on leaving the block.
"""

from collections.abc import Iterator
from contextlib import contextmanager
import logging
import os

from tempreg.config import DEFAULT_PREFIX, get_temp_root
from tempreg.registry import TempRegistry, get_registry
from tempreg.utils.fs import LocalFilesystem, delete_path

logger = logging.getLogger(__name__)


def _touch_new(path: str) -> None:
    fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o600)
    os.close(fd)


def create_temp_file(
    prefix: str = DEFAULT_PREFIX,
    directory: str | None = None,
    suffix: str | None = None,
    registry: TempRegistry | None = None,
) -> str:
    """Create a uniquely named temporary file registered for deletion.

    The unique base file is created first. With a suffix, base + suffix is
    created as well, and both paths are registered.

    Args:
        prefix: File name prefix
        directory: Directory to create the file in (default: temp root)
        suffix: Optional suffix such as ".sql"
        registry: Registry to use (default: process-wide registry)

    Returns:
        Path of the created file, including the suffix

    Raises:
        OSError: If the file cannot be created
    """
    registry = registry or get_registry()
    directory = directory or get_temp_root()

    base_path = registry.fs.make_unique_file(prefix, directory)
    registry.register(base_path)
    if not suffix:
        logger.debug(f"Created temporary file: {base_path}")
        return base_path

    path = base_path + suffix
    registry.register(path)
    _touch_new(path)
    logger.debug(f"Created temporary file: {path}")
    return path


def create_temp_directory(
    prefix: str = DEFAULT_PREFIX,
    registry: TempRegistry | None = None,
) -> str:
    """Create a uniquely named directory under the temp root.

    Raises:
        OSError: If the directory cannot be created
    """
    registry = registry or get_registry()
    path = registry.fs.make_unique_dir(prefix, get_temp_root())
    registry.register(path)
    logger.debug(f"Created temporary directory: {path}")
    return path


@contextmanager
def temp_file(
    prefix: str = DEFAULT_PREFIX,
    directory: str | None = None,
    suffix: str | None = None,
) -> Iterator[str]:
    """Create a temporary file that is deleted when the block exits.

    Nothing is added to the registry.
    """
    fs = LocalFilesystem()
    base_path = fs.make_unique_file(prefix, directory or get_temp_root())
    created = [base_path]
    try:
        path = base_path
        if suffix:
            path = base_path + suffix
            _touch_new(path)
            created.append(path)
        yield path
    finally:
        for created_path in reversed(created):
            delete_path(created_path, force=True)


@contextmanager
def temp_directory(prefix: str = DEFAULT_PREFIX) -> Iterator[str]:
    """Create a temporary directory that is deleted, with its contents, on exit."""
    path = LocalFilesystem().make_unique_dir(prefix, get_temp_root())
    try:
        yield path
    finally:
        delete_path(path, force=True)
