"""
Registry of temporary paths that are deleted when the process exits.
"""

import atexit
from collections.abc import Callable
import logging
import os
import threading
from typing import Any

from tempreg.utils.fs import LocalFilesystem


class TempRegistry:
    """Ordered list of temporary paths with a one-time exit hook.

    The exit hook is installed the first time a path is registered, or
    earlier through initialize(). Cleanup visits paths in registration order
    and never raises; failures go to the logger.
    """

    def __init__(
        self,
        fs: LocalFilesystem | None = None,
        exit_hook: Callable[[Callable[[], Any]], Any] = atexit.register,
        logger: logging.Logger | None = None,
    ):
        """Initialize the registry.

        Args:
            fs: Filesystem used for deletion
            exit_hook: Called once with run_cleanup to schedule it at exit
            logger: Receives cleanup diagnostics
        """
        self.fs = fs or LocalFilesystem()
        self.logger = logger or logging.getLogger(__name__)
        self._exit_hook = exit_hook
        self._paths: list[str] = []
        self._hook_installed = False
        self._lock = threading.Lock()

    @property
    def hook_installed(self) -> bool:
        return self._hook_installed

    def _install_hook_locked(self) -> bool:
        if self._hook_installed:
            return False
        self._exit_hook(self.run_cleanup)
        self._hook_installed = True
        self.logger.debug("Installed temp cleanup exit hook")
        return True

    def initialize(self) -> bool:
        """Install the exit hook now instead of on first registration.

        Returns:
            True if this call installed the hook
        """
        with self._lock:
            return self._install_hook_locked()

    def register(self, path: str | os.PathLike) -> None:
        """Mark a path for deletion at process exit.

        The path does not need to exist yet.

        Args:
            path: File or directory path
        """
        if path is None:
            raise TypeError("path must not be None")
        path = os.fspath(path)
        with self._lock:
            if not self._paths:
                self._install_hook_locked()
            self._paths.append(path)

    def list_registered(self) -> list[str]:
        """Get the registered paths in registration order."""
        with self._lock:
            return list(self._paths)

    def _remove(self, path: str) -> None:
        if self.fs.is_symlink(path):
            self.fs.remove_file(path)
        elif not self.fs.exists(path):
            return
        elif self.fs.is_dir(path):
            self.fs.remove_tree(path, force=True)
        else:
            self.fs.remove_file(path, force=True)
        self.logger.debug(f"Removed temporary path: {path}")

    def run_cleanup(self) -> list[str]:
        """Delete every registered path and drain the registry.

        Paths that no longer exist are skipped. A failure on one path does
        not stop the others.

        Returns:
            Paths that could not be removed
        """
        with self._lock:
            paths = self._paths
            self._paths = []

        if paths:
            self.logger.info(f"Cleaning up {len(paths)} temporary paths")

        failed = []
        for path in paths:
            try:
                self._remove(path)
            except OSError as e:
                failed.append(path)
                self.logger.warning(f"Could not remove temporary path {path}: {e}")
        return failed

    run_shutdown_hooks = run_cleanup


_registry_instance: TempRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> TempRegistry:
    """Get the process-wide registry instance."""
    global _registry_instance
    with _registry_lock:
        if _registry_instance is None:
            _registry_instance = TempRegistry()
        return _registry_instance


def reset_registry() -> None:
    """Reset the process-wide registry instance (mainly for testing)."""
    global _registry_instance
    with _registry_lock:
        _registry_instance = None


def register_for_deletion(path: str | os.PathLike) -> None:
    """Register a path with the process-wide registry."""
    get_registry().register(path)


def list_registered() -> list[str]:
    """List paths registered with the process-wide registry."""
    return get_registry().list_registered()
