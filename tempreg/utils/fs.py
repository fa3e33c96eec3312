"""
Filesystem access used by the temporary-resource registry.

Thin wrappers over os/shutil/tempfile. Deletion helpers can force removal of
read-only entries by making them writable first.
"""

from contextlib import suppress
import os
import shutil
import stat
import tempfile


class LocalFilesystem:
    """Filesystem capability backed by the local OS."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_symlink(self, path: str) -> bool:
        return os.path.islink(path)

    def list_entries(self, path: str) -> list[str]:
        """List entry names in a directory, excluding '.' and '..'."""
        return sorted(os.listdir(path))

    def set_writable(self, path: str) -> None:
        """Add the owner write bit (and exec for directories) to a path."""
        mode = os.lstat(path).st_mode
        extra = stat.S_IWUSR
        if stat.S_ISDIR(mode):
            extra |= stat.S_IRUSR | stat.S_IXUSR
        os.chmod(path, stat.S_IMODE(mode) | extra)

    def _try_set_writable(self, path: str) -> None:
        # Best effort; the removal itself reports real failures
        with suppress(OSError):
            self.set_writable(path)

    def remove_file(self, path: str, force: bool = False) -> None:
        """Remove a file or symlink.

        Args:
            path: File to remove
            force: Clear the read-only bit before removing
        """
        if force and not os.path.islink(path):
            self._try_set_writable(path)
        os.remove(path)

    def remove_tree(self, path: str, force: bool = False) -> None:
        """Recursively remove a directory and everything below it.

        Args:
            path: Directory to remove
            force: Make every entry writable before removing
        """
        if force:
            self._try_set_writable(path)
            for root, dirs, files in os.walk(path):
                for name in dirs + files:
                    entry = os.path.join(root, name)
                    if not os.path.islink(entry):
                        self._try_set_writable(entry)
        shutil.rmtree(path)

    def make_unique_file(self, prefix: str, directory: str) -> str:
        """Create an empty, uniquely named file and return its path."""
        fd, path = tempfile.mkstemp(prefix=prefix, dir=directory)
        os.close(fd)
        return path

    def make_unique_dir(self, prefix: str, directory: str) -> str:
        """Create an empty, uniquely named directory and return its path."""
        return tempfile.mkdtemp(prefix=prefix, dir=directory)


_default_fs = LocalFilesystem()


def delete_path(path: str, force: bool = False) -> bool:
    """Delete a file or directory tree.

    Symlinks are removed without following them.

    Args:
        path: Path to delete
        force: Override read-only permissions before deleting

    Returns:
        True if something was deleted, False if the path did not exist
    """
    if _default_fs.is_symlink(path) or (
        _default_fs.exists(path) and not _default_fs.is_dir(path)
    ):
        _default_fs.remove_file(path, force=force)
        return True
    if _default_fs.is_dir(path):
        _default_fs.remove_tree(path, force=force)
        return True
    return False


def is_nested_directory(base: str, sub: str) -> bool:
    """Check whether sub is base itself or lies somewhere inside it."""
    base_real = os.path.realpath(base)
    sub_real = os.path.realpath(sub)
    try:
        return os.path.commonpath([base_real, sub_real]) == base_real
    except ValueError:
        # Different drives on Windows
        return False
