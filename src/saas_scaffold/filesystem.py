"""Filesystem implementations and the path writer.

``LocalFileSystem`` talks to the real disk through :mod:`pathlib`.
``MemoryFileSystem`` keeps everything in dictionaries so the scaffolder and
destroyer can be exercised without touching the disk.
"""

from __future__ import annotations

import errno
import logging
import os
from collections.abc import Iterator
from pathlib import Path, PurePosixPath

from saas_scaffold.protocols import FileSystem

__all__ = ["LocalFileSystem", "MemoryFileSystem", "write_file"]

log = logging.getLogger(__name__)


def write_file(fs: FileSystem, path: Path, content: str) -> Path:
    """Write *content* to *path*, creating ancestor directories first.

    Existing ancestors are not an error and an existing file at *path* is
    overwritten.  The write is not atomic.
    """
    fs.mkdir(path.parent)
    fs.write_text(path, content)
    log.debug("Wrote %s (%d bytes)", path, len(content.encode("utf-8")))
    return path


# ---------------------------------------------------------------------------
# Real disk
# ---------------------------------------------------------------------------


class LocalFileSystem:
    """FileSystem backed by the operating system."""

    def exists(self, path: Path) -> bool:
        return path.exists() or path.is_symlink()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir() and not path.is_symlink()

    def is_symlink(self, path: Path) -> bool:
        return path.is_symlink()

    def mkdir(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def write_text(self, path: Path, content: str) -> None:
        path.write_text(content, encoding="utf-8")

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def iterdir(self, path: Path) -> Iterator[Path]:
        return iter(sorted(path.iterdir()))

    def unlink(self, path: Path) -> None:
        path.unlink()

    def rmdir(self, path: Path) -> None:
        path.rmdir()


# ---------------------------------------------------------------------------
# In-memory
# ---------------------------------------------------------------------------


class MemoryFileSystem:
    """Dictionary-backed FileSystem for tests.

    Paths are normalised to POSIX strings.  Symlinks are stored as a mapping
    from link path to target and are never resolved by any operation.
    """

    def __init__(self) -> None:
        self.files: dict[str, str] = {}
        self.dirs: set[str] = {"/"}
        self.links: dict[str, str] = {}

    # -- helpers -----------------------------------------------------------

    @staticmethod
    def _key(path: Path) -> str:
        # Relative paths are anchored at the root.
        return str(PurePosixPath("/") / PurePosixPath(path))

    def _require_parent(self, key: str) -> None:
        parent = str(PurePosixPath(key).parent)
        if parent not in self.dirs:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), parent)

    def symlink(self, link: Path, target: Path) -> None:
        """Create a symbolic link at *link* pointing to *target*."""
        key = self._key(link)
        self._require_parent(key)
        self.links[key] = self._key(target)

    # -- FileSystem --------------------------------------------------------

    def exists(self, path: Path) -> bool:
        key = self._key(path)
        return key in self.files or key in self.dirs or key in self.links

    def is_dir(self, path: Path) -> bool:
        return self._key(path) in self.dirs

    def is_symlink(self, path: Path) -> bool:
        return self._key(path) in self.links

    def mkdir(self, path: Path) -> None:
        key = self._key(path)
        current = PurePosixPath(key)
        chain = [current, *current.parents]
        for part in reversed(chain):
            part_key = str(part)
            if part_key in self.files or part_key in self.links:
                raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), part_key)
            self.dirs.add(part_key)

    def write_text(self, path: Path, content: str) -> None:
        key = self._key(path)
        self._require_parent(key)
        if key in self.dirs:
            raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), key)
        self.files[key] = content

    def read_text(self, path: Path) -> str:
        key = self._key(path)
        try:
            return self.files[key]
        except KeyError:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), key) from None

    def iterdir(self, path: Path) -> Iterator[Path]:
        key = self._key(path)
        if key not in self.dirs:
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), key)
        children = {
            entry
            for entry in (*self.files, *self.dirs, *self.links)
            if entry != key and str(PurePosixPath(entry).parent) == key
        }
        return iter(Path(child) for child in sorted(children))

    def unlink(self, path: Path) -> None:
        key = self._key(path)
        if key in self.links:
            del self.links[key]
        elif key in self.files:
            del self.files[key]
        elif key in self.dirs:
            raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), key)
        else:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), key)

    def rmdir(self, path: Path) -> None:
        key = self._key(path)
        if key not in self.dirs:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), key)
        if any(True for _ in self.iterdir(path)):
            raise OSError(errno.ENOTEMPTY, os.strerror(errno.ENOTEMPTY), key)
        self.dirs.discard(key)
