"""Protocols (interfaces) for the filesystem and installer collaborators."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Protocol, runtime_checkable

from saas_scaffold.models import InstallOutcome

__all__ = ["FileSystem", "Installer"]


@runtime_checkable
class FileSystem(Protocol):
    """Minimal filesystem surface used by the scaffolder and destroyer.

    Paths are always passed as ``Path`` objects.  ``is_dir`` must not follow
    symbolic links: a link to a directory reports ``False`` and
    ``is_symlink`` reports ``True``.
    """

    def exists(self, path: Path) -> bool:
        """Return True if *path* exists (a dangling symlink counts)."""
        ...

    def is_dir(self, path: Path) -> bool:
        """Return True if *path* is a real directory."""
        ...

    def is_symlink(self, path: Path) -> bool:
        """Return True if *path* is a symbolic link."""
        ...

    def mkdir(self, path: Path) -> None:
        """Create *path* and any missing parents; existing ones are fine."""
        ...

    def write_text(self, path: Path, content: str) -> None:
        """Write *content* to *path*, truncating any existing file."""
        ...

    def read_text(self, path: Path) -> str:
        """Return the UTF-8 content of *path*."""
        ...

    def iterdir(self, path: Path) -> Iterator[Path]:
        """Yield the direct children of the directory *path*."""
        ...

    def unlink(self, path: Path) -> None:
        """Remove a file or symbolic link."""
        ...

    def rmdir(self, path: Path) -> None:
        """Remove an empty directory."""
        ...


@runtime_checkable
class Installer(Protocol):
    """Interface for the post-generation dependency installer."""

    def run(self, directory: Path) -> InstallOutcome:
        """Install dependencies inside *directory* and report the outcome."""
        ...
