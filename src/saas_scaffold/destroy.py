"""Removal of a previously generated project tree.

The walk is bottom-up: every child of a directory is removed before the
directory itself.  Symbolic links are unlinked and never followed, so nothing
outside the tree can be reached through them.
"""

from __future__ import annotations

import logging
from pathlib import Path

from saas_scaffold.filesystem import LocalFileSystem
from saas_scaffold.models import DestroyResult, DestroyStatus
from saas_scaffold.protocols import FileSystem

__all__ = ["destroy"]

log = logging.getLogger(__name__)


def destroy(directory: Path, fs: FileSystem | None = None) -> DestroyResult:
    """Recursively delete *directory*.

    Returns a :class:`DestroyResult` whose status is ``ABSENT`` when there
    was nothing to remove, ``REMOVED`` on success and ``ERROR`` when the path
    is not a directory or a removal failed part-way.  Never raises for
    filesystem errors.
    """
    fs = fs or LocalFileSystem()

    if not fs.exists(directory):
        log.info("Nothing to remove at %s", directory)
        return DestroyResult(DestroyStatus.ABSENT, directory, f"Directory not found: {directory}")

    if fs.is_symlink(directory):
        try:
            fs.unlink(directory)
        except OSError as exc:
            return _error(directory, exc, 0)
        log.info("Removed symlink %s (target left untouched)", directory)
        return DestroyResult(DestroyStatus.REMOVED, directory, f"Removed link {directory}", 1)

    if not fs.is_dir(directory):
        return DestroyResult(
            DestroyStatus.ERROR,
            directory,
            f"Not a directory: {directory}",
        )

    counter = [0]
    try:
        _remove_tree(fs, directory, counter)
    except OSError as exc:
        return _error(directory, exc, counter[0])

    log.info("Removed %s (%d entries)", directory, counter[0])
    return DestroyResult(DestroyStatus.REMOVED, directory, f"Removed {directory}", counter[0])


def _remove_tree(fs: FileSystem, directory: Path, counter: list[int]) -> None:
    for child in list(fs.iterdir(directory)):
        if fs.is_symlink(child) or not fs.is_dir(child):
            fs.unlink(child)
        else:
            _remove_tree(fs, child, counter)
            continue
        log.debug("Removed %s", child)
        counter[0] += 1
    fs.rmdir(directory)
    log.debug("Removed %s/", directory)
    counter[0] += 1


def _error(directory: Path, exc: OSError, removed: int) -> DestroyResult:
    log.error("Failed to remove %s: %s", directory, exc)
    return DestroyResult(
        DestroyStatus.ERROR,
        directory,
        f"Failed to remove {directory}: {exc}",
        removed,
    )
