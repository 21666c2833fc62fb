"""Scaffold orchestrator -- applies the project tree to a new directory."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from saas_scaffold.destroy import destroy
from saas_scaffold.filesystem import LocalFileSystem, write_file
from saas_scaffold.models import (
    Configuration,
    DestroyStatus,
    EntryKind,
    InstallOutcome,
    ScaffoldResult,
    TemplateEntry,
)
from saas_scaffold.protocols import FileSystem, Installer
from saas_scaffold.render import interpolate
from saas_scaffold.tree import (
    DEV_COMMANDS,
    DIRECTORIES,
    build_context,
    is_safe_relative_path,
    select_entries,
)

__all__ = [
    "ScaffoldError",
    "Scaffolder",
    "TargetExistsError",
    "UnsafePathError",
    "completion_summary",
    "scaffold",
]

log = logging.getLogger(__name__)


class ScaffoldError(RuntimeError):
    """Raised when a project tree cannot be generated."""


class TargetExistsError(ScaffoldError, FileExistsError):
    """Raised when the target directory already exists."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Directory already exists: {path}")


class UnsafePathError(ScaffoldError, ValueError):
    """Raised when a tree entry would resolve outside the target directory."""


class Scaffolder:
    """Drives a project tree definition through the path writer.

    The filesystem and installer are injected so the whole run can happen
    against an in-memory filesystem with a recording installer.
    """

    def __init__(
        self,
        *,
        fs: FileSystem | None = None,
        installer: Installer | None = None,
        echo: Callable[[str], None] = print,
        entries: Callable[[Configuration], Sequence[TemplateEntry]] = select_entries,
        directories: Sequence[str] = DIRECTORIES,
    ) -> None:
        self._fs = fs or LocalFileSystem()
        self._installer = installer
        self._echo = echo
        self._entries = entries
        self._directories = directories

    def scaffold(self, config: Configuration) -> ScaffoldResult:
        """Generate the project described by *config* in ``config.directory``.

        Raises:
            TargetExistsError: If the target already exists.  Nothing is
                written in that case.
            ScaffoldError: If any write fails, including content that cannot
                be encoded.  The partially written tree is removed before the
                error propagates.
        """
        target = config.directory
        if self._fs.exists(target):
            raise TargetExistsError(target)

        entries = list(self._entries(config))
        for entry in entries:
            _check_entry_path(entry.path)
        for directory in self._directories:
            _check_entry_path(directory)

        log.info("Generating %d files in %s", len(entries), target)
        try:
            files, directories = self._write_tree(target, config, entries)
        except (OSError, UnicodeError) as exc:
            self._rollback(target)
            msg = f"Failed to write project tree at {target}: {exc}"
            raise ScaffoldError(msg) from exc

        self._echo(completion_summary(config))

        install: InstallOutcome | None = None
        if config.auto_install and self._installer is not None:
            install = self._install(self._installer, target)

        return ScaffoldResult(
            target=target,
            files=files,
            directories=directories,
            install=install,
        )

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _write_tree(
        self,
        target: Path,
        config: Configuration,
        entries: list[TemplateEntry],
    ) -> tuple[list[Path], list[Path]]:
        self._fs.mkdir(target)
        context = build_context(config)

        files: list[Path] = []
        for entry in entries:
            content = render_entry(entry, context)
            files.append(write_file(self._fs, target / entry.path, content))

        directories: list[Path] = []
        for directory in self._directories:
            path = target / directory
            self._fs.mkdir(path)
            directories.append(path)

        self._echo(f"Scaffold files created at {target}")
        return files, directories

    def _install(self, installer: Installer, target: Path) -> InstallOutcome:
        self._echo(f"Installing dependencies in {target}")
        outcome = installer.run(target)
        if outcome.ok:
            log.info("Install finished: %s", outcome.message)
            self._echo(outcome.message)
        else:
            log.warning("Install failed: %s", outcome.message)
            self._echo(f"Warning: {outcome.message}. The project was generated; install manually.")
        return outcome

    def _rollback(self, target: Path) -> None:
        result = destroy(target, self._fs)
        if result.status is DestroyStatus.ERROR:
            log.error("Rollback incomplete: %s", result.message)
        else:
            log.info("Rolled back partial tree at %s", target)


def scaffold(
    config: Configuration,
    *,
    fs: FileSystem | None = None,
    installer: Installer | None = None,
    echo: Callable[[str], None] = print,
) -> ScaffoldResult:
    """Generate the project described by *config* with default collaborators."""
    return Scaffolder(fs=fs, installer=installer, echo=echo).scaffold(config)


def render_entry(entry: TemplateEntry, context: dict[str, str]) -> str:
    """Return the final file content for *entry*."""
    if entry.kind is EntryKind.STATIC:
        return entry.content
    return interpolate(entry.content, context)


def completion_summary(config: Configuration) -> str:
    """Return the next-steps message printed after a successful scaffold."""
    run_dev = DEV_COMMANDS[config.package_manager]
    install_hint = "" if config.auto_install else f"{config.package_manager.value} install && "
    lines = [
        f"Scaffold complete: {config.directory}",
        "Next steps:",
        "1) copy .env.staging -> .env.local and fill secrets",
        f"2) cd {config.directory} && {install_hint}{run_dev}",
        "3) create a Netlify site and add NETLIFY_SITE_ID & NETLIFY_AUTH_TOKEN "
        "to GitHub Secrets for CI deploy.",
    ]
    return "\n".join(lines)


def _check_entry_path(path: str) -> None:
    if not is_safe_relative_path(path):
        msg = f"Refusing to write outside the target directory: {path!r}"
        raise UnsafePathError(msg)
