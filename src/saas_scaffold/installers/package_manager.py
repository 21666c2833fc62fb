"""Installer that shells out to a Node package manager."""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from saas_scaffold.models import InstallOutcome, PackageManager
from saas_scaffold.protocols import Installer

__all__ = ["PackageManagerConfig", "PackageManagerInstaller"]

log = logging.getLogger(__name__)

_ENV_TIMEOUT = "SAAS_SCAFFOLD_INSTALL_TIMEOUT"
_ENV_EXECUTABLE = "SAAS_SCAFFOLD_{name}_EXECUTABLE"


@dataclass(frozen=True)
class PackageManagerConfig:
    """Configuration options for the package-manager installer."""

    manager: PackageManager = PackageManager.NPM
    executable: str | None = None
    timeout: int | None = None


class PackageManagerInstaller(Installer):
    """Runs ``<manager> install`` in the generated project.

    The child process inherits this process's stdin, stdout and stderr so the
    operator sees the package manager's own progress output.
    """

    def __init__(self, config: PackageManagerConfig | None = None) -> None:
        resolved = config or PackageManagerConfig()
        self._manager = resolved.manager
        env_executable = _read_env_value(
            _ENV_EXECUTABLE.format(name=resolved.manager.name),
        )
        self._executable = resolved.executable or env_executable or resolved.manager.value
        self._timeout = resolved.timeout or _env_int(_ENV_TIMEOUT)

    @property
    def executable(self) -> str:
        return self._executable

    def command(self) -> tuple[str, ...]:
        return (self._executable, "install")

    def run(self, directory: Path) -> InstallOutcome:
        cmd = self.command()
        executable = shutil.which(self._executable)
        if executable is None:
            return InstallOutcome(
                ok=False,
                message=(
                    f"{self._manager.value} not found: '{self._executable}'. "
                    f"Install it or set {_ENV_EXECUTABLE.format(name=self._manager.name)}."
                ),
                command=cmd,
            )

        log.info("Running %s in %s", " ".join(cmd), directory)
        try:
            proc = subprocess.run(
                [executable, *cmd[1:]],
                cwd=directory,
                timeout=self._timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            return InstallOutcome(
                ok=False,
                message=f"{' '.join(cmd)} timed out after {self._timeout} seconds.",
                command=cmd,
            )
        except OSError as exc:
            return InstallOutcome(ok=False, message=f"{' '.join(cmd)} failed: {exc}", command=cmd)

        if proc.returncode != 0:
            return InstallOutcome(
                ok=False,
                message=f"{' '.join(cmd)} failed (exit {proc.returncode})",
                command=cmd,
            )
        return InstallOutcome(ok=True, message=f"{' '.join(cmd)} finished", command=cmd)


def _read_env_value(key: str) -> str | None:
    import os

    value = os.environ.get(key)
    if value is None:
        return None
    return value.strip() or None


def _env_int(key: str) -> int | None:
    raw = _read_env_value(key)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None
