"""Deterministic mock installer for testing."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from saas_scaffold.models import InstallOutcome

__all__ = ["MockInstaller", "MockInstallerConfig"]


@dataclass(frozen=True)
class MockInstallerConfig:
    """Configuration for deterministic mock outcomes."""

    ok: bool = True
    message: str | None = None


class MockInstaller:
    """Installer that records the directories it was asked to install into."""

    def __init__(self, *, config: MockInstallerConfig | None = None) -> None:
        self._config = config or MockInstallerConfig()
        self.calls: list[Path] = []

    def run(self, directory: Path) -> InstallOutcome:
        self.calls.append(directory)
        default = "mock install finished" if self._config.ok else "mock install failed"
        return InstallOutcome(
            ok=self._config.ok,
            message=self._config.message or default,
            command=("mock", "install"),
        )
