"""Installer implementations and selection helpers."""

from __future__ import annotations

from saas_scaffold.installers.mock import MockInstaller, MockInstallerConfig
from saas_scaffold.installers.package_manager import (
    PackageManagerConfig,
    PackageManagerInstaller,
)
from saas_scaffold.models import PackageManager

__all__ = [
    "MockInstaller",
    "MockInstallerConfig",
    "PackageManagerConfig",
    "PackageManagerInstaller",
    "create_installer",
    "resolve_installer_name",
]

_INSTALLER_NAMES = ("npm", "pnpm", "yarn", "mock")

_ENV_VAR = "SAAS_SCAFFOLD_INSTALLER"
_DEFAULT_INSTALLER = "npm"


def resolve_installer_name(
    cli_value: str | None = None,
    default: str = _DEFAULT_INSTALLER,
) -> str:
    """Return the effective installer name after applying precedence rules.

    The command-line value wins, then the ``SAAS_SCAFFOLD_INSTALLER``
    environment variable, then *default* (normally the configured package
    manager).
    """
    import os

    name = cli_value or os.environ.get(_ENV_VAR) or default
    name = name.strip().lower()
    if name not in _INSTALLER_NAMES:
        msg = f"Unknown installer '{name}'. Available installers: {', '.join(_INSTALLER_NAMES)}"
        raise ValueError(msg)
    return name


def create_installer(
    name: str,
    *,
    executable: str | None = None,
    timeout: int | None = None,
    mock_config: MockInstallerConfig | None = None,
) -> MockInstaller | PackageManagerInstaller:
    """Instantiate an installer by its registered name."""
    if name == "mock":
        return MockInstaller(config=mock_config)
    if name in ("npm", "pnpm", "yarn"):
        config = PackageManagerConfig(
            manager=PackageManager(name),
            executable=executable,
            timeout=timeout,
        )
        return PackageManagerInstaller(config=config)
    msg = f"Unknown installer: {name}"
    raise ValueError(msg)
