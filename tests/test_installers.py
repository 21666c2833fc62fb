"""Tests for the pluggable installer system."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest import mock

import pytest

from saas_scaffold.installers import (
    MockInstaller,
    MockInstallerConfig,
    PackageManagerConfig,
    PackageManagerInstaller,
    create_installer,
    resolve_installer_name,
)
from saas_scaffold.models import PackageManager

_WHICH = "saas_scaffold.installers.package_manager.shutil.which"
_RUN = "saas_scaffold.installers.package_manager.subprocess.run"

# -- resolve_installer_name --------------------------------------------------


class TestResolveInstallerName:
    def test_default_is_npm(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SAAS_SCAFFOLD_INSTALLER", raising=False)
        assert resolve_installer_name() == "npm"

    def test_default_argument(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SAAS_SCAFFOLD_INSTALLER", raising=False)
        assert resolve_installer_name(default="yarn") == "yarn"

    def test_env_overrides_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SAAS_SCAFFOLD_INSTALLER", "mock")
        assert resolve_installer_name(default="pnpm") == "mock"

    def test_cli_overrides_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SAAS_SCAFFOLD_INSTALLER", "mock")
        assert resolve_installer_name("PNPM ") == "pnpm"

    def test_unknown_name(self) -> None:
        with pytest.raises(ValueError, match="Unknown installer 'bun'"):
            resolve_installer_name("bun")


class TestCreateInstaller:
    def test_mock(self) -> None:
        assert isinstance(create_installer("mock"), MockInstaller)

    @pytest.mark.parametrize("name", ["npm", "pnpm", "yarn"])
    def test_package_managers(self, name: str) -> None:
        installer = create_installer(name)
        assert isinstance(installer, PackageManagerInstaller)
        assert installer.command() == (name, "install")

    def test_unknown(self) -> None:
        with pytest.raises(ValueError):
            create_installer("bun")


# -- MockInstaller -----------------------------------------------------------


class TestMockInstaller:
    def test_records_calls(self, tmp_path: Path) -> None:
        installer = MockInstaller()
        outcome = installer.run(tmp_path)
        assert outcome.ok
        assert installer.calls == [tmp_path]

    def test_configured_failure(self, tmp_path: Path) -> None:
        installer = MockInstaller(config=MockInstallerConfig(ok=False, message="boom"))
        outcome = installer.run(tmp_path)
        assert not outcome.ok
        assert outcome.message == "boom"


# -- PackageManagerInstaller -------------------------------------------------


class TestPackageManagerInstaller:
    def test_executable_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SAAS_SCAFFOLD_PNPM_EXECUTABLE", "/opt/pnpm")
        installer = PackageManagerInstaller(PackageManagerConfig(manager=PackageManager.PNPM))
        assert installer.executable == "/opt/pnpm"

    def test_explicit_executable_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SAAS_SCAFFOLD_NPM_EXECUTABLE", "/env/npm")
        installer = PackageManagerInstaller(PackageManagerConfig(executable="/cfg/npm"))
        assert installer.executable == "/cfg/npm"

    def test_missing_executable(self, tmp_path: Path) -> None:
        with mock.patch(_WHICH, return_value=None), mock.patch(_RUN) as run:
            outcome = PackageManagerInstaller().run(tmp_path)
        run.assert_not_called()
        assert not outcome.ok
        assert "npm not found" in outcome.message

    def test_success_inherits_stdio(self, tmp_path: Path) -> None:
        completed = subprocess.CompletedProcess(args=["npm", "install"], returncode=0)
        with (
            mock.patch(_WHICH, return_value="/usr/bin/npm"),
            mock.patch(_RUN, return_value=completed) as run,
        ):
            outcome = PackageManagerInstaller().run(tmp_path)

        assert outcome.ok
        assert outcome.command == ("npm", "install")
        args, kwargs = run.call_args
        assert args[0] == ["/usr/bin/npm", "install"]
        assert kwargs["cwd"] == tmp_path
        assert "capture_output" not in kwargs
        assert "stdout" not in kwargs

    def test_non_zero_exit(self, tmp_path: Path) -> None:
        completed = subprocess.CompletedProcess(args=["npm", "install"], returncode=1)
        with (
            mock.patch(_WHICH, return_value="/usr/bin/npm"),
            mock.patch(_RUN, return_value=completed),
        ):
            outcome = PackageManagerInstaller().run(tmp_path)
        assert not outcome.ok
        assert "exit 1" in outcome.message

    def test_timeout(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SAAS_SCAFFOLD_INSTALL_TIMEOUT", "7")
        with (
            mock.patch(_WHICH, return_value="/usr/bin/npm"),
            mock.patch(_RUN, side_effect=subprocess.TimeoutExpired(cmd="npm", timeout=7)) as run,
        ):
            outcome = PackageManagerInstaller().run(tmp_path)
        assert run.call_args.kwargs["timeout"] == 7
        assert not outcome.ok
        assert "timed out after 7 seconds" in outcome.message

    def test_os_error(self, tmp_path: Path) -> None:
        with (
            mock.patch(_WHICH, return_value="/usr/bin/npm"),
            mock.patch(_RUN, side_effect=PermissionError("not executable")),
        ):
            outcome = PackageManagerInstaller().run(tmp_path)
        assert not outcome.ok
        assert "not executable" in outcome.message
