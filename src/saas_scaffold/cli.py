"""Command-line interface for saas-scaffold."""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path
from typing import Any

from saas_scaffold import __version__
from saas_scaffold.models import (
    AuthProvider,
    Configuration,
    DatabaseProvider,
    DeployTarget,
    PackageManager,
)

_EXIT_OK = 0
_EXIT_ERROR = 1
_EXIT_INSTALL_FAILED = 3
_EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="saas-scaffold",
        description="Generate a Next.js + Clerk + Supabase + Stripe starter deployed to Netlify.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging.",
    )

    subparsers = parser.add_subparsers(dest="command")

    apply_parser = subparsers.add_parser("apply", help="Generate a new project directory.")
    apply_parser.add_argument(
        "--name",
        type=str,
        default=None,
        help="Project name. Omit to answer interactive prompts instead.",
    )
    apply_parser.add_argument(
        "--dir",
        type=Path,
        default=None,
        help="Directory to create (default: ./<slugified name>).",
    )
    apply_parser.add_argument(
        "--repo",
        type=str,
        default=None,
        help="Git repository URL recorded in package.json and the README.",
    )
    stripe_group = apply_parser.add_mutually_exclusive_group()
    stripe_group.add_argument(
        "--stripe",
        dest="stripe",
        action="store_true",
        default=None,
        help="Include Stripe billing endpoints (default).",
    )
    stripe_group.add_argument(
        "--no-stripe",
        dest="stripe",
        action="store_false",
        help="Leave out Stripe billing endpoints and keys.",
    )
    apply_parser.add_argument(
        "--auth",
        type=str,
        default=None,
        choices=[member.value for member in AuthProvider],
        help="Auth provider (default: clerk).",
    )
    apply_parser.add_argument(
        "--db",
        type=str,
        default=None,
        choices=[member.value for member in DatabaseProvider],
        help="Database (default: supabase).",
    )
    apply_parser.add_argument(
        "--deploy",
        type=str,
        default=None,
        choices=[member.value for member in DeployTarget],
        help="Deploy target (default: netlify).",
    )
    install_group = apply_parser.add_mutually_exclusive_group()
    install_group.add_argument(
        "--install",
        dest="install",
        action="store_true",
        default=None,
        help="Install dependencies after generating (default).",
    )
    install_group.add_argument(
        "--no-install",
        dest="install",
        action="store_false",
        help="Skip the dependency install step.",
    )
    apply_parser.add_argument(
        "--package-manager",
        type=str,
        default=None,
        choices=[member.value for member in PackageManager],
        help="Package manager used for install and in the next-steps hints (default: npm).",
    )
    apply_parser.add_argument(
        "--installer",
        type=str,
        default=None,
        choices=["npm", "pnpm", "yarn", "mock"],
        help=(
            "Installer implementation. Overrides the SAAS_SCAFFOLD_INSTALLER env var. "
            "Default: the package manager."
        ),
    )
    apply_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file with default values; command-line flags take precedence.",
    )
    apply_parser.add_argument(
        "--strict-install",
        action="store_true",
        default=False,
        help="Exit with status 3 when the install step fails.",
    )

    destroy_parser = subparsers.add_parser("destroy", help="Remove a generated project.")
    destroy_parser.add_argument(
        "--dir",
        type=Path,
        default=None,
        help="Directory to remove.",
    )

    plan_parser = subparsers.add_parser("plan", help="List the files apply would write.")
    plan_parser.add_argument(
        "--name",
        type=str,
        default=None,
        help="Project name used to derive the target directory.",
    )
    plan_parser.add_argument(
        "--no-stripe",
        dest="stripe",
        action="store_false",
        default=True,
        help="Plan without Stripe billing endpoints.",
    )

    doctor_parser = subparsers.add_parser("doctor", help="Check environment health.")
    doctor_parser.add_argument(
        "--package-manager",
        type=str,
        default=PackageManager.NPM.value,
        choices=[member.value for member in PackageManager],
        help="Package manager that must be available (default: npm).",
    )

    return parser


def _apply_command(args: argparse.Namespace, cwd: Path) -> int:
    """Execute the 'apply' subcommand."""
    from saas_scaffold.config import ConfigError, load_config_file
    from saas_scaffold.installers import create_installer, resolve_installer_name
    from saas_scaffold.scaffold import ScaffoldError, Scaffolder

    try:
        values = _merge_values(args, load_config_file(args.config) if args.config else {})
        config = _resolve_configuration(values, cwd)
    except (FileNotFoundError, ConfigError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return _EXIT_ERROR
    except EOFError:
        print(
            "Error: no project name given and no interactive input available. Pass --name.",
            file=sys.stderr,
        )
        return _EXIT_ERROR

    installer = None
    if config.auto_install:
        try:
            name = resolve_installer_name(args.installer, default=config.package_manager.value)
            installer = create_installer(name)
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return _EXIT_ERROR

    try:
        result = Scaffolder(installer=installer).scaffold(config)
    except ScaffoldError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return _EXIT_ERROR

    if result.install is not None and not result.install.ok and args.strict_install:
        return _EXIT_INSTALL_FAILED
    return _EXIT_OK


def _merge_values(args: argparse.Namespace, file_values: dict[str, Any]) -> dict[str, Any]:
    values = dict(file_values)
    flags = {
        "name": args.name,
        "dir": args.dir,
        "repo": args.repo,
        "stripe": args.stripe,
        "auth": args.auth,
        "db": args.db,
        "deploy": args.deploy,
        "install": args.install,
        "package_manager": args.package_manager,
    }
    values.update({key: value for key, value in flags.items() if value is not None})
    return values


def _resolve_configuration(values: dict[str, Any], cwd: Path) -> Configuration:
    from saas_scaffold.config import build_configuration, collect_interactive

    if not values.get("name"):
        return collect_interactive(cwd=cwd, ask=_prompt, defaults=values)
    return build_configuration(
        name=values["name"],
        cwd=cwd,
        directory=values.get("dir"),
        repo=values.get("repo"),
        stripe=values.get("stripe", True),
        auth=values.get("auth", AuthProvider.CLERK),
        db=values.get("db", DatabaseProvider.SUPABASE),
        deploy=values.get("deploy", DeployTarget.NETLIFY),
        auto_install=values.get("install", True),
        package_manager=values.get("package_manager", PackageManager.NPM),
    )


def _prompt(message: str) -> str:
    return input(message)


def _destroy_command(directory: Path | None, cwd: Path) -> int:
    from saas_scaffold.destroy import destroy
    from saas_scaffold.models import DestroyStatus

    if directory is None:
        print("Error: specify --dir", file=sys.stderr)
        return _EXIT_ERROR

    target = directory if directory.is_absolute() else cwd / directory
    result = destroy(target)
    if result.status is DestroyStatus.ERROR:
        print(f"Error: {result.message}", file=sys.stderr)
        return _EXIT_ERROR
    print(result.message)
    return _EXIT_OK


def _plan_command(name: str | None, stripe: bool, cwd: Path) -> int:
    from saas_scaffold.config import DEFAULT_PROJECT_NAME, ConfigError, build_configuration
    from saas_scaffold.tree import DIRECTORIES, select_entries

    try:
        config = build_configuration(name=name or DEFAULT_PROJECT_NAME, cwd=cwd, stripe=stripe)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return _EXIT_ERROR

    print(f"Target: {config.directory}")
    print("Files:")
    for index, entry in enumerate(select_entries(config), start=1):
        print(f"{index}. {entry.path} ({entry.kind.value})")
    for directory in DIRECTORIES:
        print(f"-  {directory}/")
    return _EXIT_OK


def _doctor_command(package_manager: str) -> int:
    failures = 0
    checks: list[tuple[str, bool, str]] = []

    py_ok = sys.version_info >= (3, 11)
    checks.append(("python", py_ok, _format_python_version()))

    for manager in PackageManager:
        found = shutil.which(manager.value)
        required = manager.value == package_manager
        if found:
            checks.append((manager.value, True, f"found {found}"))
        elif required:
            checks.append((manager.value, False, f"{manager.value} not found on PATH"))
        else:
            checks.append((manager.value, True, "not installed (optional)"))

    for name, ok, detail in checks:
        status = "OK" if ok else "FAIL"
        print(f"{name}: {status} - {detail}")
        if not ok:
            failures += 1

    return _EXIT_ERROR if failures else _EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    cwd = Path.cwd()

    try:
        if args.command == "apply":
            return _apply_command(args, cwd)

        if args.command == "destroy":
            destroy_dir: Path | None = args.dir
            return _destroy_command(destroy_dir, cwd)

        if args.command == "plan":
            plan_name: str | None = args.name
            plan_stripe: bool = args.stripe
            return _plan_command(plan_name, plan_stripe, cwd)

        if args.command == "doctor":
            doctor_manager: str = args.package_manager
            return _doctor_command(doctor_manager)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return _EXIT_INTERRUPTED

    # No subcommand, print help by default.
    parser.print_help()
    return _EXIT_OK


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _format_python_version() -> str:
    return f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"


if __name__ == "__main__":
    sys.exit(main())
