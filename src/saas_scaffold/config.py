"""Configuration collection for ``apply``.

A :class:`~saas_scaffold.models.Configuration` can come from three places,
applied in increasing precedence:

1. an optional YAML file (``--config``),
2. command-line flags,
3. interactive prompts, used only when no project name was supplied.

The working directory is passed in explicitly; nothing here reads it
implicitly.
"""

from __future__ import annotations

import enum
import unicodedata
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any, TypeVar

import yaml

from saas_scaffold.models import (
    AuthProvider,
    Configuration,
    DatabaseProvider,
    DeployTarget,
    PackageManager,
)
from saas_scaffold.render import slugify

__all__ = [
    "CONFIG_KEYS",
    "DEFAULT_PROJECT_NAME",
    "ConfigError",
    "build_configuration",
    "collect_interactive",
    "load_config_file",
]

DEFAULT_PROJECT_NAME = "saas-experiment"

CONFIG_KEYS = frozenset(
    ("name", "dir", "repo", "stripe", "auth", "db", "deploy", "install", "package_manager"),
)
_BOOL_KEYS = frozenset(("stripe", "install"))
_YAML_EXTENSIONS = frozenset((".yaml", ".yml"))

_E = TypeVar("_E", bound=enum.Enum)


class ConfigError(ValueError):
    """Raised when configuration values fail validation."""

    def __init__(self, errors: Iterable[str], source: Path | None = None) -> None:
        self.source = source
        self.errors = [error for error in errors if error]
        details = "\n".join(f"- {error}" for error in self.errors)
        message = f"Invalid configuration: {source}" if source else "Invalid configuration"
        if details:
            message = f"{message}\n{details}"
        super().__init__(message)


# ---------------------------------------------------------------------------
# Building
# ---------------------------------------------------------------------------


def build_configuration(
    *,
    name: str,
    cwd: Path,
    directory: str | Path | None = None,
    repo: str | None = None,
    stripe: bool = True,
    auth: str | AuthProvider = AuthProvider.CLERK,
    db: str | DatabaseProvider = DatabaseProvider.SUPABASE,
    deploy: str | DeployTarget = DeployTarget.NETLIFY,
    auto_install: bool = True,
    package_manager: str | PackageManager = PackageManager.NPM,
) -> Configuration:
    """Validate raw values and return a Configuration.

    When *directory* is empty the target becomes ``cwd / slugify(name)``.
    Relative directories are resolved against *cwd*.

    Raises:
        ConfigError: If any value is invalid.  All problems are reported at
            once.
    """
    errors: list[str] = []

    clean_name = (name or "").strip()
    if not clean_name:
        errors.append("name must be a non-empty string")
    elif not slugify(clean_name):
        errors.append(f"name {clean_name!r} must contain at least one letter or digit")
    errors.extend(_text_errors("name", clean_name))

    clean_repo = (repo or "").strip()
    errors.extend(_text_errors("repo", clean_repo))

    auth_value = _coerce_enum(AuthProvider, auth, "auth", errors)
    db_value = _coerce_enum(DatabaseProvider, db, "db", errors)
    deploy_value = _coerce_enum(DeployTarget, deploy, "deploy", errors)
    manager_value = _coerce_enum(PackageManager, package_manager, "package_manager", errors)

    if errors:
        raise ConfigError(errors)

    if directory is None or not str(directory).strip():
        target = cwd / slugify(clean_name)
    else:
        target = Path(str(directory).strip()).expanduser()
        if not target.is_absolute():
            target = cwd / target

    return Configuration(
        name=clean_name,
        directory=target,
        repo=clean_repo,
        stripe=bool(stripe),
        auth=auth_value,
        db=db_value,
        deploy=deploy_value,
        auto_install=bool(auto_install),
        package_manager=manager_value,
    )


def _coerce_enum(enum_cls: type[_E], value: Any, key: str, errors: list[str]) -> _E:
    """Return the member for *value*, recording an error when there is none.

    On error the first member is returned as a placeholder; callers raise the
    collected errors before using it.
    """
    if isinstance(value, enum_cls):
        return value
    raw = str(value).strip().lower() if value is not None else ""
    try:
        return enum_cls(raw)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        errors.append(f"{key} must be one of: {allowed} (got {value!r})")
        return next(iter(enum_cls))


def _text_errors(key: str, value: str) -> list[str]:
    # Values are interpolated into UTF-8 files, one setting per line.
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return [f"{key} must be valid UTF-8 text"]
    if any(unicodedata.category(char) == "Cc" for char in value):
        return [f"{key} must not contain control characters"]
    return []


# ---------------------------------------------------------------------------
# YAML file
# ---------------------------------------------------------------------------


def load_config_file(path: Path) -> dict[str, Any]:
    """Load and validate a YAML configuration file.

    Returns a mapping restricted to :data:`CONFIG_KEYS`.  Enum values are
    validated later by :func:`build_configuration`.
    """
    resolved = path.resolve()
    if not resolved.is_file():
        msg = f"Config file not found: {resolved}"
        raise FileNotFoundError(msg)

    suffix = resolved.suffix.lower()
    if suffix not in _YAML_EXTENSIONS:
        raise ConfigError(
            [f"Unsupported config file extension '{suffix}'. Use .yaml or .yml."],
            resolved,
        )

    try:
        data = yaml.safe_load(resolved.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError([f"YAML parse error: {str(exc).strip()}"], resolved) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(["Top-level YAML document must be a mapping."], resolved)

    errors: list[str] = []
    extra = sorted(str(key) for key in data if key not in CONFIG_KEYS)
    if extra:
        errors.append(
            f"Unexpected keys: {', '.join(extra)}. Allowed keys: {', '.join(sorted(CONFIG_KEYS))}."
        )
    for key in sorted(_BOOL_KEYS & data.keys()):
        if not isinstance(data[key], bool):
            errors.append(f"{key} must be true or false")
    for key in sorted((CONFIG_KEYS - _BOOL_KEYS) & data.keys()):
        if data[key] is not None and not isinstance(data[key], str):
            errors.append(f"{key} must be a string")

    if errors:
        raise ConfigError(errors, resolved)
    return {key: value for key, value in data.items() if value is not None}


# ---------------------------------------------------------------------------
# Interactive prompts
# ---------------------------------------------------------------------------


def collect_interactive(
    *,
    cwd: Path,
    ask: Callable[[str], str] = input,
    defaults: Mapping[str, Any] | None = None,
) -> Configuration:
    """Prompt for every configuration value and return a Configuration.

    *ask* receives the full prompt text and returns the raw answer; blank
    answers take the default shown in brackets.  Invalid answers to yes/no
    and choice questions are asked again.
    """
    defaults = defaults or {}
    name = ""
    while not slugify(name):
        name = _ask_text(ask, "Project name", str(defaults.get("name") or DEFAULT_PROJECT_NAME))
    directory = _ask_text(
        ask,
        f"Directory to create (leave blank for ./{slugify(name)})",
        str(defaults.get("dir") or ""),
    )
    repo = _ask_text(ask, "Git repo URL (optional)", str(defaults.get("repo") or ""))
    stripe = _ask_confirm(
        ask, "Include Stripe billing (subscriptions)?", bool(defaults.get("stripe", True))
    )
    auth = _ask_choice(ask, "Auth provider", [member.value for member in AuthProvider])
    db = _ask_choice(ask, "Database", [member.value for member in DatabaseProvider])
    deploy = _ask_choice(ask, "Deploy target", [member.value for member in DeployTarget])
    manager = str(defaults.get("package_manager") or PackageManager.NPM.value)
    auto_install = _ask_confirm(
        ask,
        f"Run {manager} install automatically after scaffold?",
        bool(defaults.get("install", True)),
    )
    return build_configuration(
        name=name,
        cwd=cwd,
        directory=directory or None,
        repo=repo,
        stripe=stripe,
        auth=auth,
        db=db,
        deploy=deploy,
        auto_install=auto_install,
        package_manager=manager,
    )


def _ask_text(ask: Callable[[str], str], message: str, default: str) -> str:
    suffix = f" [{default}]" if default else ""
    answer = ask(f"{message}{suffix}: ").strip()
    return answer or default


def _ask_confirm(ask: Callable[[str], str], message: str, default: bool) -> bool:
    hint = "Y/n" if default else "y/N"
    while True:
        answer = ask(f"{message} [{hint}]: ").strip().lower()
        if not answer:
            return default
        if answer in {"y", "yes", "true", "1"}:
            return True
        if answer in {"n", "no", "false", "0"}:
            return False


def _ask_choice(ask: Callable[[str], str], message: str, choices: list[str]) -> str:
    default = choices[0]
    while True:
        answer = ask(f"{message} ({'/'.join(choices)}) [{default}]: ").strip().lower()
        if not answer:
            return default
        if answer in choices:
            return answer
