"""Core data models for saas-scaffold.

This module defines the typed dataclasses and enumerations shared by the
generator and its collaborators:

- **Configuration-related**: AuthProvider, DatabaseProvider, DeployTarget,
  PackageManager, Configuration
- **Tree-related**: EntryKind, TemplateEntry
- **Outcome-related**: InstallOutcome, DestroyStatus, DestroyResult,
  ScaffoldResult
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

from saas_scaffold.render import slugify

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class AuthProvider(enum.Enum):
    """Authentication provider wired into the generated project."""

    CLERK = "clerk"


class DatabaseProvider(enum.Enum):
    """Database provider wired into the generated project."""

    SUPABASE = "supabase"


class DeployTarget(enum.Enum):
    """Hosting platform the generated CI workflow deploys to."""

    NETLIFY = "netlify"


class PackageManager(enum.Enum):
    """Package manager used for the optional install step."""

    NPM = "npm"
    PNPM = "pnpm"
    YARN = "yarn"


class EntryKind(enum.Enum):
    """How the content of a template entry is produced."""

    STATIC = "static"
    TEMPLATE = "template"


class DestroyStatus(enum.Enum):
    """Outcome of removing a generated tree."""

    REMOVED = "removed"
    ABSENT = "absent"
    ERROR = "error"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Configuration:
    """Everything one ``apply`` invocation needs to know.

    Built once by the configuration collector and read-only afterwards.
    """

    name: str
    directory: Path
    repo: str = ""
    stripe: bool = True
    auth: AuthProvider = AuthProvider.CLERK
    db: DatabaseProvider = DatabaseProvider.SUPABASE
    deploy: DeployTarget = DeployTarget.NETLIFY
    auto_install: bool = True
    package_manager: PackageManager = PackageManager.NPM

    @property
    def slug(self) -> str:
        """Return the slugified project name."""
        return slugify(self.name)


# ---------------------------------------------------------------------------
# Tree-related models
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateEntry:
    """One file of the generated project.

    ``path`` is relative to the target directory and always uses forward
    slashes.  ``content`` is written verbatim for ``STATIC`` entries and run
    through the interpolator for ``TEMPLATE`` entries.
    """

    path: str
    content: str
    kind: EntryKind = EntryKind.TEMPLATE
    requires_stripe: bool = False


# ---------------------------------------------------------------------------
# Outcome-related models
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class InstallOutcome:
    """Result of running the dependency installer in a generated project."""

    ok: bool
    message: str
    command: tuple[str, ...] = ()


@dataclass(frozen=True)
class DestroyResult:
    """Result of removing a directory tree."""

    status: DestroyStatus
    path: Path
    message: str
    removed: int = 0

    @property
    def ok(self) -> bool:
        return self.status is not DestroyStatus.ERROR


@dataclass(frozen=True)
class ScaffoldResult:
    """Files and directories written by one scaffold run."""

    target: Path
    files: list[Path] = field(default_factory=list)
    directories: list[Path] = field(default_factory=list)
    install: InstallOutcome | None = None


# ---------------------------------------------------------------------------
# Exports
# ---------------------------------------------------------------------------

__all__ = [
    "AuthProvider",
    "Configuration",
    "DatabaseProvider",
    "DeployTarget",
    "DestroyResult",
    "DestroyStatus",
    "EntryKind",
    "InstallOutcome",
    "PackageManager",
    "ScaffoldResult",
    "TemplateEntry",
]
