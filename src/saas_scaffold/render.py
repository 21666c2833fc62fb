"""Flat ``{{name}}`` placeholder substitution.

There is no expression language here: a placeholder is an identifier made of
letters, digits and underscores between double braces, with no whitespace.
Anything else (``{{ secrets.TOKEN }}`` in a CI workflow, for example) is left
alone.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

__all__ = ["PLACEHOLDER_PATTERN", "interpolate", "placeholders", "slugify"]

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")

_SLUG_RUN = re.compile(r"[^a-z0-9]+")


def interpolate(template: str, variables: Mapping[str, object | None]) -> str:
    """Replace every ``{{identifier}}`` in *template* with its value.

    Identifiers missing from *variables*, or mapped to ``None``, are replaced
    with the empty string.  Substituted values are never scanned again.
    """

    def _lookup(match: re.Match[str]) -> str:
        value = variables.get(match.group(1))
        if value is None:
            return ""
        return str(value)

    return PLACEHOLDER_PATTERN.sub(_lookup, template)


def placeholders(template: str) -> list[str]:
    """Return the identifiers referenced by *template*, first occurrence first."""
    seen: dict[str, None] = {}
    for match in PLACEHOLDER_PATTERN.finditer(template):
        seen.setdefault(match.group(1), None)
    return list(seen)


def slugify(value: str) -> str:
    """Return a lowercase, hyphen-separated slug for *value*.

    Runs of characters outside ``[a-z0-9]`` collapse to a single ``-`` and
    leading/trailing hyphens are trimmed, so ``"My App!"`` becomes
    ``"my-app"``.
    """
    return _SLUG_RUN.sub("-", str(value).lower()).strip("-")
