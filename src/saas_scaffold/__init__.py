"""Generate and remove Next.js SaaS starter projects."""

from __future__ import annotations

__version__ = "0.1.0"
