"""Declarative catalog of the generated project.

``PROJECT_TREE`` lists every file ``apply`` writes, in the order it writes
them.  The orchestrator walks this table; it knows nothing about what the
files contain.
"""

from __future__ import annotations

import json
from pathlib import PurePosixPath

from saas_scaffold import payloads
from saas_scaffold.models import Configuration, EntryKind, PackageManager, TemplateEntry
from saas_scaffold.render import interpolate

__all__ = [
    "DEV_COMMANDS",
    "DIRECTORIES",
    "PROJECT_TREE",
    "SITE_URLS",
    "build_context",
    "is_safe_relative_path",
    "select_entries",
]

_STATIC = EntryKind.STATIC

PROJECT_TREE: tuple[TemplateEntry, ...] = (
    TemplateEntry("package.json", payloads.PACKAGE_JSON),
    TemplateEntry("README.md", payloads.README),
    TemplateEntry("netlify.toml", payloads.NETLIFY_TOML, _STATIC),
    TemplateEntry(".gitignore", payloads.GITIGNORE, _STATIC),
    TemplateEntry(".env.staging", payloads.ENV_STAGING),
    TemplateEntry(".env.production", payloads.ENV_PRODUCTION),
    TemplateEntry(".env.local", payloads.ENV_LOCAL),
    TemplateEntry("supabase/init.sql", payloads.SUPABASE_INIT_SQL, _STATIC),
    TemplateEntry("lib/supabaseClient.ts", payloads.SUPABASE_CLIENT, _STATIC),
    TemplateEntry("pages/api/signups/add.ts", payloads.API_SIGNUPS_ADD, _STATIC),
    TemplateEntry("next.config.js", payloads.NEXT_CONFIG, _STATIC),
    TemplateEntry("pages/_app.tsx", payloads.APP, _STATIC),
    TemplateEntry("styles/globals.css", payloads.GLOBALS_CSS, _STATIC),
    TemplateEntry("pages/index.tsx", payloads.INDEX_PAGE, _STATIC),
    TemplateEntry("pages/sign-in.tsx", payloads.SIGN_IN_PAGE, _STATIC),
    TemplateEntry("pages/sign-up.tsx", payloads.SIGN_UP_PAGE, _STATIC),
    TemplateEntry("pages/dashboard.tsx", payloads.DASHBOARD_PAGE, _STATIC),
    TemplateEntry("pages/api/events/track.ts", payloads.API_EVENTS_TRACK, _STATIC),
    TemplateEntry(
        "pages/api/stripe/create-checkout.ts",
        payloads.API_STRIPE_CHECKOUT,
        _STATIC,
        requires_stripe=True,
    ),
    TemplateEntry(
        "pages/api/stripe/webhook.ts",
        payloads.API_STRIPE_WEBHOOK,
        _STATIC,
        requires_stripe=True,
    ),
    TemplateEntry("pages/api/health.ts", payloads.API_HEALTH, _STATIC),
    TemplateEntry("pages/blog/index.tsx", payloads.BLOG_PAGE, _STATIC),
    # Placeholder image referenced by the blog page.
    TemplateEntry("public/shared-hero.jpg", "", _STATIC),
    TemplateEntry("pages/founder.tsx", payloads.FOUNDER_PAGE, _STATIC),
    TemplateEntry(".github/workflows/deploy.yml", payloads.DEPLOY_WORKFLOW, _STATIC),
)

# Empty directories the hosting config expects to exist.
DIRECTORIES: tuple[str, ...] = ("netlify/functions",)

SITE_URLS = {
    "local": "http://localhost:3000",
    "staging": "https://staging.example.com",
    "production": "https://yourdomain.com",
}

_LOCAL_STRIPE_KEYS = {
    "secret_key": "sk_test_xxxxxxxxxxxxxxxxxxxxx",
    "webhook_secret": "whsec_xxxxxxxxxxxxxxxxxxxxx",
}

DEV_COMMANDS = {
    PackageManager.NPM: "npm run dev",
    PackageManager.PNPM: "pnpm dev",
    PackageManager.YARN: "yarn dev",
}


def select_entries(config: Configuration) -> list[TemplateEntry]:
    """Return the entries written for *config*, in definition order."""
    return [entry for entry in PROJECT_TREE if config.stripe or not entry.requires_stripe]


def build_context(config: Configuration) -> dict[str, str]:
    """Return the placeholder values for *config*.

    Besides the raw configuration fields this derives the slug, the site URL
    for each deployment tier, and the fragments that only appear when billing
    or a repository URL is configured.
    """
    context: dict[str, str] = {
        "name": config.name,
        "slug": config.slug,
        "repo": config.repo,
        "auth": config.auth.value,
        "db": config.db.value,
        "deploy": config.deploy.value,
        "run_dev": DEV_COMMANDS[config.package_manager],
    }
    for tier, url in SITE_URLS.items():
        context[f"{tier}_url"] = url

    if config.stripe:
        context["stripe_dependencies"] = payloads.STRIPE_DEPENDENCIES
        context["stripe_readme"] = ", Stripe"
        context["staging_stripe_env"] = _stripe_env(SITE_URLS["staging"])
        context["production_stripe_env"] = _stripe_env(SITE_URLS["production"])
        context["local_stripe_env"] = "\n# Stripe\n" + _stripe_env(
            SITE_URLS["local"], **_LOCAL_STRIPE_KEYS
        )

    if config.repo:
        context["repo_json"] = json.dumps(config.repo)
        context["repository_field"] = interpolate(payloads.REPOSITORY_FIELD, context)
        context["repo_section"] = interpolate(payloads.REPO_SECTION, context)

    return context


def is_safe_relative_path(path: str) -> bool:
    """Return True if *path* stays inside whatever directory it is joined to."""
    pure = PurePosixPath(path)
    if not path or pure.is_absolute() or "\\" in path:
        return False
    return all(part not in ("..", "") for part in pure.parts)


def _stripe_env(site_url: str, secret_key: str = "", webhook_secret: str = "") -> str:
    return interpolate(
        payloads.STRIPE_ENV,
        {"site_url": site_url, "secret_key": secret_key, "webhook_secret": webhook_secret},
    )
