"""Tests for the project tree definition and context derivation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from saas_scaffold.models import Configuration, EntryKind, PackageManager
from saas_scaffold.render import PLACEHOLDER_PATTERN, interpolate, placeholders
from saas_scaffold.tree import (
    DIRECTORIES,
    PROJECT_TREE,
    build_context,
    is_safe_relative_path,
    select_entries,
)


def _config(**overrides: object) -> Configuration:
    values: dict[str, object] = {"name": "onboardkit", "directory": Path("/work/onboardkit")}
    values.update(overrides)
    return Configuration(**values)  # type: ignore[arg-type]


def _render(path: str, config: Configuration) -> str:
    entry = next(e for e in PROJECT_TREE if e.path == path)
    return interpolate(entry.content, build_context(config))


class TestProjectTree:
    def test_paths_are_unique(self) -> None:
        paths = [entry.path for entry in PROJECT_TREE]
        assert len(paths) == len(set(paths))

    def test_paths_are_safe(self) -> None:
        for entry in PROJECT_TREE:
            assert is_safe_relative_path(entry.path), entry.path
        for directory in DIRECTORIES:
            assert is_safe_relative_path(directory)

    def test_definition_order_starts_with_manifest(self) -> None:
        assert PROJECT_TREE[0].path == "package.json"
        assert PROJECT_TREE[-1].path == ".github/workflows/deploy.yml"

    def test_expected_files_are_declared(self) -> None:
        paths = {entry.path for entry in PROJECT_TREE}
        for expected in (
            "package.json",
            ".env.staging",
            ".env.production",
            ".env.local",
            "supabase/init.sql",
            "pages/index.tsx",
            "pages/sign-in.tsx",
            "pages/sign-up.tsx",
            "pages/dashboard.tsx",
            "pages/api/health.ts",
            "pages/api/events/track.ts",
            "pages/api/signups/add.ts",
            "pages/api/stripe/create-checkout.ts",
            "pages/api/stripe/webhook.ts",
            ".github/workflows/deploy.yml",
            "netlify.toml",
        ):
            assert expected in paths

    def test_static_entries_have_no_placeholders(self) -> None:
        for entry in PROJECT_TREE:
            if entry.kind is EntryKind.STATIC:
                assert placeholders(entry.content) == [], entry.path

    def test_template_placeholders_are_all_known_or_optional(self) -> None:
        context = build_context(_config(repo="https://github.com/acme/app.git"))
        for entry in PROJECT_TREE:
            if entry.kind is EntryKind.TEMPLATE:
                for name in placeholders(entry.content):
                    assert name in context, f"{entry.path}: {name}"

    def test_workflow_keeps_github_expressions(self) -> None:
        entry = next(e for e in PROJECT_TREE if e.path == ".github/workflows/deploy.yml")
        assert entry.kind is EntryKind.STATIC
        assert "${{ secrets.NETLIFY_AUTH_TOKEN }}" in entry.content
        assert "branches: [ 'main' ]" in entry.content


class TestSelectEntries:
    def test_stripe_enabled_includes_billing_routes(self) -> None:
        paths = [entry.path for entry in select_entries(_config(stripe=True))]
        assert "pages/api/stripe/create-checkout.ts" in paths
        assert "pages/api/stripe/webhook.ts" in paths
        assert len(paths) == len(PROJECT_TREE)

    def test_stripe_disabled_skips_billing_routes(self) -> None:
        paths = [entry.path for entry in select_entries(_config(stripe=False))]
        assert not any(path.startswith("pages/api/stripe/") for path in paths)
        assert "pages/api/health.ts" in paths

    def test_preserves_definition_order(self) -> None:
        selected = select_entries(_config(stripe=False))
        order = [entry.path for entry in PROJECT_TREE if entry in selected]
        assert [entry.path for entry in selected] == order


class TestBuildContext:
    def test_slug_is_derived(self) -> None:
        assert build_context(_config(name="My App!"))["slug"] == "my-app"

    def test_site_urls_per_tier(self) -> None:
        context = build_context(_config())
        assert context["local_url"] == "http://localhost:3000"
        assert context["staging_url"] == "https://staging.example.com"
        assert context["production_url"] == "https://yourdomain.com"

    def test_dev_command_follows_package_manager(self) -> None:
        context = build_context(_config(package_manager=PackageManager.PNPM))
        assert context["run_dev"] == "pnpm dev"

    def test_stripe_fragments_absent_without_billing(self) -> None:
        context = build_context(_config(stripe=False))
        assert "stripe_dependencies" not in context
        assert "local_stripe_env" not in context


class TestRenderedPayloads:
    @pytest.mark.parametrize("stripe", [True, False])
    @pytest.mark.parametrize("repo", ["", "https://github.com/acme/app.git"])
    def test_package_json_is_valid(self, stripe: bool, repo: str) -> None:
        data = json.loads(_render("package.json", _config(stripe=stripe, repo=repo)))
        assert data["name"] == "onboardkit"
        assert data["private"] is True
        assert ("stripe" in data["dependencies"]) is stripe
        assert ("micro" in data["dependencies"]) is stripe
        if repo:
            assert data["repository"] == {"type": "git", "url": repo}
        else:
            assert "repository" not in data

    def test_package_json_name_is_slug(self) -> None:
        data = json.loads(_render("package.json", _config(name="My App!")))
        assert data["name"] == "my-app"

    def test_package_json_escapes_repo(self) -> None:
        repo = 'https://example.com/"quoted"'
        data = json.loads(_render("package.json", _config(repo=repo)))
        assert data["repository"]["url"] == repo

    def test_env_files_carry_project_name(self) -> None:
        config = _config(name="Onboard Kit")
        for path in (".env.staging", ".env.production", ".env.local"):
            assert "NEXT_PUBLIC_SITE_NAME=Onboard Kit\n" in _render(path, config)

    def test_env_stripe_urls(self) -> None:
        staging = _render(".env.staging", _config())
        assert "SUCCESS_URL=https://staging.example.com/dashboard\n" in staging
        assert "CANCEL_URL=https://staging.example.com/\n" in staging
        local = _render(".env.local", _config())
        assert "STRIPE_SECRET_KEY=sk_test_" in local
        assert "SUCCESS_URL=http://localhost:3000/dashboard\n" in local

    def test_env_without_stripe_has_no_stripe_keys(self) -> None:
        for path in (".env.staging", ".env.production", ".env.local"):
            assert "STRIPE" not in _render(path, _config(stripe=False))

    def test_readme_mentions_repo_when_given(self) -> None:
        readme = _render("README.md", _config(repo="git@github.com:acme/app.git"))
        assert readme.startswith("# onboardkit\n")
        assert "git remote add origin git@github.com:acme/app.git" in readme

    def test_readme_without_repo(self) -> None:
        readme = _render("README.md", _config())
        assert "## Repository" not in readme
        assert "npm run dev" in readme

    @pytest.mark.parametrize("stripe", [True, False])
    def test_no_residual_placeholders(self, stripe: bool) -> None:
        config = _config(stripe=stripe)
        context = build_context(config)
        for entry in select_entries(config):
            content = interpolate(entry.content, context)
            if entry.kind is EntryKind.TEMPLATE:
                assert PLACEHOLDER_PATTERN.search(content) is None, entry.path


class TestIsSafeRelativePath:
    @pytest.mark.parametrize("path", ["a.txt", "pages/api/x.ts", ".env.local", ".github/w.yml"])
    def test_accepts(self, path: str) -> None:
        assert is_safe_relative_path(path)

    @pytest.mark.parametrize("path", ["", "/etc/passwd", "../x", "a/../../b", "a\\b"])
    def test_rejects(self, path: str) -> None:
        assert not is_safe_relative_path(path)
