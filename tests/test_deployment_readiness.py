"""Deployment readiness tests for production settings."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

pytestmark = pytest.mark.integration


def test_django_project_loads() -> None:
    """Import and initialize Django to verify settings are valid."""

    import django
    from django.conf import settings

    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "tailorDesk.settings")
    django.setup()
    assert "core.apps.CoreConfig" in settings.INSTALLED_APPS


def _repo_root() -> Path:
    """Return the repository root directory."""

    return Path(__file__).resolve().parent.parent


def _run_manage_check_deploy(*, env: dict[str, str]) -> subprocess.CompletedProcess[str]:
    """Run `manage.py check --deploy` in a subprocess.

    Args:
        env: Environment variables to merge into the current environment.

    Returns:
        Completed process result with captured output.
    """

    merged_env = os.environ.copy()
    merged_env.pop("DJANGO_SECRET_KEY", None)
    merged_env.update(env)
    merged_env["DJANGO_SETTINGS_MODULE"] = "tailorDesk.settings"
    return subprocess.run(
        [
            sys.executable,
            "manage.py",
            "check",
            "--deploy",
            "--fail-level",
            "WARNING",
        ],
        cwd=_repo_root(),
        env=merged_env,
        check=False,
        capture_output=True,
        text=True,
    )


def test_manage_check_deploy_passes_with_required_env() -> None:
    """Verify production settings satisfy Django's deployment checks."""

    result = _run_manage_check_deploy(
        env={
            "DJANGO_DEBUG": "0",
            "DJANGO_SECRET_KEY": "tests-only-secret-key-please-replace-with-a-long-random-value-0123456789",
            "DJANGO_ALLOWED_HOSTS": "example.com",
            "DJANGO_CSRF_TRUSTED_ORIGINS": "https://example.com",
        }
    )
    assert result.returncode == 0, result.stdout + "\n" + result.stderr


def test_manage_check_deploy_requires_secret_key() -> None:
    """Ensure production settings refuse to boot without a non-default secret key."""

    result = _run_manage_check_deploy(
        env={
            "DJANGO_DEBUG": "0",
            "DJANGO_ALLOWED_HOSTS": "example.com",
        }
    )
    assert result.returncode != 0
    assert "DJANGO_SECRET_KEY is required" in result.stderr
