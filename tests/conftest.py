"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Project Layout:
    Tests that touch configuration run inside a temporary project root
    (``.project_root`` marker, config/settings/*.yaml, credentials file)
    so they never read or write the real project's config or users/ files.
"""

import json
from collections.abc import Generator
from pathlib import Path

import pytest
import yaml

from davinci_cli.core import logging as logging_module
from davinci_cli.core.config import get_app_config, get_settings

from tests.helpers import APPLICATION_SETTINGS, CREDENTIALS, LOGGING_SETTINGS


# =============================================================================
# Config Cache Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _clear_config_cache() -> Generator[None, None, None]:
    """Clear cached config between tests so each test gets a fresh load."""
    get_settings.cache_clear()
    get_app_config.cache_clear()
    logging_module._logging_config = None
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()
    logging_module._logging_config = None


# =============================================================================
# Project Root Fixtures
# =============================================================================


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Create a complete project root in tmp_path and chdir into it.

    Usage:
        def test_export(project_root):
            assert (project_root / ".project_root").exists()
    """
    (tmp_path / ".project_root").touch()
    settings_dir = tmp_path / "config" / "settings"
    settings_dir.mkdir(parents=True)
    (settings_dir / "application.yaml").write_text(yaml.safe_dump(APPLICATION_SETTINGS))
    (settings_dir / "logging.yaml").write_text(yaml.safe_dump(LOGGING_SETTINGS))
    (tmp_path / "config.json").write_text(json.dumps(CREDENTIALS))
    (tmp_path / "users").mkdir()

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DAVINCI_CREDENTIALS_FILE", raising=False)
    return tmp_path
