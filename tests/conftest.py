"""Shared pytest fixtures and configuration for pytest."""

import sys

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for platform-specific tests."""
    config.addinivalue_line("markers", "unix_only: mark test to run only on Unix")


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Auto-skip tests based on platform markers."""
    skip_unix = pytest.mark.skip(reason="Unix-only test")

    for item in items:
        if "unix_only" in item.keywords and sys.platform == "win32":
            item.add_marker(skip_unix)


@pytest.fixture
def isolated_home(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Point the global config directory at a temp dir."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(
        "jsonrpc_http.config.loader.get_config_dir", lambda: home / ".jsonrpc_http"
    )
    return home
