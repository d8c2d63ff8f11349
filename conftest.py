"""Project conftest"""

import pytest

from fixtures.common import *  # noqa: F403


@pytest.fixture(autouse=True)
def default_settings(monkeypatch, settings):  # noqa: PT004
    """Set default settings for all tests"""
    monkeypatch.setenv("DJANGO_SETTINGS_MODULE", "main.settings")
    settings.LANGUAGE_CODE = "en-us"


def pytest_addoption(parser):
    """Pytest hook that adds command line parameters"""
    parser.addoption(
        "--simple",
        action="store_true",
        help="Run tests only (no cov, warning output silenced)",
    )


def pytest_configure(config):
    """Pytest hook to perform some initial configuration"""
    if config.option.simple is True:
        # Remove warnings plugin to suppress warnings
        if config.pluginmanager.has_plugin("warnings"):
            warnings_plugin = config.pluginmanager.get_plugin("warnings")
            config.pluginmanager.unregister(warnings_plugin)
