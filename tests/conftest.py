"""
Pytest configuration and shared fixtures for kvconfig tests.
"""

import os

import pytest
import structlog

from kvconfig.config.settings import Settings
from kvconfig.utils.log import configure_default_logging


SAMPLE_CONFIG = """\
# Sample configuration
port = 8080
Host = example.org   # primary host

TIMEOUT = 2.5
DEBUG = 1
1x = 5
_k = 5
no separator here
"""


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep KVCONFIG_* variables from the developer shell out of the tests."""
    for name in list(os.environ):
        if name.upper().startswith("KVCONFIG_"):
            monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture(autouse=True)
def default_logging():
    """Start every test from the logging setup a library user gets."""
    structlog.reset_defaults()
    configure_default_logging()
    yield
    structlog.reset_defaults()


@pytest.fixture
def write_file(tmp_path):
    """Write text to a file below tmp_path and return its path."""

    def _write(content: str, name: str = "app.cfg"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_file(write_file):
    return write_file(SAMPLE_CONFIG)


@pytest.fixture
def legacy_settings():
    return Settings(legacy_comment_boundary=True)
