"""
Pytest configuration and fixtures for voicetask tests.
"""
import os
from datetime import datetime

import pytest

from voicetask.config import Config, DEFAULTS, ENV_PREFIX

# Wednesday 8 January 2025, 09:00
REFERENCE_NOW = datetime(2025, 1, 8, 9, 0)


@pytest.fixture
def now():
    """Fixed reference instant for relative dates."""
    return REFERENCE_NOW


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """
    Keep each test away from the user's config file and VOICETASK_* env vars.
    """
    monkeypatch.setenv(ENV_PREFIX + "CONFIG", str(tmp_path / "config.json"))
    for key in DEFAULTS:
        monkeypatch.delenv(ENV_PREFIX + key.upper(), raising=False)
    Config.clear_cache()
    yield
    Config.clear_cache()
