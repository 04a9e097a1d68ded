"""
Pytest configuration and fixtures for all tests.
"""

import os
import sys
from datetime import datetime, timezone

import pytest

# Add src to Python path before any imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

# Keep environment-driven configuration out of the tests
for _name in list(os.environ):
    if _name.startswith('LOCALEMAIL_'):
        del os.environ[_name]


FIXED_NOW = datetime(2021, 8, 27, 11, 45, 32, 250000, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    """Clock that always returns 2021-08-27T11:45:32.25Z."""
    return lambda: FIXED_NOW


@pytest.fixture
def output_dir(tmp_path):
    """Output root that does not exist yet."""
    return tmp_path / 'localemail'
