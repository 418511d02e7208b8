"""Test configuration shared by every test module."""

import os

# Must be set before the application modules load their configuration
os.environ.setdefault("APP_ENVIRONMENT", "test")

from tests.fixtures import *  # noqa: E402,F401,F403
