"""Root pytest configuration.

Test Structure:
    tests/
    ├── edugate_identity/      # Identity package tests
    │   ├── unit/              # Fast, isolated tests (mocks)
    │   └── integration/       # Repositories against in-memory SQLite
    ├── integration/api/       # HTTP endpoints through the ASGI app
    └── unit/presentation/     # CLI commands
"""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from edugate_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.test if present (never the production file)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.test").exists():
    load_dotenv(CONFIG_DIR / ".env.test")


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that verify database/persistence behavior",
    )


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Start and finish the test session with a fresh settings cache."""
    clear_settings_cache()
    yield
    clear_settings_cache()
