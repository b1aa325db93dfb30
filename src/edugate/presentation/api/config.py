"""Settings access for the API layer.

Routers and dependencies depend on ``get_api_settings`` rather than on
``edugate_config`` directly, so tests can swap the settings through
``app.dependency_overrides``.
"""

from functools import lru_cache

from edugate_config.settings import Settings, get_settings


@lru_cache
def get_api_settings() -> Settings:
    """Return the process-wide settings used by request handlers."""
    return get_settings()
