"""API configuration adapter.

Bridges the centralized quire_config settings with the API layer.
"""

from functools import lru_cache

from quire_config.settings import Settings, get_settings


@lru_cache
def get_api_settings() -> Settings:
    """Get settings from centralized configuration.

    Tests override this dependency instead of touching the environment.
    """
    return get_settings()
