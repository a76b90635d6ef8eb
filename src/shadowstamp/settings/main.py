from functools import lru_cache

from .augmentor import ShadowFieldSettings


@lru_cache(maxsize=1)
def get_settings() -> ShadowFieldSettings:
    """Get the process-wide default shadow field settings.

    Built once from ``SHADOW_*`` environment variables and ``.env``. Plugin
    applications that pass explicit options build their own instance instead.

    Returns:
        ShadowFieldSettings: Cached settings instance
    """
    return ShadowFieldSettings()


def reload_settings() -> ShadowFieldSettings:
    """Drop the cached settings and rebuild them from the environment."""
    get_settings.cache_clear()
    return get_settings()
