"""Settings for shadowstamp built on Pydantic Settings.

Configuration sources (precedence order):
    1. Explicit plugin options
    2. Environment variables prefixed with ``SHADOW_`` (e.g. ``SHADOW_FIELD_SUFFIX``)
    3. A local ``.env`` file
    4. Default values in code

Quick Start:
    >>> from shadowstamp.settings import get_settings
    >>> get_settings().field_suffix
    '_lastModifiedDate'
"""

from .augmentor import ShadowFieldSettings
from .base import ShadowBaseSettings
from .main import get_settings, reload_settings

__all__ = [
    "ShadowBaseSettings",
    "ShadowFieldSettings",
    "get_settings",
    "reload_settings",
]
