"""Constants module for shadowstamp.

This module contains the constant values and enumerations shared by the
augmentor and the reference document host. It has no dependencies on other
shadowstamp modules.

Organization:
    - schema: path naming conventions and system keys
"""

from shadowstamp.constants.schema import (
    DEFAULT_DISCRIMINATOR_KEY,
    DEFAULT_FIELD_SUFFIX,
    DEFAULT_ID_KEY,
    DEFAULT_VERSION_KEY,
    PATH_SEPARATOR,
    SerializationView,
)

__all__ = [
    "DEFAULT_FIELD_SUFFIX",
    "DEFAULT_ID_KEY",
    "DEFAULT_DISCRIMINATOR_KEY",
    "DEFAULT_VERSION_KEY",
    "PATH_SEPARATOR",
    "SerializationView",
]
