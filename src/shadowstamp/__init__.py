from shadowstamp.__version__ import __version__

from shadowstamp.augment import (
    ShadowFieldAugmentor,
    ShadowFieldPurger,
    ShadowStamper,
    derive_shadow_fields,
    last_modified_fields,
    purge_shadow_fields,
)
from shadowstamp.common.exceptions import ErrorCode, ShadowStampError
from shadowstamp.constants import DEFAULT_FIELD_SUFFIX, SerializationView
from shadowstamp.documents import Document, Schema, model
from shadowstamp.protocols import SchemaHost, TrackedDocument
from shadowstamp.settings import ShadowFieldSettings, get_settings
from shadowstamp.types import SchemaDefinition, SchemaOptions, SchemaPath


__all__ = [
    "__version__",

    # Augmentor
    "last_modified_fields",
    "ShadowFieldAugmentor",
    "derive_shadow_fields",
    "ShadowStamper",
    "ShadowFieldPurger",
    "purge_shadow_fields",

    # Configuration
    "ShadowFieldSettings",
    "get_settings",
    "DEFAULT_FIELD_SUFFIX",

    # Schema model and host interface
    "SchemaDefinition",
    "SchemaOptions",
    "SchemaPath",
    "SchemaHost",
    "TrackedDocument",
    "SerializationView",

    # Reference host
    "Schema",
    "Document",
    "model",

    # Exceptions
    "ShadowStampError",
    "ErrorCode",
]
