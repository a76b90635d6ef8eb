"""Schema data model for shadowstamp."""

from shadowstamp.types.base import ShadowBaseModel
from shadowstamp.types.schema import SchemaDefinition, SchemaOptions, SchemaPath

__all__ = [
    "ShadowBaseModel",
    "SchemaDefinition",
    "SchemaOptions",
    "SchemaPath",
]
