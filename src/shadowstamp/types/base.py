"""Base model class for shadowstamp's schema types."""

from pydantic import BaseModel, ConfigDict


class ShadowBaseModel(BaseModel):
    """Base model for shadowstamp's immutable schema types.

    Instances are frozen, so a derived schema never aliases its source, and
    arbitrary Python types are accepted as field values (path types are
    classes).
    """
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        use_enum_values=True,
        frozen=True
    )
