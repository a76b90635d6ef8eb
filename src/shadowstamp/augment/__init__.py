"""The shadow-field augmentor: derivation, stamping, redaction and accessors."""

from shadowstamp.augment.derivation import derive_shadow_fields
from shadowstamp.augment.plugin import ShadowFieldAugmentor, last_modified_fields
from shadowstamp.augment.redaction import ShadowFieldPurger, purge_shadow_fields
from shadowstamp.augment.stamping import ShadowStamper

__all__ = [
    "ShadowFieldAugmentor",
    "last_modified_fields",
    "derive_shadow_fields",
    "ShadowStamper",
    "ShadowFieldPurger",
    "purge_shadow_fields",
]
