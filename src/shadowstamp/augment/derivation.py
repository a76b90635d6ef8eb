"""Shadow field derivation.

Given a schema definition, add one ``Optional[datetime]`` shadow path per
eligible base path. Eligible means the path is not a shadow path, its name
does not already contain the suffix, and it is neither a system key nor a
user omission.
"""

from datetime import datetime
from typing import List, Optional

from shadowstamp.logging import get_logger
from shadowstamp.settings import ShadowFieldSettings
from shadowstamp.types.schema import SchemaDefinition, SchemaPath

logger = get_logger(__name__)


def derive_shadow_fields(
    definition: SchemaDefinition,
    settings: ShadowFieldSettings,
) -> SchemaDefinition:
    """Return ``definition`` augmented with shadow paths.

    The input definition is not modified. Running the derivation again on its
    own output adds nothing, since every shadow path carries the suffix and
    every base path already has its shadow.

    Args:
        definition: Schema definition to augment
        settings: Suffix, omissions and visibility of the derived paths

    Returns:
        A new definition with the shadow paths appended in base-path order
    """
    suffix = settings.field_suffix
    omitted = set(settings.omitted_paths(definition.options.system_keys()))

    for name in settings.omitted_fields:
        if not definition.has_path(name):
            logger.warning(
                "Omitted field '%s' is not a path of the schema",
                name,
                extra={"omitted_field": name},
            )

    shadow_paths: List[SchemaPath] = []
    for name, path in definition.each_path():
        if path.is_shadow:
            continue
        if suffix in name:
            logger.warning(
                "Path '%s' contains the shadow field suffix '%s'; it is treated as a shadow field and stamped on save",
                name,
                suffix,
                extra={"path": name, "field_suffix": suffix},
            )
            continue
        if name in omitted:
            continue

        shadow_name = name + suffix
        if definition.has_path(shadow_name):
            # A user path of that name already receives the timestamps.
            continue

        shadow_paths.append(_shadow_path(shadow_name, name, settings.select))

    if not shadow_paths:
        return definition

    logger.debug(
        "Derived %d shadow field(s)",
        len(shadow_paths),
        extra={"shadow_paths": [p.name for p in shadow_paths]},
    )
    return definition.add(shadow_paths)


def _shadow_path(name: str, base_path: str, select: Optional[bool]) -> SchemaPath:
    return SchemaPath(
        name=name,
        type=Optional[datetime],
        select=select,
        is_shadow=True,
        base_path=base_path,
    )
