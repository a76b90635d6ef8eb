"""Shadow-field augmentor and the plugin entry point.

Example:
    >>> from shadowstamp import Schema, last_modified_fields, model
    >>> schema = Schema({"make": str, "model": str, "vin": str, "miles": int}).plugin(
    ...     last_modified_fields, {"fieldSuffix": "_lastModified", "omittedFields": ["vin"]}
    ... )
    >>> Car = model("Car", schema)
    >>> Car.get_modified_field_paths()
    ['make_lastModified', 'model_lastModified', 'miles_lastModified']
"""

from typing import Any, List, Mapping, Optional, Union

from shadowstamp.augment.derivation import derive_shadow_fields
from shadowstamp.augment.redaction import ShadowFieldPurger
from shadowstamp.augment.stamping import ShadowStamper
from shadowstamp.constants import SerializationView
from shadowstamp.logging import get_logger
from shadowstamp.protocols.host import SchemaHost
from shadowstamp.settings import ShadowFieldSettings, get_settings
from shadowstamp.types.schema import SchemaDefinition
from shadowstamp.utils.decorators import traced

logger = get_logger(__name__)

SUFFIX_ACCESSOR = "get_modified_field_suffix"
PATHS_ACCESSOR = "get_modified_field_paths"


class ShadowFieldAugmentor:
    """Attaches last-modified shadow fields to a schema host.

    The individual steps are exposed for hosts that wire hooks themselves:
    :meth:`derive` is the configuration-time transform, :meth:`stamper` the
    pre-save hook and :meth:`purger` the output transform. :meth:`apply`
    performs all registrations against a :class:`SchemaHost`.

    Attributes:
        settings: Configuration of this augmentation
    """

    def __init__(self, settings: Optional[ShadowFieldSettings] = None):
        self.settings = settings or get_settings()

    @property
    def suffix(self) -> str:
        return self.settings.field_suffix

    def derive(self, definition: SchemaDefinition) -> SchemaDefinition:
        return derive_shadow_fields(definition, self.settings)

    def stamper(self) -> ShadowStamper:
        return ShadowStamper(self.settings)

    def purger(self) -> ShadowFieldPurger:
        return ShadowFieldPurger(self.suffix)

    def purged_views(self) -> List[SerializationView]:
        views = []
        if self.settings.purge_from_object:
            views.append(SerializationView.OBJECT)
        if self.settings.purge_from_json:
            views.append(SerializationView.JSON)
        return views

    @traced("shadowstamp.augment.apply")
    def apply(self, schema: SchemaHost) -> SchemaHost:
        """Register derivation, stamping, redaction and accessors on ``schema``.

        Args:
            schema: Host schema, before any document of it exists

        Returns:
            The same schema host
        """
        schema.replace_definition(self.derive(schema.definition))
        schema.add_pre_save(self.stamper())

        for view in self.purged_views():
            schema.set_transform(view, self.purger())

        suffix = self.suffix

        def get_modified_field_suffix() -> str:
            return suffix

        def get_modified_field_paths() -> List[str]:
            return [name for name in schema.definition.paths if suffix in name]

        schema.add_static(SUFFIX_ACCESSOR, get_modified_field_suffix)
        schema.add_static(PATHS_ACCESSOR, get_modified_field_paths)

        logger.info(
            "Applied last modified fields",
            extra={
                "field_suffix": suffix,
                "shadow_field_count": len(schema.definition.shadow_paths()),
                "purged_views": [view.value for view in self.purged_views()],
            },
        )
        return schema


def last_modified_fields(
    schema: SchemaHost,
    options: Optional[Union[Mapping[str, Any], ShadowFieldSettings]] = None,
) -> None:
    """Plugin entry point: add last-modified shadow fields to ``schema``.

    Args:
        schema: Host schema to augment
        options: Plugin options (``fieldSuffix``, ``purgeFromJSON``,
            ``purgeFromObject``, ``overwrite``, ``omittedFields``, ``select``,
            ``stampDefaults`` or their snake_case names), a prepared
            :class:`ShadowFieldSettings`, or ``None`` for the environment
            defaults.

    Raises:
        ShadowStampError: If the options are invalid
    """
    if isinstance(options, ShadowFieldSettings):
        settings = options
    elif options is None:
        settings = get_settings()
    else:
        settings = ShadowFieldSettings.from_options(options)

    ShadowFieldAugmentor(settings).apply(schema)
