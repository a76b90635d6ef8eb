"""In-memory schema host with hook slots."""

from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from shadowstamp.common.exceptions import ErrorCode, ShadowStampError
from shadowstamp.constants import (
    DEFAULT_DISCRIMINATOR_KEY,
    DEFAULT_ID_KEY,
    DEFAULT_VERSION_KEY,
    SerializationView,
)
from shadowstamp.logging import get_logger
from shadowstamp.protocols.host import OutputTransform, PreSaveHook
from shadowstamp.types.schema import SchemaDefinition, SchemaOptions, SchemaPath

logger = get_logger(__name__)


class Schema:
    """Mutable registration object around an immutable :class:`SchemaDefinition`.

    Implements :class:`~shadowstamp.protocols.SchemaHost`. Plugins are applied
    with :meth:`plugin` while the schema is being configured; once a model has
    been compiled from it, the definition can no longer be replaced.

    Example:
        >>> schema = Schema({"make": str, "miles": {"type": int, "default": 0}})
        >>> list(schema.paths)
        ['_id', 'make', 'miles', '__v']
    """

    def __init__(
        self,
        fields: Optional[Mapping[str, Any]] = None,
        *,
        id_key: str = DEFAULT_ID_KEY,
        discriminator_key: str = DEFAULT_DISCRIMINATOR_KEY,
        version_key: str = DEFAULT_VERSION_KEY,
    ):
        options = SchemaOptions(
            id_key=id_key,
            discriminator_key=discriminator_key,
            version_key=version_key,
        )
        self._definition = SchemaDefinition.from_fields(fields or {}, options)
        self._pre_save_hooks: List[PreSaveHook] = []
        self._transforms: Dict[SerializationView, OutputTransform] = {}
        self.statics: Dict[str, Callable[..., Any]] = {}
        self._compiled = False

    @property
    def definition(self) -> SchemaDefinition:
        return self._definition

    @property
    def options(self) -> SchemaOptions:
        return self._definition.options

    @property
    def paths(self) -> Dict[str, SchemaPath]:
        return dict(self._definition.paths)

    @property
    def pre_save_hooks(self) -> Tuple[PreSaveHook, ...]:
        return tuple(self._pre_save_hooks)

    def each_path(self) -> Iterator[Tuple[str, SchemaPath]]:
        return self._definition.each_path()

    def selected_paths(self) -> List[str]:
        """Paths retrieved by default, i.e. those not declared with ``select=False``."""
        return [name for name, path in self.each_path() if path.select is not False]

    def replace_definition(self, definition: SchemaDefinition) -> None:
        if self._compiled:
            raise ShadowStampError(
                "Schema definition cannot change after a model has been compiled from it",
                error_code=ErrorCode.SCHEMA_ERROR,
            )
        self._definition = definition

    def add_pre_save(self, hook: PreSaveHook) -> None:
        self._pre_save_hooks.append(hook)

    def set_transform(self, view: SerializationView, transform: OutputTransform) -> None:
        self._transforms[SerializationView(view)] = transform

    def get_transform(self, view: SerializationView) -> Optional[OutputTransform]:
        return self._transforms.get(SerializationView(view))

    def add_static(self, name: str, func: Callable[..., Any]) -> None:
        self.statics[name] = func

    def plugin(
        self,
        func: Callable[["Schema", Optional[Any]], None],
        options: Optional[Any] = None,
    ) -> "Schema":
        """Apply a plugin to this schema and return the schema."""
        func(self, options)
        logger.debug(
            "Applied schema plugin %s",
            getattr(func, "__name__", repr(func)),
            extra={"path_count": len(self._definition.paths)},
        )
        return self

    def mark_compiled(self) -> None:
        self._compiled = True
