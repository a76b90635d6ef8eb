"""Schema types: options, typed paths and immutable schema definitions.

A :class:`SchemaDefinition` is the value the augmentor works on. It is frozen;
every change (such as deriving shadow fields) produces a new definition, and
hosts swap the new definition in as a single configuration step.
"""

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from pydantic import Field

from shadowstamp.common.exceptions import ErrorCode, ShadowStampError
from shadowstamp.constants import (
    DEFAULT_DISCRIMINATOR_KEY,
    DEFAULT_ID_KEY,
    DEFAULT_VERSION_KEY,
    PATH_SEPARATOR,
)
from shadowstamp.types.base import ShadowBaseModel


# Keys of a field declaration mapping; anything else makes the mapping a nested object.
_DECLARATION_KEYS = {"type", "default", "select"}


class SchemaOptions(ShadowBaseModel):
    """Names of the system keys a schema reserves.

    Attributes:
        id_key: Identifier path, always present
        discriminator_key: Type discriminator path used by inherited models
        version_key: Version-tracking path, set on first save
    """
    id_key: str = DEFAULT_ID_KEY
    discriminator_key: str = DEFAULT_DISCRIMINATOR_KEY
    version_key: str = DEFAULT_VERSION_KEY

    def system_keys(self) -> List[str]:
        return [self.id_key, self.discriminator_key, self.version_key]


class SchemaPath(ShadowBaseModel):
    """A named, typed field declaration.

    Attributes:
        name: Full path name; nested fields use dotted names (``engine.cylinders``)
        type: Python type values of this path are validated against
        default: Value a new document starts with when the path is not set
        select: Whether the path is retrieved by default; ``None`` keeps the host default
        is_shadow: True for derived last-modified timestamp paths
        base_path: For shadow paths, the path whose changes they track
    """
    name: str
    type: Any = Field(default=Any)
    default: Any = None
    select: Optional[bool] = None
    is_shadow: bool = False
    base_path: Optional[str] = None

    @property
    def has_default(self) -> bool:
        return self.default is not None

    @property
    def parent_paths(self) -> List[str]:
        """Dotted prefixes of this path, outermost first."""
        parts = self.name.split(PATH_SEPARATOR)
        return [PATH_SEPARATOR.join(parts[:i]) for i in range(1, len(parts))]


class SchemaDefinition(ShadowBaseModel):
    """Ordered, immutable mapping of path names to :class:`SchemaPath`."""
    paths: Dict[str, SchemaPath] = Field(default_factory=dict)
    options: SchemaOptions = Field(default_factory=SchemaOptions)

    @classmethod
    def from_fields(
        cls,
        fields: Mapping[str, Any],
        options: Optional[SchemaOptions] = None,
    ) -> "SchemaDefinition":
        """Build a definition from a field declaration mapping.

        Each value may be a type (``str``), a declaration mapping
        (``{"type": int, "default": 0, "select": False}``), a
        :class:`SchemaPath`, or a nested mapping of further declarations which
        is flattened into dotted paths. The id path is added first and the
        version path last unless declared explicitly.

        Example:
            >>> definition = SchemaDefinition.from_fields({
            ...     "make": str,
            ...     "engine": {"cylinders": int},
            ... })
            >>> [name for name, _ in definition.each_path()]
            ['_id', 'make', 'engine.cylinders', '__v']
        """
        options = options or SchemaOptions()
        declared = list(_flatten(fields))

        paths: Dict[str, SchemaPath] = {}
        declared_names = {path.name for path in declared}
        if options.id_key not in declared_names:
            paths[options.id_key] = SchemaPath(name=options.id_key, type=str)
        for path in declared:
            if path.name in paths:
                raise ShadowStampError(
                    f"Path '{path.name}' is declared more than once",
                    error_code=ErrorCode.DUPLICATE_PATH,
                    details={"path": path.name},
                )
            paths[path.name] = path
        if options.version_key not in paths:
            paths[options.version_key] = SchemaPath(name=options.version_key, type=int)

        return cls(paths=paths, options=options)

    def each_path(self) -> Iterator[Tuple[str, SchemaPath]]:
        """Yield ``(name, path)`` pairs in declaration order."""
        yield from self.paths.items()

    def has_path(self, name: str) -> bool:
        return name in self.paths

    def get_path(self, name: str) -> Optional[SchemaPath]:
        return self.paths.get(name)

    def add(self, paths: Iterable[SchemaPath]) -> "SchemaDefinition":
        """Return a new definition with ``paths`` appended.

        Raises:
            ShadowStampError: If a path name is already declared
        """
        merged = dict(self.paths)
        for path in paths:
            if path.name in merged:
                raise ShadowStampError(
                    f"Path '{path.name}' already exists in the schema",
                    error_code=ErrorCode.DUPLICATE_PATH,
                    details={"path": path.name},
                )
            merged[path.name] = path
        return SchemaDefinition(paths=merged, options=self.options)

    def shadow_path_for(self, base_path: str, suffix: str) -> Optional[str]:
        """Name of the derived shadow path tracking ``base_path`` under ``suffix``."""
        path = self.paths.get(base_path + suffix)
        if path is None or not path.is_shadow or path.base_path != base_path:
            return None
        return path.name

    def shadow_paths(self) -> List[str]:
        return [name for name, path in self.paths.items() if path.is_shadow]

    def is_shadow_path(self, name: str) -> bool:
        path = self.paths.get(name)
        return path is not None and path.is_shadow


def _flatten(fields: Mapping[str, Any], prefix: str = "") -> Iterator[SchemaPath]:
    for key, declaration in fields.items():
        name = f"{prefix}{key}"
        if isinstance(declaration, SchemaPath):
            yield declaration.model_copy(update={"name": name})
        elif isinstance(declaration, Mapping) and "type" in declaration:
            unknown = set(declaration) - _DECLARATION_KEYS
            if unknown:
                raise ShadowStampError(
                    f"Unsupported declaration keys for path '{name}': {', '.join(sorted(unknown))}",
                    error_code=ErrorCode.SCHEMA_ERROR,
                    details={"path": name, "keys": sorted(unknown)},
                )
            yield SchemaPath(name=name, **declaration)
        elif isinstance(declaration, Mapping):
            yield from _flatten(declaration, prefix=f"{name}{PATH_SEPARATOR}")
        else:
            yield SchemaPath(name=name, type=declaration)
