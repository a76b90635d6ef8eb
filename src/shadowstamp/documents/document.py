"""Change-tracking documents for the in-memory schema host.

A :class:`Document` keeps its values keyed by full path name and records
which paths were assigned since the last save. Values set at construction
count as modified; schema defaults do not. ``save`` runs the schema's
pre-save hooks in order and then clears the tracking state. Nothing is
persisted.
"""

import copy
import json
import uuid
from functools import lru_cache
from typing import Any, ClassVar, Dict, Iterator, List, Mapping, Optional, Set, Tuple, Type

from pydantic import TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python

from shadowstamp.common.exceptions import ErrorCode, ShadowStampError, path_not_found_error, validation_error
from shadowstamp.constants import PATH_SEPARATOR, SerializationView
from shadowstamp.documents.schema import Schema
from shadowstamp.logging import document_context, get_logger
from shadowstamp.types.schema import SchemaPath
from shadowstamp.utils.decorators import traced

logger = get_logger(__name__)


@lru_cache(maxsize=None)
def _adapter_for(path_type: Any) -> TypeAdapter:
    return TypeAdapter(path_type)


def _save_attributes(document: "Document") -> Dict[str, Any]:
    return {
        "shadowstamp.model": document.model_name,
        "shadowstamp.is_new": document.is_new,
    }


class Document:
    """Base class of compiled models; see :func:`model`."""

    schema: ClassVar[Schema]
    model_name: ClassVar[str] = "Document"

    def __init__(self, **values: Any):
        if not isinstance(getattr(type(self), "schema", None), Schema):
            raise ShadowStampError(
                f"{type(self).__name__} has no schema; create models with shadowstamp.model()"
            )

        self._values: Dict[str, Any] = {}
        self._modified: Dict[str, None] = {}
        self._defaulted: Set[str] = set()
        self._is_new = True

        definition = self.schema.definition
        for name, path in definition.each_path():
            if path.has_default:
                default = path.default() if callable(path.default) else copy.deepcopy(path.default)
                self._values[name] = self._validate(path, default)
                self._defaulted.add(name)

        self._values[definition.options.id_key] = uuid.uuid4().hex

        for name, value in self._flatten_values(values):
            self.set(name, value)

    # -- tracked access -------------------------------------------------------

    @property
    def is_new(self) -> bool:
        return self._is_new

    @property
    def id(self) -> Optional[str]:
        return self._values.get(self.schema.definition.options.id_key)

    def get(self, path: str) -> Optional[Any]:
        """Return the value at ``path``; a parent of dotted paths returns a nested dict.

        Raises:
            ShadowStampError: If the schema declares neither the path nor children of it
        """
        definition = self.schema.definition
        if definition.has_path(path):
            return self._values.get(path)

        prefix = path + PATH_SEPARATOR
        children = {name[len(prefix):]: value for name, value in self._values.items() if name.startswith(prefix)}
        if children or any(name.startswith(prefix) for name in definition.paths):
            return _nest(children)

        raise path_not_found_error(path, model_name=self.model_name)

    def set(self, path: str, value: Any, mark_modified: bool = True) -> None:
        """Assign ``value`` to ``path`` after validating it against the path type.

        Args:
            path: Full path name, or a parent path with a mapping value
            value: New value; ``None`` unsets the path
            mark_modified: Record the path as modified. Pass ``False`` to write
                without tracking, in which case save hooks will not see the change.

        Raises:
            ShadowStampError: If the path is unknown or the value is invalid
        """
        schema_path = self.schema.definition.get_path(path)
        if schema_path is None:
            if isinstance(value, Mapping):
                for name, child in self._flatten_values(value, prefix=path + PATH_SEPARATOR):
                    self.set(name, child, mark_modified=mark_modified)
                return
            raise path_not_found_error(path, model_name=self.model_name)

        coerced = self._validate(schema_path, value)
        changed = self._values.get(path) != coerced
        self._values[path] = coerced
        self._defaulted.discard(path)

        if mark_modified and (changed or self._is_new):
            self._modified[path] = None

    def mark_modified(self, path: str) -> None:
        if not self.schema.definition.has_path(path):
            raise path_not_found_error(path, model_name=self.model_name)
        self._modified[path] = None

    def is_modified(self, path: str) -> bool:
        return path in self.modified_paths()

    def modified_paths(self) -> List[str]:
        """Modified paths, each preceded by its not-yet-listed parent paths."""
        paths: Dict[str, None] = {}
        definition = self.schema.definition
        for name in self._modified:
            schema_path = definition.get_path(name)
            for parent in schema_path.parent_paths if schema_path else []:
                paths[parent] = None
            paths[name] = None
        return list(paths)

    def defaulted_paths(self) -> List[str]:
        return [name for name, _ in self.schema.definition.each_path() if name in self._defaulted]

    # -- lifecycle ----------------------------------------------------------

    @traced("shadowstamp.document.save", attribute_getter=_save_attributes)
    def save(self) -> "Document":
        """Run the pre-save hooks and reset change tracking.

        Hook exceptions propagate unchanged and leave the tracking state as it was.

        Returns:
            The document itself
        """
        with document_context(self.model_name, self.id):
            for hook in self.schema.pre_save_hooks:
                hook(self)

            version_key = self.schema.definition.options.version_key
            if self._is_new and self.schema.definition.has_path(version_key):
                self.set(version_key, 0)

            logger.debug(
                "Saved document",
                extra={"modified_paths": self.modified_paths(), "is_new": self._is_new},
            )
            self._modified.clear()
            self._defaulted.clear()
            self._is_new = False

        return self

    # -- rendering ----------------------------------------------------------

    def to_object(self) -> Dict[str, Any]:
        """Nested plain-object view, passed through the schema's object transform."""
        return self._render(SerializationView.OBJECT, self._nested_values())

    def to_json(self) -> Dict[str, Any]:
        """JSON-encodable view, passed through the schema's JSON transform."""
        return self._render(SerializationView.JSON, to_jsonable_python(self._nested_values()))

    def to_json_string(self, **kwargs: Any) -> str:
        return json.dumps(self.to_json(), **kwargs)

    def _render(self, view: SerializationView, output: Dict[str, Any]) -> Dict[str, Any]:
        transform = self.schema.get_transform(view)
        if transform is None:
            return output
        return transform(self, output)

    def _nested_values(self) -> Dict[str, Any]:
        ordered = [
            (name, self._values[name])
            for name, _ in self.schema.definition.each_path()
            if name in self._values
        ]
        return _nest(dict(ordered))

    # -- helpers ------------------------------------------------------------

    def _validate(self, schema_path: SchemaPath, value: Any) -> Any:
        if value is None:
            return None
        try:
            return _adapter_for(schema_path.type).validate_python(value)
        except ValidationError as exc:
            raise validation_error(
                f"Invalid value for path '{schema_path.name}'",
                field=schema_path.name,
                value=value,
                cause=exc,
            ) from exc

    def _flatten_values(self, values: Mapping[str, Any], prefix: str = "") -> Iterator[Tuple[str, Any]]:
        definition = self.schema.definition
        for key, value in values.items():
            name = f"{prefix}{key}"
            if not definition.has_path(name) and isinstance(value, Mapping):
                yield from self._flatten_values(value, prefix=name + PATH_SEPARATOR)
            else:
                yield name, value

    # -- attribute access ---------------------------------------------------

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self.get(name)
        except ShadowStampError:
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_") or not self._is_schema_name(name):
            object.__setattr__(self, name, value)
        else:
            self.set(name, value)

    def _is_schema_name(self, name: str) -> bool:
        prefix = name + PATH_SEPARATOR
        return any(path == name or path.startswith(prefix) for path in self.schema.definition.paths)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id}>"


_RESERVED_NAMES = frozenset(name for name in dir(Document) if not name.startswith("_")) | {"schema"}


def _check_path_names(schema: Schema, attrs: Mapping[str, Any]) -> None:
    reserved = _RESERVED_NAMES | set(attrs)
    clashes = sorted({
        name.split(PATH_SEPARATOR)[0]
        for name in schema.definition.paths
        if name.split(PATH_SEPARATOR)[0] in reserved
    })
    if clashes:
        raise ShadowStampError(
            f"Path names clash with document attributes: {', '.join(clashes)}",
            error_code=ErrorCode.SCHEMA_ERROR,
            details={"paths": clashes},
        )


def _nest(flat: Mapping[str, Any]) -> Dict[str, Any]:
    nested: Dict[str, Any] = {}
    for name, value in flat.items():
        *parents, leaf = name.split(PATH_SEPARATOR)
        target = nested
        for parent in parents:
            target = target.setdefault(parent, {})
        target[leaf] = value
    return nested


def model(name: str, schema: Schema) -> Type[Document]:
    """Compile ``schema`` into a Document subclass named ``name``.

    The schema's statics become static methods of the class. The schema
    definition is frozen from this point on.

    Raises:
        ShadowStampError: If a top-level path name clashes with a document
            method or attribute, since attribute access could not reach it

    Example:
        >>> Car = model("Car", Schema({"make": str}))
        >>> Car(make="Honda").make
        'Honda'
    """
    attrs: Dict[str, Any] = {
        "schema": schema,
        "model_name": name,
        "__module__": __name__,
    }
    for static_name, func in schema.statics.items():
        attrs[static_name] = staticmethod(func)

    _check_path_names(schema, attrs)
    schema.mark_compiled()
    return type(name, (Document,), attrs)
