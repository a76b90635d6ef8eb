"""Host protocol definitions.

This module defines the interface a document-modeling library must provide
for the shadow-field augmentor to attach to it. The augmentor never depends
on a concrete host; it only calls the slots declared here.
"""

from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

from shadowstamp.constants import SerializationView
from shadowstamp.types.schema import SchemaDefinition


# A pre-save hook receives the document being saved. Returning normally is
# the completion signal; raising aborts the save.
PreSaveHook = Callable[["TrackedDocument"], None]

# An output transform receives the document and the rendered view and
# returns the view to emit.
OutputTransform = Callable[["TrackedDocument", Dict[str, Any]], Dict[str, Any]]


@runtime_checkable
class SchemaHost(Protocol):
    """Protocol for the schema object a plugin is applied to.

    The protocol is marked as runtime_checkable to allow isinstance()
    checks at runtime, which is useful for validation and testing.
    """

    @property
    def definition(self) -> SchemaDefinition:
        """The current schema definition."""
        ...

    def replace_definition(self, definition: SchemaDefinition) -> None:
        """Swap in an augmented definition.

        Hosts call this only during configuration, before any document
        of the schema exists.
        """
        ...

    def add_pre_save(self, hook: PreSaveHook) -> None:
        """Register a hook run, in registration order, before each save."""
        ...

    def set_transform(self, view: SerializationView, transform: OutputTransform) -> None:
        """Register the output transform for a serialization view."""
        ...

    def add_static(self, name: str, func: Callable[..., Any]) -> None:
        """Expose ``func`` as a schema-level static function."""
        ...


@runtime_checkable
class TrackedDocument(Protocol):
    """Protocol for a document instance with change tracking."""

    @property
    def schema(self) -> SchemaHost:
        ...

    @property
    def is_new(self) -> bool:
        """True until the document has been saved once."""
        ...

    def modified_paths(self) -> List[str]:
        """Paths changed since the last save, including parents of dotted paths."""
        ...

    def defaulted_paths(self) -> List[str]:
        """Paths holding a schema default that were never explicitly set."""
        ...

    def get(self, path: str) -> Optional[Any]:
        ...

    def set(self, path: str, value: Any) -> None:
        """Assign a value and record the path as modified."""
        ...
