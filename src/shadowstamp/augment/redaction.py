"""Removal of shadow fields from rendered document views."""

from typing import Any, Dict, Mapping

from shadowstamp.protocols.host import TrackedDocument


def purge_shadow_fields(output: Mapping[str, Any], suffix: str) -> Dict[str, Any]:
    """Return a copy of ``output`` without keys containing ``suffix``.

    Nested mappings are purged recursively, since nested paths render as
    nested objects.

    Example:
        >>> purge_shadow_fields({"make": "Honda", "make_lastModified": 1}, "_lastModified")
        {'make': 'Honda'}
    """
    purged: Dict[str, Any] = {}
    for key, value in output.items():
        if suffix in key:
            continue
        if isinstance(value, Mapping):
            value = purge_shadow_fields(value, suffix)
        purged[key] = value
    return purged


class ShadowFieldPurger:
    """Output transform removing shadow fields from a document view."""

    def __init__(self, suffix: str):
        self.suffix = suffix

    def __call__(self, document: TrackedDocument, output: Dict[str, Any]) -> Dict[str, Any]:
        return purge_shadow_fields(output, self.suffix)
