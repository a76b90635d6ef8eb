"""Protocols describing what the augmentor needs from its host."""

from shadowstamp.protocols.host import OutputTransform, PreSaveHook, SchemaHost, TrackedDocument

__all__ = [
    "SchemaHost",
    "TrackedDocument",
    "PreSaveHook",
    "OutputTransform",
]
