from enum import Enum


DEFAULT_FIELD_SUFFIX = "_lastModifiedDate"

# System keys every document schema carries, named the way mongoose names them.
DEFAULT_ID_KEY = "_id"
DEFAULT_DISCRIMINATOR_KEY = "__t"
DEFAULT_VERSION_KEY = "__v"

PATH_SEPARATOR = "."


class SerializationView(str, Enum):
    """Output views a document can be rendered to.

    Values:
        OBJECT: Plain nested-dict view (``Document.to_object``)
        JSON: JSON-encodable view (``Document.to_json``)
    """
    OBJECT = "object"
    JSON = "json"
