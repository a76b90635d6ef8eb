from typing import Any, ClassVar, Dict, List, Mapping, Optional

from pydantic import Field, ValidationError, field_validator

from shadowstamp.common.exceptions import ErrorCode, configuration_error
from shadowstamp.constants import DEFAULT_FIELD_SUFFIX, PATH_SEPARATOR
from .base import ShadowBaseSettings


class ShadowFieldSettings(ShadowBaseSettings):
    """Configuration of one shadow-field augmentation.

    Every application of the plugin gets its own instance; the option names
    accepted by :meth:`from_options` are the camelCase plugin options
    (``fieldSuffix``, ``purgeFromJSON`` ...) as well as the
    snake_case field names.
    """

    OPTION_ALIASES: ClassVar[Dict[str, str]] = {
        "fieldSuffix": "field_suffix",
        "purgeFromJSON": "purge_from_json",
        "purgeFromObject": "purge_from_object",
        "overwrite": "overwrite",
        "omittedFields": "omitted_fields",
        "select": "select",
        "stampDefaults": "stamp_defaults",
    }

    field_suffix: str = Field(
        default=DEFAULT_FIELD_SUFFIX,
        description="Suffix appended to a base path to name its shadow field"
    )
    purge_from_json: bool = Field(
        default=False,
        description="Remove shadow fields from the JSON view of a document"
    )
    purge_from_object: bool = Field(
        default=False,
        description="Remove shadow fields from the plain-object view of a document"
    )
    overwrite: bool = Field(
        default=True,
        description="Refresh a shadow field on save even if it was explicitly set in the same save"
    )
    omitted_fields: List[str] = Field(
        default_factory=list,
        description="Paths that never get a shadow field. System keys are always omitted."
    )
    select: Optional[bool] = Field(
        default=None,
        description="Default-visibility flag given to every derived shadow field"
    )
    stamp_defaults: bool = Field(
        default=False,
        description="Stamp shadow fields of paths that only hold a schema default on first save"
    )

    @field_validator("field_suffix")
    @classmethod
    def validate_field_suffix(cls, v: str) -> str:
        """Reject suffixes that cannot name a distinct sibling path."""
        if not v:
            raise ValueError("field_suffix must be a non-empty string")
        if PATH_SEPARATOR in v:
            raise ValueError(
                f"field_suffix '{v}' must not contain the path separator '{PATH_SEPARATOR}'"
            )
        return v

    @field_validator("omitted_fields", mode="before")
    @classmethod
    def normalize_omitted_fields(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        if isinstance(v, (set, frozenset)):
            return sorted(v)
        return v

    @field_validator("omitted_fields")
    @classmethod
    def dedupe_omitted_fields(cls, v: List[str]) -> List[str]:
        return list(dict.fromkeys(v))

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> "ShadowFieldSettings":
        """Build settings from plugin options.

        Args:
            options: Mapping using either the camelCase option names or the
                snake_case field names. ``None`` means all defaults.

        Returns:
            A validated settings instance

        Raises:
            ShadowStampError: If an option is unknown or a value is invalid

        Example:
            >>> ShadowFieldSettings.from_options({"fieldSuffix": "_lastModified"}).field_suffix
            '_lastModified'
        """
        kwargs: Dict[str, Any] = {}
        for key, value in (options or {}).items():
            name = cls.OPTION_ALIASES.get(key, key)
            if name not in cls.model_fields:
                raise configuration_error(
                    f"Unknown shadow field option '{key}'. "
                    f"Available options: {', '.join(sorted(cls.OPTION_ALIASES))}",
                    config_key=key,
                    error_code=ErrorCode.UNKNOWN_OPTION,
                )
            kwargs[name] = value

        try:
            return cls(**kwargs)
        except ValidationError as exc:
            raise configuration_error(
                f"Invalid shadow field options: {exc.error_count()} error(s)",
                details={"errors": [err["msg"] for err in exc.errors()]},
                cause=exc,
            ) from exc

    def omitted_paths(self, system_keys: List[str]) -> List[str]:
        """Return user omissions merged with the schema's system keys."""
        return list(dict.fromkeys([*self.omitted_fields, *system_keys]))
