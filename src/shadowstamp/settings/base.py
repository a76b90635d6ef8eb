from pydantic_settings import BaseSettings, SettingsConfigDict


class ShadowBaseSettings(BaseSettings):
    """Base class for shadowstamp settings.

    Values are read from keyword arguments first, then ``SHADOW_``-prefixed
    environment variables, then a local ``.env`` file, then code defaults.
    """
    model_config = SettingsConfigDict(
        env_prefix="SHADOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__"
    )
