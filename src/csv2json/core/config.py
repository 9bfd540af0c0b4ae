# src/csv2json/core/config.py
"""
Stream configuration and settings loading.

Uses Pydantic for validation and Dynaconf for multi-source loading.
StreamConfig is frozen (immutable) after construction and is shared
read-only by both pipeline stages.
"""

from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, Field, ValidationError, field_validator

from csv2json.contracts.enums import Separator
from csv2json.contracts.errors import ConfigError

ENVVAR_PREFIX = "CSV2JSON"


class StreamConfig(BaseModel):
    """Delimiter and formatting choices for one pipeline run.

    Example YAML:
        separator: semicolon
        pretty: true
        encoding: utf-8
    """

    model_config = {"frozen": True, "extra": "forbid"}

    separator: Separator = Field(
        default=Separator.COMMA,
        description="Field delimiter of the input file",
    )
    pretty: bool = Field(
        default=False,
        description="Tab-indented, one object per array element instead of a single line",
    )
    sort_keys: bool = Field(
        default=False,
        description="Sort object keys alphabetically instead of keeping header order",
    )
    encoding: str = Field(
        default="utf-8",
        description="Encoding of both the input and the JSON output",
    )
    channel_capacity: int = Field(
        default=1,
        ge=1,
        description="Records that may wait between parser and writer before the parser blocks",
    )

    @field_validator("separator", mode="before")
    @classmethod
    def normalize_separator(cls, v: Any) -> Any:
        """Accept separator names case-insensitively."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        import codecs

        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"unknown encoding: {v}") from e
        return v

    @property
    def delimiter(self) -> str:
        return self.separator.delimiter

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> Self:
        """Create config from dict with clear error on validation failure.

        Raises:
            ConfigError: If configuration is invalid.
        """
        try:
            return cls.model_validate(config)
        except ValidationError as e:
            raise ConfigError(f"Invalid stream configuration: {e}") from e


def load_settings(settings_path: Path | None = None, **overrides: Any) -> StreamConfig:
    """Load stream configuration from file, environment and overrides.

    Precedence, highest first:
    1. Explicit overrides (CLI flags); None values are ignored
    2. Environment variables (CSV2JSON_PRETTY=true, CSV2JSON_SEPARATOR=tab)
    3. Settings file (YAML, TOML or JSON)
    4. Defaults from StreamConfig

    Args:
        settings_path: Optional path to a settings file.
        **overrides: Field values that win over every other source.

    Returns:
        Validated StreamConfig instance.

    Raises:
        FileNotFoundError: If settings_path is given but does not exist.
        ConfigError: If the merged configuration fails validation.
    """
    from dynaconf import Dynaconf

    # Explicit check for file existence (Dynaconf silently accepts missing files)
    if settings_path is not None and not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix=ENVVAR_PREFIX,
        settings_files=[str(settings_path)] if settings_path is not None else [],
        environments=False,
        load_dotenv=False,  # the CLI loads .env itself
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    # Also filter out internal Dynaconf settings
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}
    raw_config.update({k: v for k, v in overrides.items() if v is not None})

    return StreamConfig.from_dict(raw_config)
