"""Configuration management for the schema linter.

Settings come from environment variables (prefix ``GQLINT_``), an optional
``.env`` file and an optional YAML config file. Values given explicitly on
the command line take precedence over all of them.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml

OutputFormat = Literal["text", "json", "yaml", "table"]


class ConfigError(Exception):
    """Raised when a configuration file cannot be loaded."""

    pass


class LinterSettings(BaseSettings):
    """Schema linter configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GQLINT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "testing", "production"] = Field(
        default="development", description="Application environment"
    )

    # Rule selection
    rules: list[str] = Field(
        default_factory=list,
        description="Rule names to run (empty runs every registered rule)",
    )
    custom_rule_paths: list[str] = Field(
        default_factory=list,
        description="Directories containing custom rule modules",
    )

    # Execution
    parallel: bool = Field(
        default=False, description="Run rules concurrently on worker threads"
    )
    validate_sdl: bool = Field(
        default=True, description="Run SDL validation before linting"
    )

    # Output
    output_format: OutputFormat = Field(default="text", description="Output format")
    output_file: str | None = Field(
        default=None, description="Write results to this file instead of stdout"
    )

    # Logging
    log_level: str = Field(default="WARNING", description="Log level")
    json_logs: bool = Field(default=False, description="Enable JSON formatted logs")

    @field_validator("rules", "custom_rule_paths", mode="before")
    @classmethod
    def _split_comma_separated(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level '{value}'")
        return level

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"


def load_settings(
    config_file: str | Path | None = None, **overrides: Any
) -> LinterSettings:
    """Build settings from the environment, a YAML config file and overrides.

    Args:
        config_file: Optional YAML file with setting names as keys
        **overrides: Explicit values; ``None`` values are ignored

    Returns:
        The merged settings

    Raises:
        ConfigError: If the file is unreadable, not a mapping or has invalid values
    """
    values: dict[str, Any] = {}

    if config_file is not None:
        path = Path(config_file)
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot load config file {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        values.update({key.replace("-", "_"): value for key, value in data.items()})

    values.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return LinterSettings(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
