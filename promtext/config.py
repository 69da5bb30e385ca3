"""Configuration management using pydantic-settings."""

from pathlib import Path
from typing import Any, Literal, Tuple, Type

import yaml
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


def load_yaml_config(config_path: Path | None = None) -> dict[str, Any]:
    """
    Load configuration from YAML file.

    Priority:
    1. Explicitly provided config_path
    2. ~/.promtext/config.yaml (default location)
    3. Empty dict if no file exists

    Args:
        config_path: Optional path to config file

    Returns:
        Dictionary of configuration values (flattened from nested YAML)
    """
    if config_path is None:
        config_path = Path.home() / ".promtext" / "config.yaml"

    if not config_path.exists():
        return {}

    try:
        with open(config_path) as f:
            yaml_data = yaml.safe_load(f) or {}

        flattened = {}

        if "logging" in yaml_data:
            logging = yaml_data["logging"]
            if "level" in logging:
                flattened["log_level"] = logging["level"]
            if "format" in logging:
                flattened["log_format"] = logging["format"]

        if "limits" in yaml_data:
            limits = yaml_data["limits"]
            if "max_input_bytes" in limits:
                flattened["max_input_bytes"] = limits["max_input_bytes"]

        if "output" in yaml_data:
            output = yaml_data["output"]
            if "json_indent" in output:
                flattened["json_indent"] = output["json_indent"]
            if "sort_families" in output:
                flattened["sort_families"] = output["sort_families"]

        return flattened

    except Exception as e:
        import warnings

        warnings.warn(f"Failed to load config from {config_path}: {e}")
        return {}


_config_path: Path | None = None


class YamlSettingsSource(PydanticBaseSettingsSource):
    """
    Custom settings source that loads configuration from YAML file.

    This allows YAML config to be loaded with proper priority in the settings chain.
    """

    def get_field_value(self, field: Any, field_name: str) -> Tuple[Any, str, bool]:
        """Not used since we override __call__."""
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        return load_yaml_config(_config_path)


class Settings(BaseSettings):
    """
    promtext configuration settings.

    Configuration priority (highest to lowest):
    1. Environment variables (e.g., LOG_LEVEL=DEBUG)
    2. YAML configuration file (~/.promtext/config.yaml)
    3. Default values defined in this class
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text", description="Log format"
    )

    max_input_bytes: int = Field(
        default=64 * 1024 * 1024,
        ge=1,
        description="Largest exposition payload the CLI will read",
    )

    json_indent: int = Field(
        default=2, ge=0, le=8, description="Indentation for JSON output"
    )
    sort_families: bool = Field(
        default=False,
        description="Sort CLI output by metric family name",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize settings sources priority.

        Priority order (highest to lowest):
        1. Explicit kwargs (init_settings) - for testing and programmatic config
        2. Environment variables
        3. YAML configuration file
        4. .env file
        5. Field defaults
        """
        return (
            init_settings,
            env_settings,
            YamlSettingsSource(settings_cls),
            dotenv_settings,
        )


_settings: Settings | None = None


def get_settings(config_path: Path | None = None, reload: bool = False) -> Settings:
    """
    Get global settings instance.

    Configuration loading order (highest to lowest priority):
    1. Environment variables (e.g., MAX_INPUT_BYTES=1048576)
    2. YAML configuration file (~/.promtext/config.yaml)
    3. .env file
    4. Default values defined in Settings class

    Args:
        config_path: Optional path to YAML config file (defaults to ~/.promtext/config.yaml)
        reload: If True, force reload settings (useful for testing)

    Returns:
        Settings instance with merged configuration
    """
    global _settings, _config_path
    if _settings is None or reload:
        _config_path = config_path

        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings, _config_path
    _settings = None
    _config_path = None
