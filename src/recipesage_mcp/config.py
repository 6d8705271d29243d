"""Configuration settings for recipesage-mcp using pydantic-settings."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import field_validator
from pydantic_core import ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from recipesage_mcp.defaults import (
    DEFAULT_API_URL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOGIN_PATH,
    DEFAULT_REQUEST_TIMEOUT,
)
from recipesage_mcp.exceptions import ConfigError

CONFIG_DIR_NAME = "recipesage-mcp"


def get_config_paths() -> list[Path]:
    """Return candidate config file locations in lookup order."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    config_dir = Path(xdg_config) / CONFIG_DIR_NAME
    paths = [
        Path.cwd() / "rsmcp.yaml",
        config_dir / "config.yaml",
        config_dir / "accounts.json",
    ]
    explicit = os.environ.get("RSMCP_CONFIG_FILE")
    if explicit:
        paths.insert(0, Path(explicit))
    return paths


def find_config_file() -> Path | None:
    """Return the first existing config file, or None."""
    for path in get_config_paths():
        if path.exists():
            return path
    return None


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source that loads configuration from a YAML file.

    Looks for config file in the following order:
    1. RSMCP_CONFIG_FILE environment variable
    2. ./rsmcp.yaml (current directory)
    3. $XDG_CONFIG_HOME/recipesage-mcp/config.yaml (defaults to ~/.config)
    4. $XDG_CONFIG_HOME/recipesage-mcp/accounts.json

    JSON files are read with the same YAML parser.
    """

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML config."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        """Load and cache YAML config file."""
        if not hasattr(self, "_yaml_data"):
            self._yaml_data = self._read_yaml_file()
        return self._yaml_data

    def _read_yaml_file(self) -> dict[str, Any]:
        """Read YAML config from file with improved error messages."""
        path = find_config_file()
        if path is None:
            return {}

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            line_num = mark.line + 1 if mark else None
            col_num = mark.column + 1 if mark else None
            error_msg = getattr(e, "problem", None) or str(e)
            raise ConfigError(
                f"Invalid YAML syntax: {error_msg}",
                file_path=str(path),
                line=line_num,
                col=col_num,
            ) from e
        except PermissionError as e:
            raise ConfigError(
                "Cannot read config file: permission denied",
                file_path=str(path),
            ) from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file: {e}", file_path=str(path)) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError("Config file must contain a mapping at the top level", file_path=str(path))
        return data


def _parse_validation_error(error: ValidationError) -> str:
    """Convert Pydantic ValidationError to user-friendly message."""
    errors = error.errors()
    if not errors:
        return "Unknown validation error"

    err = errors[0]
    loc = err.get("loc", ())
    msg = err.get("msg", "")
    if err.get("type") == "missing" and loc:
        return f"Missing required field '{loc[-1]}'"
    if loc:
        field_name = ".".join(str(part) for part in loc)
        return f"Invalid value for '{field_name}': {msg}"
    return str(error)


class Settings(BaseSettings):
    """Application settings loaded from environment variables with RSMCP_ prefix.

    Multi-account configuration via YAML (or JSON) file:
        accounts:
          - id: "personal"
            email: "me@example.com"
            password: "secret"
            default: true
          - id: "family"
            email: "family@example.com"
            password: "secret"

    Accounts are kept as raw records here; AccountRegistry.load validates them
    so every account problem is reported the same way.
    """

    model_config = SettingsConfigDict(env_prefix="RSMCP_")

    accounts: list[dict[str, Any]] = []

    api_url: str = DEFAULT_API_URL
    login_path: str = DEFAULT_LOGIN_PATH
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("request_timeout")
    @classmethod
    def _validate_request_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("request_timeout must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {v!r}")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config."""
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
            dotenv_settings,
            file_secret_settings,
        )


def get_settings_eager() -> Settings:
    """Load settings with eager validation at startup.

    Fails fast when there is nowhere to read accounts from. Validation of the
    account records themselves is left to AccountRegistry.load.

    Raises:
        ConfigError: If no config file exists and no accounts are set through
            the environment, or if the file or a setting is invalid.
    """
    explicit = os.environ.get("RSMCP_CONFIG_FILE")
    if explicit and not Path(explicit).exists():
        raise ConfigError(f"Config file not found: {explicit}")

    try:
        settings = Settings()
    except ValidationError as e:
        raise ConfigError(_parse_validation_error(e)) from e

    if not settings.accounts and find_config_file() is None:
        expected = get_config_paths()[-2]
        raise ConfigError(
            f"Config file not found. Please create a config file at {expected} "
            "or point RSMCP_CONFIG_FILE at one."
        )
    return settings
