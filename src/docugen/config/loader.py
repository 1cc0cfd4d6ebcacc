"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (DOCUGEN__SECTION__KEY)
3. Legacy environment variables (GROQ_API_KEY, GITHUB_TOKEN, GITHUB_REPO,
   PR_NUMBER, PORT), read from the process environment and from .env
4. Config file (--config path, else ./docugen.yaml)
5. Global config (~/.config/docugen/config.yaml)
6. Built-in defaults (lowest priority)
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from dotenv import dotenv_values
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from docugen.config.constants import CONFIG_FILENAME, ENV_PREFIX
from docugen.config.models import (
    DocuGenConfig,
    GenerationConfig,
    GitHubConfig,
    LoggingConfig,
    ServerConfig,
)
from docugen.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/docugen/config.yaml").expanduser()

# Legacy variable name -> (section, key)
LEGACY_ENV_VARS: dict[str, tuple[str, str]] = {
    "GROQ_API_KEY": ("generation", "api_key"),
    "GITHUB_TOKEN": ("github", "token"),
    "GITHUB_REPO": ("github", "repo"),
    "PR_NUMBER": ("github", "pr_number"),
    "PORT": ("server", "port"),
}


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _legacy_overrides(environ: Mapping[str, str | None]) -> dict[str, Any]:
    """Map legacy flat env vars onto the sectioned config layout."""
    overrides: dict[str, Any] = {}
    for var, (section, key) in LEGACY_ENV_VARS.items():
        value = environ.get(var)
        if value:
            overrides.setdefault(section, {})[key] = value
    return overrides


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class with instance-based YAML source (thread-safe)."""

    class DocuGenSettings(BaseSettings):
        """Root config. Env vars: DOCUGEN__LOGGING__LEVEL, DOCUGEN__SERVER__PORT, etc."""

        model_config = SettingsConfigDict(
            env_prefix=ENV_PREFIX,
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        server: ServerConfig = ServerConfig()
        generation: GenerationConfig = GenerationConfig()
        github: GitHubConfig = GitHubConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml + legacy env
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return DocuGenSettings


def load_config(
    config_path: Path | None = None,
    *,
    env_file: Path | None = None,
    **kwargs: Any,
) -> DocuGenConfig:
    """Load config: defaults < global YAML < config YAML < legacy env < env vars < kwargs.

    Args:
        config_path: Explicit YAML config file. Must exist when given.
                     Defaults to ./docugen.yaml if present.
        env_file: .env file consulted for legacy variables.
                  Defaults to ./.env if present.
        **kwargs: Override values (highest precedence).

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On a missing explicit config file, invalid YAML syntax,
            or validation errors.
    """
    if config_path is not None:
        if not config_path.exists():
            raise ConfigError.file_not_found(str(config_path))
    else:
        config_path = Path.cwd() / CONFIG_FILENAME

    yaml_config = _deep_merge(_load_yaml(GLOBAL_CONFIG_PATH), _load_yaml(config_path))

    env_file = env_file or Path.cwd() / ".env"
    environ: dict[str, str | None] = dict(dotenv_values(env_file)) if env_file.exists() else {}
    environ.update(os.environ)
    yaml_config = _deep_merge(yaml_config, _legacy_overrides(environ))

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
    return DocuGenConfig.model_validate(settings.model_dump())
