"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Constructor arguments
  2. Environment variables  (RDAP_BOOTSTRAP__CACHE__BACKEND=disk)
  3. rdap-bootstrap.yaml    (searched in cwd, then the user config dir)
  4. Hardcoded defaults

The config file is optional; every field has a default.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from rdap_bootstrap import __version__

DEFAULT_BASE_URL = "https://data.iana.org/rdap/"

# No IANA registry exists for service provider tags yet; an unofficial one is
# published here and used whenever base_url is left at the IANA default.
EXPERIMENTAL_BASE_URL = "https://www.openrdap.org/rdap/"

DEFAULT_CACHE_DIR = str(Path.home() / ".rdap-bootstrap")

_CONFIG_FILENAME = "rdap-bootstrap.yaml"


def _find_config_file() -> str | None:
    """Return the path of the first rdap-bootstrap.yaml found, or None."""
    candidates = [
        Path(_CONFIG_FILENAME),
        Path(platformdirs.user_config_dir("rdap-bootstrap")) / _CONFIG_FILENAME,
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class BootstrapSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    base_url: str = DEFAULT_BASE_URL
    service_provider_base_url: str = EXPERIMENTAL_BASE_URL


class HttpSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    timeout_seconds: float = 30.0
    verify_tls: bool = True
    user_agent: str = f"rdap-bootstrap/{__version__}"


class CacheSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    backend: Literal["memory", "disk"] = "memory"
    dir: str = DEFAULT_CACHE_DIR
    timeout_hours: float = 24.0


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: RDAP_BOOTSTRAP__HTTP__VERIFY_TLS=false
        env_prefix="RDAP_BOOTSTRAP__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    bootstrap: BootstrapSettings = BootstrapSettings()
    http: HttpSettings = HttpSettings()
    cache: CacheSettings = CacheSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
