"""Unit tests for configuration defaults and overrides."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from rdap_bootstrap import __version__
from rdap_bootstrap.config import (
    DEFAULT_BASE_URL,
    DEFAULT_CACHE_DIR,
    EXPERIMENTAL_BASE_URL,
    CacheSettings,
    HttpSettings,
    Settings,
)


class TestDefaults:
    def test_bootstrap_urls(self) -> None:
        settings = Settings()
        assert settings.bootstrap.base_url == DEFAULT_BASE_URL == "https://data.iana.org/rdap/"
        assert settings.bootstrap.service_provider_base_url == EXPERIMENTAL_BASE_URL

    def test_cache_defaults(self) -> None:
        settings = CacheSettings()
        assert settings.backend == "memory"
        assert settings.timeout_hours == 24.0
        assert settings.dir == DEFAULT_CACHE_DIR

    def test_default_cache_dir_under_home(self) -> None:
        assert Path(DEFAULT_CACHE_DIR) == Path.home() / ".rdap-bootstrap"

    def test_user_agent_carries_version(self) -> None:
        assert HttpSettings().user_agent == f"rdap-bootstrap/{__version__}"


class TestEnvironmentOverrides:
    def test_nested_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RDAP_BOOTSTRAP__CACHE__BACKEND", "disk")
        monkeypatch.setenv("RDAP_BOOTSTRAP__CACHE__TIMEOUT_HOURS", "1.5")
        settings = Settings()
        assert settings.cache.backend == "disk"
        assert settings.cache.timeout_hours == 1.5

    def test_constructor_beats_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RDAP_BOOTSTRAP__HTTP__VERIFY_TLS", "false")
        settings = Settings(http={"verify_tls": True})  # type: ignore[arg-type]
        assert settings.http.verify_tls is True


class TestConfigValidation:
    def test_wrong_type_raises_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            Settings(http={"timeout_seconds": "soon"})  # type: ignore[arg-type]

    def test_unknown_backend_raises_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            CacheSettings(backend="redis")  # type: ignore[arg-type]

    def test_unknown_top_level_field_raises_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            Settings(completely_unknown_field="oops")  # type: ignore[call-arg]

    def test_unknown_nested_field_raises_validation_error(self) -> None:
        """A typo like 'timout_hours' is caught rather than silently ignored."""
        with pytest.raises(ValidationError):
            CacheSettings(timout_hours=1)  # type: ignore[call-arg]
