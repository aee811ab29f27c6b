"""Application configuration powered by Pydantic settings."""

from __future__ import annotations

from functools import lru_cache
from typing import cast

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    host: str = Field("0.0.0.0", alias="HOST")
    # Hosting platforms inject ``PORT``; a blank value falls back to the default.
    port: int = Field(5001, alias="PORT", ge=1, le=65535)
    search_api_url: str = Field(
        "https://ps-ig63.ifbus.de/api/search/1.1/rpc/search/search",
        alias="SEARCH_API_URL",
        description="Upstream RPC endpoint receiving the search envelope.",
    )
    login_url: str = Field(
        "https://ps-ig63.ifbus.de/auth/login/basic/",
        alias="LOGIN_URL",
        description="Upstream Basic-auth login endpoint issuing the session cookie.",
    )
    search_username: str = Field("igadmin", alias="SEARCH_USERNAME")
    search_password: str = Field("igadmin", alias="SEARCH_PASSWORD", repr=False)
    suggest_base_url: str = Field(
        "https://ducksearch.onrender.com",
        alias="SUGGEST_BASE_URL",
        description="Prefix concatenated with the relative display URL of each hit.",
    )
    allowed_origin: str = Field(
        "https://www.bing.com",
        alias="ALLOWED_ORIGIN",
        description="Single browser origin allowed to read suggestion responses.",
    )
    index_key: str = Field("multiplex", alias="INDEX_KEY")
    result_limit: int = Field(10, alias="RESULT_LIMIT", ge=1, le=100)
    upstream_timeout: float = Field(
        10.0,
        alias="UPSTREAM_TIMEOUT",
        ge=1.0,
        le=60.0,
        description="Timeout in seconds applied to the login and search calls.",
    )
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_by_name=True,
    )

    @field_validator("port", mode="before")
    @classmethod
    def ensure_port_has_value(cls, value: int | str | None) -> int | str:
        """Fallback to the default port when the variable is set but empty."""
        default_port = cast(int, cls.model_fields["port"].default)
        if value is None or (isinstance(value, str) and not value.strip()):
            return default_port
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]


__all__ = ["Settings", "get_settings"]
