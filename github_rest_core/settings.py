"""Application settings loaded from environment variables and .env file."""

from functools import lru_cache
from pathlib import Path

import httpx
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide defaults consumed by the REST client and resource calls."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_token: str | None = None
    github_api_host: str = "api.github.com"
    # Web host for html URLs; derived from github_api_host when unset
    github_web_host: str | None = None
    github_default_owner: str | None = None
    github_default_repo: str | None = None

    # Suppress "Fetching page N" style status messages
    github_no_status: bool = False
    # Skip the convenience keys added by shaping
    github_disable_pipeline_support: bool = False

    github_request_timeout: float = 30.0
    github_max_rate_limit_wait: float = 300.0
    github_max_transport_retries: int = 3
    github_cache_dir: Path | None = None

    @property
    def api_base_url(self) -> str:
        host = self.github_api_host.strip().rstrip("/")
        if host.startswith(("http://", "https://")):
            return host
        return f"https://{host}"

    @property
    def web_base_url(self) -> str:
        """Web root matching the API host.

        api.github.com maps to github.com; an Enterprise API root such as
        ghe.example.com/api/v3 maps to ghe.example.com.
        """
        if self.github_web_host:
            host = self.github_web_host.strip().rstrip("/")
            return host if host.startswith(("http://", "https://")) else f"https://{host}"
        url = httpx.URL(self.api_base_url)
        host = url.host
        if host.startswith("api."):
            host = host[len("api."):]
        port = f":{url.port}" if url.port else ""
        return f"{url.scheme}://{host}{port}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
