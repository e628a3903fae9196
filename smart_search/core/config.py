# smart_search/core/config.py

from functools import lru_cache
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    app_name: str = Field(default="Smart Movie Search", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Log level for the smart_search logger")

    # TMDB API
    tmdb_api_key: str = Field(default="", description="TMDB API Key")
    tmdb_access_token: Optional[str] = Field(default=None, description="TMDB Access Token")
    tmdb_base_url: str = Field(default="https://api.themoviedb.org/3", description="TMDB API URL")
    tmdb_image_base_url: str = Field(default="https://image.tmdb.org/t/p/", description="TMDB image URL")
    tmdb_timeout: float = Field(default=10.0, description="Request timeout in seconds")

    # Search session
    debounce_delay_ms: int = Field(default=500, ge=0, description="Keystroke debounce delay (ms)")
    session_ttl: float = Field(default=1800.0, gt=0, description="Idle seconds before a search session is closed")
    session_sweep_interval: float = Field(default=60.0, gt=0, description="Seconds between idle session sweeps")

    @property
    def tmdb_headers(self) -> dict[str, str]:
        """Headers attached to every TMDB request"""
        headers = {"Accept": "application/json"}
        if self.tmdb_access_token:
            headers["Authorization"] = f"Bearer {self.tmdb_access_token}"
        return headers

    @property
    def debounce_delay(self) -> float:
        return self.debounce_delay_ms / 1000


@lru_cache()
def get_settings() -> Settings:
    return Settings()
