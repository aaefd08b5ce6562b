"""Application configuration using Pydantic Settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SEARCH_URL_TEMPLATES = [
    "https://www.gileq.com/dsr?q=",
    "https://search.searchalike.com/serp?q=",
    "https://uk.questtips.com/dsr?q=",
    "https://www.novafluxa.com/dsr?q=",
    "https://explorewebzone.com/dsr?q=",
    "https://www.astartex.com/dsr/?q=",
    "https://nexizonal.com/dsr?q=",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    debug: bool = False
    log_level: str = "INFO"
    json_logs: bool = False
    app_name: str = "Phrase Search Service"
    app_version: str = "0.1.0"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # API
    cors_origins: str = "http://localhost:3000"
    cors_allow_all: bool = False

    # Variation generation
    max_variations: int = Field(default=7, ge=1)  # Includes the original phrase

    # Link fanout
    fanout_policy: Literal["indexed", "cross_product"] = "indexed"
    search_url_templates: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SEARCH_URL_TEMPLATES)
    )

    # Synonym service
    synonym_api_base_url: str = "https://api.datamuse.com"
    synonym_timeout_seconds: float = 5.0
    synonym_max_retries: int = Field(default=2, ge=1)  # Total attempts per word
    synonym_lookup_timeout_seconds: float | None = 10.0  # Per-word budget incl. retries
    synonym_user_agent: str = "PhraseSearch/1.0"
    synonym_concurrent_lookups: bool = False
    synonym_lookup_batch_size: int = Field(default=8, ge=1)  # Max lookups in flight when concurrent

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string.

        Returns:
            List of allowed origins, or ["*"] if cors_allow_all is True.
        """
        if self.cors_allow_all:
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()
