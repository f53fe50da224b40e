"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Hypermedia API settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="XHN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Hypermedia API
    protocol: str = Field(default="HTTP/1.1", min_length=1, description="Transfer protocol")
    media_type: str = Field(
        default="application/naval+json", min_length=1, description="Hypermedia-aware media type"
    )

    # Server bridge
    port: str = Field(default="0", pattern=r"^[0-9]+$", description="Listening port ('0' = random)")
    host: str | None = Field(default=None, description="Listening host (None = any IPv4 address)")

    # Documents
    document_indent: int = Field(default=4, ge=0, le=8, description="Encoded document indentation")
    tagged_documents: bool = Field(default=False, description="Emit a 'kind' tag on every node")
    max_document_size: int = Field(
        default=1024 * 1024, gt=0, description="Max decoded document size (bytes)"
    )
    max_document_depth: int = Field(default=64, gt=0, description="Max decoded document nesting")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Tracing
    enable_tracing: bool = Field(default=False, description="Log spans for document operations")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
