"""Application settings and configuration management."""

from functools import lru_cache
from typing import List

from pydantic import Field, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""
    
    # Application
    app_name: str = Field(default="Lexicon Search")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    
    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    workers: int = Field(default=1)
    
    # Lexicon store
    db_path: str = Field(default="dictionary.db")
    
    # Search Configuration
    default_limit: int = Field(default=20, ge=1)
    max_limit: int = Field(default=200, ge=1)
    max_query_length: int = Field(default=100, ge=1)
    preview_max_length: int = Field(default=100, ge=1)
    
    # Fuzzy tier
    min_fuzzy_query_length: int = Field(default=3, ge=1)
    max_fuzzy_distance: int = Field(default=2, ge=1)
    fuzzy_prefix_candidates: int = Field(default=1000, ge=0)
    fuzzy_suffix_candidates: int = Field(default=500, ge=0)
    
    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")
    
    # CORS
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080", "http://localhost:8000"]
    )
    
    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra environment variables
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
