"""
Configuration management for the plan assistant.
Gemini connection details, key storage and server options.
"""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Gemini Configuration
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta/models"
    gemini_model: str = "gemini-2.5-flash-preview-05-20"
    request_timeout: float = 120.0

    # Key storage (empty path keeps the key in memory only)
    api_key_file: Optional[str] = "data/gemini_api_key.json"
    api_key_prefix: str = "AIza"

    # Server Configuration
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = True

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()


def get_gemini_url() -> str:
    """Build the generateContent endpoint for the configured model."""
    base = settings.gemini_base_url.rstrip("/")
    return f"{base}/{settings.gemini_model}:generateContent"
