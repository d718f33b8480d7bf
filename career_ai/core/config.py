"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.

Env var names match the field names (case-insensitive), e.g. MONGO_URI,
JWT_SECRET, GEMINI_API_KEY, PORT.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "career_assessment"
    mongo_timeout_ms: int = 5000

    # JWT session cookie
    jwt_secret: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 7
    cookie_secure: bool = False

    # Gemini generative-language API
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_temperature: float = 0.7
    gemini_max_output_tokens: int = 6144
    gemini_timeout_seconds: float = 120.0

    # App
    port: int = 5000
    log_level: str = "INFO"
    debug: bool = False

    @property
    def gemini_generate_url(self) -> str:
        """Full generateContent endpoint for the configured model"""
        return f"{self.gemini_base_url.rstrip('/')}/models/{self.gemini_model}:generateContent"

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
