"""
Settings Module (v1.0.0)
Centralized configuration from environment variables.
"""
import os
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


DEFAULT_OPENROUTER_URL = "https://openrouter.ai/api/v1"


@dataclass
class Settings:
    """Application settings from environment variables."""

    # API Keys
    ai_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    openweather_api_key: Optional[str] = None

    # LLM Configuration
    llm_provider: str = "openrouter"
    llm_base_url: str = DEFAULT_OPENROUTER_URL
    llm_model: str = "openai/gpt-4o"
    llm_fallback_model: Optional[str] = None
    llm_temperature: float = 0.7
    llm_max_tokens: int = 1000
    llm_timeout: float = 60.0

    # OpenRouter attribution headers
    app_referer: str = "http://localhost:8000"
    app_title: str = "Fashion AI Stylist"

    # Runtime
    environment: str = "production"
    max_upload_mb: int = 10
    logging_enabled: bool = True
    logs_dir: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        fallback_model = os.getenv("FASHION_AI_FALLBACK_MODEL") or None

        return cls(
            # API Keys
            ai_api_key=os.getenv("AI_API_KEY") or os.getenv("OPENROUTER_API_KEY"),
            gemini_api_key=os.getenv("GEMINI_API_KEY"),
            openweather_api_key=os.getenv("OPENWEATHER_API_KEY"),

            # LLM Configuration
            llm_provider=os.getenv("FASHION_AI_PROVIDER", "openrouter").lower(),
            llm_base_url=os.getenv("FASHION_AI_BASE_URL", DEFAULT_OPENROUTER_URL),
            llm_model=os.getenv("FASHION_AI_MODEL", "openai/gpt-4o"),
            llm_fallback_model=fallback_model,
            llm_temperature=float(os.getenv("FASHION_AI_TEMPERATURE", "0.7")),
            llm_max_tokens=int(os.getenv("FASHION_AI_MAX_TOKENS", "1000")),
            llm_timeout=float(os.getenv("FASHION_AI_TIMEOUT", "60")),

            app_referer=os.getenv("FASHION_AI_REFERER", "http://localhost:8000"),
            app_title=os.getenv("FASHION_AI_TITLE", "Fashion AI Stylist"),

            # Runtime
            environment=os.getenv("FASHION_AI_ENV", "production").lower(),
            max_upload_mb=int(os.getenv("FASHION_AI_MAX_UPLOAD_MB", "10")),
            logging_enabled=os.getenv("FASHION_AI_LOGGING_ENABLED", "true").lower() == "true",
            logs_dir=os.getenv("FASHION_AI_LOGS_DIR") or None,
        )

    def has_ai_key(self) -> bool:
        """Check if the OpenAI-compatible API key is configured."""
        return bool(self.ai_api_key)

    def has_gemini(self) -> bool:
        """Check if Gemini API key is configured."""
        return bool(self.gemini_api_key)

    def has_weather(self) -> bool:
        return bool(self.openweather_api_key)

    def is_development(self) -> bool:
        return self.environment == "development"

    def to_dict(self) -> dict:
        """Export settings as dict (without sensitive keys)."""
        return {
            "llm_provider": self.llm_provider,
            "llm_model": self.llm_model,
            "llm_fallback_model": self.llm_fallback_model,
            "environment": self.environment,
            "ai_key_configured": self.has_ai_key(),
            "gemini_configured": self.has_gemini(),
            "weather_configured": self.has_weather(),
        }


def get_settings() -> Settings:
    """Get application settings (cached singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
        logger.info(f"Settings loaded: {_settings.to_dict()}")
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from environment."""
    global _settings
    _settings = Settings.from_env()
    logger.info(f"Settings reloaded: {_settings.to_dict()}")
    return _settings


# Singleton instance
_settings: Optional[Settings] = None
