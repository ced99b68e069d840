"""
LLM Configuration Layer (v1.0.0)
Provider-agnostic config for the stylist model (classification and look generation).

Environment Variables:
    - FASHION_AI_PROVIDER: "openrouter" | "openai" | "gemini" (default: openrouter)
    - FASHION_AI_MODEL: Override default model (optional)
    - FASHION_AI_FALLBACK_MODEL: Model used once when the primary call fails (optional)
"""
import logging
from enum import Enum
from dataclasses import dataclass
from typing import Optional

from fashion_ai.config.settings import get_settings, Settings

logger = logging.getLogger(__name__)


class LLMProvider(Enum):
    """Supported LLM providers."""
    OPENROUTER = "openrouter"
    OPENAI = "openai"
    GEMINI = "gemini"


# Default model per provider when FASHION_AI_MODEL is left at the OpenRouter default
PROVIDER_DEFAULT_MODELS = {
    LLMProvider.OPENROUTER: "openai/gpt-4o",
    LLMProvider.OPENAI: "gpt-4o",
    LLMProvider.GEMINI: "gemini-1.5-flash",
}


@dataclass
class ActiveLLMConfig:
    """Resolved configuration for the stylist model."""
    provider: LLMProvider
    model: str
    fallback_model: Optional[str]
    base_url: Optional[str]
    api_key: Optional[str]
    temperature: float
    max_tokens: int
    timeout: float
    referer: str
    title: str

    @classmethod
    def from_settings(cls, settings: Settings) -> "ActiveLLMConfig":
        try:
            provider = LLMProvider(settings.llm_provider)
        except ValueError:
            logger.warning(f"Unknown provider '{settings.llm_provider}', using openrouter")
            provider = LLMProvider.OPENROUTER

        model = settings.llm_model
        if provider != LLMProvider.OPENROUTER and model == PROVIDER_DEFAULT_MODELS[LLMProvider.OPENROUTER]:
            model = PROVIDER_DEFAULT_MODELS[provider]

        if provider == LLMProvider.GEMINI:
            api_key = settings.gemini_api_key
            base_url = None
        elif provider == LLMProvider.OPENAI:
            api_key = settings.ai_api_key
            base_url = None
        else:
            api_key = settings.ai_api_key
            base_url = settings.llm_base_url

        config = cls(
            provider=provider,
            model=model,
            fallback_model=settings.llm_fallback_model,
            base_url=base_url,
            api_key=api_key,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            timeout=settings.llm_timeout,
            referer=settings.app_referer,
            title=settings.app_title,
        )

        logger.info(f"LLM Config: provider={provider.value}, model={model}")
        return config

    def resolve_model(self, use_fallback: bool = False) -> str:
        if use_fallback and self.fallback_model:
            return self.fallback_model
        return self.model

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def is_gemini(self) -> bool:
        return self.provider == LLMProvider.GEMINI

    def to_dict(self) -> dict:
        return {
            "provider": self.provider.value,
            "model": self.model,
            "fallback_model": self.fallback_model,
            "base_url": self.base_url,
            "configured": self.is_configured(),
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }


_llm_config: Optional[ActiveLLMConfig] = None


def get_llm_config() -> ActiveLLMConfig:
    """Get active LLM configuration (singleton)."""
    global _llm_config
    if _llm_config is None:
        _llm_config = ActiveLLMConfig.from_settings(get_settings())
    return _llm_config


def reset_llm_config():
    """Reset config (for testing)."""
    global _llm_config
    _llm_config = None
