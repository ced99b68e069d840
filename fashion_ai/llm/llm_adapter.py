"""
LLM Adapter (v1.0.0)
Unified chat client over OpenRouter/OpenAI (openai SDK) and Gemini.

Messages use the OpenAI chat format. Multimodal user content is a list of
{"type": "text"} and {"type": "image_url"} parts; Gemini receives the same
parts converted to text and PIL images.
"""
import io
import base64
import logging
from dataclasses import dataclass
from typing import Optional, List, Dict, Any

from fashion_ai.config.llm_config import get_llm_config, ActiveLLMConfig, LLMProvider
from fashion_ai.core.exceptions import LLMNotConfiguredError

logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Text reply from the provider."""
    content: str
    model: str
    total_tokens: int = 0


def decode_data_url(data_url: str) -> bytes:
    """Return the raw bytes of a data:<mime>;base64,<payload> URL."""
    header, _, payload = data_url.partition(",")
    if not header.startswith("data:") or ";base64" not in header:
        raise ValueError("Not a base64 data URL")
    return base64.b64decode(payload)


class LLMClient:
    """
    Chat client for the configured provider.

    Usage:
        client = LLMClient()
        response = await client.chat([{"role": "user", "content": "..."}])
    """

    def __init__(self, config: Optional[ActiveLLMConfig] = None):
        self.config = config or get_llm_config()
        self._openai_client = None
        self._current_model = None
        self._fallback_used = False

    @property
    def provider(self) -> str:
        return self.config.provider.value

    def _require_key(self):
        if not self.config.is_configured():
            raise LLMNotConfiguredError("AI API key not configured")

    def _get_openai_client(self):
        if self._openai_client is None:
            from openai import AsyncOpenAI

            kwargs = {"api_key": self.config.api_key, "timeout": self.config.timeout}
            if self.config.base_url:
                kwargs["base_url"] = self.config.base_url
            if self.config.provider == LLMProvider.OPENROUTER:
                kwargs["default_headers"] = {
                    "HTTP-Referer": self.config.referer,
                    "X-Title": self.config.title,
                }

            self._openai_client = AsyncOpenAI(**kwargs)
            logger.info(f"OpenAI-compatible client ready: provider={self.provider}, base_url={self.config.base_url}")
        return self._openai_client

    async def chat(self, messages: List[Dict[str, Any]]) -> LLMResponse:
        """Send chat messages and return the first choice's text."""
        self._require_key()

        model = self.config.resolve_model()
        self._current_model = model
        try:
            return await self._chat_impl(messages, model)
        except Exception as e:
            fallback = self.config.resolve_model(use_fallback=True)
            if fallback != model:
                logger.warning(f"Primary model failed ({e}), trying fallback {fallback}...")
                self._fallback_used = True
                self._current_model = fallback
                return await self._chat_impl(messages, fallback)
            raise

    async def _chat_impl(self, messages: List[Dict[str, Any]], model: str) -> LLMResponse:
        if self.config.is_gemini():
            return await self._chat_gemini(messages, model)
        return await self._chat_openai(messages, model)

    async def _chat_openai(self, messages: List[Dict[str, Any]], model: str) -> LLMResponse:
        """Generate using an OpenAI-compatible endpoint."""
        client = self._get_openai_client()

        response = await client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=self.config.temperature,
            max_tokens=self.config.max_tokens,
        )

        if not response.choices:
            raise ValueError("Empty response from model")

        content = response.choices[0].message.content or ""
        tokens = response.usage.total_tokens if response.usage else 0
        return LLMResponse(content=content, model=response.model or model, total_tokens=tokens)

    async def _chat_gemini(self, messages: List[Dict[str, Any]], model: str) -> LLMResponse:
        """Generate using Gemini."""
        import google.generativeai as genai

        genai.configure(api_key=self.config.api_key)

        system_parts = [m["content"] for m in messages if m["role"] == "system"]
        contents = []
        for message in messages:
            if message["role"] != "system":
                contents.extend(self._to_gemini_parts(message["content"]))

        gemini_model = genai.GenerativeModel(
            model,
            system_instruction="\n\n".join(system_parts) or None,
        )
        response = await gemini_model.generate_content_async(
            contents,
            generation_config={
                "temperature": self.config.temperature,
                "max_output_tokens": self.config.max_tokens,
            },
        )

        usage = getattr(response, "usage_metadata", None)
        tokens = usage.total_token_count if usage else 0
        return LLMResponse(content=response.text, model=model, total_tokens=tokens)

    def _to_gemini_parts(self, content) -> list:
        if isinstance(content, str):
            return [content]

        from PIL import Image

        parts = []
        for part in content:
            if part.get("type") == "text":
                parts.append(part["text"])
            elif part.get("type") == "image_url":
                url = part["image_url"]["url"]
                if url.startswith("data:"):
                    parts.append(Image.open(io.BytesIO(decode_data_url(url))))
                else:
                    parts.append(f"Imagem: {url}")
        return parts

    def get_status(self) -> dict:
        """Get current client status."""
        return {
            "provider": self.provider,
            "model": self._current_model or self.config.model,
            "fallback_used": self._fallback_used,
            "configured": self.config.is_configured(),
        }


# ==================== SINGLETON INSTANCE ====================

_llm_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get the shared LLM client."""
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient()
    return _llm_client


def reset_llm_client():
    """Reset the client (for testing)."""
    global _llm_client
    _llm_client = None
