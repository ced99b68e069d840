"""
Fashion AI Client (v1.0.0)
Prompt formatting and reply parsing for clothing classification and look generation.

The model is an opaque collaborator: requests are chat messages, replies are
free text expected to hold a JSON object. Missing or empty fields are filled
with defaults so callers always receive a complete record.
"""
import json
import math
import time
import uuid
import logging
from typing import Any, Dict, List, Optional

from fashion_ai.core.exceptions import (
    AnalysisError,
    LLMNotConfiguredError,
    LookGenerationError,
)
from fashion_ai.core.models import ClassificationResult, ClothingItem, LookContext, LookSuggestion
from fashion_ai.llm.llm_adapter import LLMClient, LLMResponse, get_llm_client
from fashion_ai.llm.prompts import (
    CLASSIFICATION_SYSTEM_PROMPT,
    CLASSIFICATION_USER_PROMPT,
    LOOK_CONTEXT_TEMPLATE,
    LOOK_SYSTEM_PROMPT,
    LOOK_USER_TEMPLATE,
)
from fashion_ai.observability import estimate_cost, increment_request, log_request

logger = logging.getLogger(__name__)


ANALYSIS_FAILED_MESSAGE = "Falha na análise da imagem. Tente novamente."
LOOK_FAILED_MESSAGE = "Falha na geração de sugestão. Tente novamente."


# ==================== REPLY PARSING ====================

def extract_json(text: Optional[str]) -> Dict[str, Any]:
    """
    Parse a JSON object from model text, handling markdown code blocks.

    Raises:
        ValueError: If the text holds no JSON object
    """
    if not text:
        raise ValueError("Empty model reply")

    text = text.strip()

    # Remove markdown code blocks
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0]
    elif "```" in text:
        text = text.split("```")[1].split("```")[0]

    data = json.loads(text.strip())
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def _as_list(value) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None and str(v).strip()]
    return []


def _as_confidence(value, default: float) -> float:
    try:
        confidence = float(value)
    except (TypeError, ValueError):
        return default
    if not confidence or not math.isfinite(confidence):
        return default
    return min(max(confidence, 0.0), 1.0)


def parse_classification(text: str) -> ClassificationResult:
    result = extract_json(text)

    return ClassificationResult(
        type=str(result.get("type") or "Não identificado"),
        colors=_as_list(result.get("colors")),
        styles=_as_list(result.get("styles")),
        season=_as_list(result.get("season")),
        occasion=_as_list(result.get("occasion")),
        confidence=_as_confidence(result.get("confidence"), 0.5),
        description=str(result.get("description") or "Análise não disponível"),
    )


def parse_look(text: str) -> LookSuggestion:
    result = extract_json(text)

    return LookSuggestion(
        id=str(result.get("id") or f"look_{int(time.time() * 1000)}"),
        title=str(result.get("title") or "Look Sugerido"),
        description=str(result.get("description") or "Look criado especialmente para você"),
        items=_as_list(result.get("items")),
        reasoning=str(result.get("reasoning") or "Combinação baseada em harmonia de cores e estilo"),
        tips=_as_list(result.get("tips")),
        confidence=_as_confidence(result.get("confidence"), 0.7),
    )


# ==================== REQUEST FORMATTING ====================

def build_classification_messages(image_data: str) -> List[Dict[str, Any]]:
    """Chat messages asking the model to classify one clothing photo (data URL or http URL)."""
    return [
        {"role": "system", "content": CLASSIFICATION_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": [
                {"type": "text", "text": CLASSIFICATION_USER_PROMPT},
                {"type": "image_url", "image_url": {"url": image_data}},
            ],
        },
    ]


def build_context_description(context: LookContext) -> str:
    return LOOK_CONTEXT_TEMPLATE.format(
        occasion=context.occasion,
        season=context.season,
        weather=context.weather or "N/A",
        preferred_styles=", ".join(context.preferred_styles or []) or "Qualquer",
        exclude_items=", ".join(context.exclude_items or []) or "Nenhum",
    )


def build_look_messages(context: LookContext, available_items: List[ClothingItem]) -> List[Dict[str, Any]]:
    items_description = "\n".join(item.to_prompt_line() for item in available_items)

    return [
        {"role": "system", "content": LOOK_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": LOOK_USER_TEMPLATE.format(
                context=build_context_description(context),
                items=items_description,
            ),
        },
    ]


# ==================== CLIENT ====================

class FashionAIClient:
    """Classification and look generation over the configured LLM."""

    def __init__(self, llm: Optional[LLMClient] = None):
        self._llm = llm

    @property
    def llm(self) -> LLMClient:
        if self._llm is None:
            self._llm = get_llm_client()
        return self._llm

    async def _request(self, operation: str, messages: List[Dict[str, Any]]) -> LLMResponse:
        """Call the model, recording the outcome in the request log and metrics."""
        request_id = uuid.uuid4().hex
        provider = self.llm.provider
        start = time.time()

        try:
            response = await self.llm.chat(messages)
        except Exception as e:
            latency_ms = int((time.time() - start) * 1000)
            increment_request(operation, provider, latency_ms=latency_ms, error=True)
            log_request(request_id, operation, provider, None, latency_ms, "fail", error=str(e))
            raise

        latency_ms = int((time.time() - start) * 1000)
        cost = estimate_cost(provider, response.total_tokens)
        increment_request(operation, provider, latency_ms=latency_ms, tokens=response.total_tokens, cost_usd=cost)
        log_request(
            request_id, operation, provider, response.model, latency_ms, "success",
            tokens=response.total_tokens, cost_usd=cost,
        )
        logger.info(f"{operation} answered by {response.model} in {latency_ms}ms")
        return response

    async def analyze_clothing_image(self, image_data: str) -> ClassificationResult:
        """
        Classify a clothing photo.

        Raises:
            LLMNotConfiguredError: If no API key is set
            AnalysisError: If the call fails or the reply is not valid JSON
        """
        messages = build_classification_messages(image_data)

        try:
            response = await self._request("classify", messages)
            return parse_classification(response.content)
        except LLMNotConfiguredError:
            raise
        except Exception as e:
            logger.error(f"Error analyzing clothing image: {e}")
            raise AnalysisError(ANALYSIS_FAILED_MESSAGE) from e

    async def generate_look_suggestion(
        self,
        context: LookContext,
        available_items: List[ClothingItem]
    ) -> LookSuggestion:
        """
        Compose a look from the catalog for a context.

        Raises:
            LLMNotConfiguredError: If no API key is set
            LookGenerationError: If the call fails or the reply is not valid JSON
        """
        messages = build_look_messages(context, available_items)

        try:
            response = await self._request("generate_look", messages)
            return parse_look(response.content)
        except LLMNotConfiguredError:
            raise
        except Exception as e:
            logger.error(f"Error generating look suggestion: {e}")
            raise LookGenerationError(LOOK_FAILED_MESSAGE) from e


# Global instance
fashion_client = FashionAIClient()
