"""
Stylist Orchestrator (v1.0.0)
Per-action flows: classify-and-store, generate-look and submit-feedback.
"""
import time
import logging
from typing import Dict, Any, Optional, List

from fashion_ai.core.exceptions import EmptyCatalogError, LookNotFoundError
from fashion_ai.core.models import ClothingItem, Feedback, LookContext, LookSuggestion
from fashion_ai.core.validation import validate_image_bytes
from fashion_ai.db import store
from fashion_ai.llm.fashion_client import fashion_client
from fashion_ai.services.weather import get_weather

logger = logging.getLogger(__name__)


# ==================== CLOTHING CLASSIFICATION ====================

async def classify_and_store(
    content: bytes,
    content_type: Optional[str],
    manual_type: Optional[str] = None,
    manual_styles: Optional[List[str]] = None,
    description: Optional[str] = None
) -> Dict[str, Any]:
    """
    Classify an uploaded clothing photo and add it to the catalog.

    Manual type, styles and description supplied by the user take
    precedence over the model's answer.

    Returns:
        Dict with the stored item and the raw classification

    Raises:
        ValidationError: If the upload is not a usable image
        LLMNotConfiguredError, AnalysisError: If classification fails
    """
    _, data_url = validate_image_bytes(content, content_type)

    classification = await fashion_client.analyze_clothing_image(data_url)
    logger.info(
        f"Classified upload: type={classification.type}, "
        f"styles={classification.styles}, confidence={classification.confidence:.2f}"
    )

    item = store.add_clothing_item(
        image_url=data_url,
        type=(manual_type or "").strip() or classification.type,
        colors=classification.colors,
        styles=manual_styles or classification.styles,
        season=classification.season,
        occasion=classification.occasion,
        description=(description or "").strip() or classification.description,
    )

    return {"item": item, "classification": classification}


# ==================== LOOK GENERATION ====================

def _unique_look_id(suggested_id: str) -> str:
    if suggested_id and not store.has_look_suggestion(suggested_id):
        return suggested_id
    fresh = f"look_{int(time.time() * 1000)}"
    while store.has_look_suggestion(fresh):
        fresh = f"{fresh}_1"
    return fresh


def resolve_item_details(suggestion: LookSuggestion) -> List[ClothingItem]:
    """Catalog items a look refers to, skipping ids deleted since."""
    items = (store.get_clothing_item_by_id(item_id) for item_id in suggestion.items)
    return [item for item in items if item is not None]


async def generate_look(context: LookContext, city: Optional[str] = None) -> Dict[str, Any]:
    """
    Ask the model for a look built from the catalog.

    Returns:
        Dict with the stored suggestion and its item details

    Raises:
        EmptyCatalogError: If no items are available after exclusions
        LLMNotConfiguredError, LookGenerationError: If generation fails
    """
    excluded = set(context.exclude_items or [])
    available = [item for item in store.get_all_clothing_items() if item.id not in excluded]

    if not available:
        raise EmptyCatalogError("Nenhuma peça disponível no guarda-roupa para montar um look")

    if city and not context.weather:
        weather_info = await get_weather(city)
        if weather_info:
            context.weather = weather_info.to_prompt_context()
            logger.info(f"Weather context: {weather_info.city} - {weather_info.layer_hint}")

    suggestion = await fashion_client.generate_look_suggestion(context, available)

    known_ids = {item.id for item in available}
    unknown = [item_id for item_id in suggestion.items if item_id not in known_ids]
    if unknown:
        logger.warning(f"Model referenced unknown items, dropping: {unknown}")
        suggestion.items = [item_id for item_id in suggestion.items if item_id in known_ids]

    suggestion.id = _unique_look_id(suggestion.id)
    store.add_look_suggestion(suggestion)

    logger.info(f"Look generated: {suggestion.id} ({context.occasion}/{context.season}, {len(suggestion.items)} items)")

    return {"suggestion": suggestion, "items": resolve_item_details(suggestion)}


# ==================== FEEDBACK ====================

def submit_feedback(look_id: str, rating: str, comments: str = "") -> Feedback:
    """
    Record a rating for a generated look.

    Raises:
        LookNotFoundError: If the look is unknown
    """
    if not store.has_look_suggestion(look_id):
        raise LookNotFoundError(f"Look {look_id} não encontrado")

    return store.add_feedback(look_id, rating, comments)
