"""
API Routes for the Fashion AI Stylist Service v1.0.0
Catalog upload/classification, look generation and feedback.
"""
import logging
from typing import Optional
from fastapi import APIRouter, UploadFile, File, Form, HTTPException, Query
from fastapi.responses import JSONResponse

from fashion_ai.app.schemas import ClothingItemUpdate, FeedbackRequest, LookRequest
from fashion_ai.config import get_settings, get_llm_config
from fashion_ai.core.exceptions import FashionAIError
from fashion_ai.core.orchestrator import (
    classify_and_store,
    generate_look,
    resolve_item_details,
    submit_feedback,
)
from fashion_ai.core.validation import (
    ValidationError,
    parse_csv,
    validate_feedback_input,
    validate_look_context,
)
from fashion_ai.db import store
from fashion_ai.llm import get_llm_client
from fashion_ai.observability import get_metrics, is_logging_enabled
from fashion_ai.services.weather import is_configured as weather_configured

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_VERSION = "1.0.0"


def _http_error(error: Exception) -> HTTPException:
    """Translate validation and domain errors into an HTTPException."""
    return HTTPException(status_code=error.status_code, detail=error.message)


def _suggestion_with_items(suggestion) -> dict:
    payload = suggestion.to_dict()
    payload["itemDetails"] = [item.to_dict() for item in resolve_item_details(suggestion)]
    return payload


# ==================== PUBLIC ENDPOINTS ====================

@router.get("/health")
async def health_check():
    """Health check with observability info."""
    settings = get_settings()
    metrics = get_metrics()
    stats = store.get_stats()

    return {
        "status": "ok",
        "version": SERVICE_VERSION,
        "environment": settings.environment,
        "llm": {**get_llm_config().to_dict(), "status": get_llm_client().get_status()},
        "weather": {"enabled": weather_configured()},
        "catalog": {
            "items": stats.total_items,
            "suggestions": stats.total_suggestions,
            "feedbacks": stats.total_feedbacks,
        },
        "observability": {
            "logging_enabled": is_logging_enabled(),
            "total_requests": metrics["total_requests"],
            "errors": metrics["errors"],
            "total_cost_usd": metrics["total_cost_usd"]
        },
        "features": [
            "clothing_classification", "look_generation", "feedback",
            "catalog_filters", "statistics", "weather_context", "observability"
        ]
    }


@router.get("/metrics")
async def get_metrics_endpoint():
    """Get detailed metrics for monitoring."""
    return JSONResponse(content=get_metrics())


@router.get("/api/stats")
async def get_catalog_stats():
    """Catalog, suggestion and approval statistics."""
    return JSONResponse(content={"success": True, "stats": store.get_stats().to_dict()})


# ==================== CLOTHING CATALOG ====================

@router.post("/api/clothing-classify")
async def classify_clothing(
    image: UploadFile = File(..., description="Clothing item photo"),
    item_type: Optional[str] = Form(None, alias="type", description="Manual type, overrides the model"),
    styles: Optional[str] = Form(None, description="Comma-separated styles, override the model"),
    description: Optional[str] = Form(None, description="Optional description"),
):
    """
    Classify an uploaded clothing photo and add it to the catalog.

    Form Parameters:
        - image: Clothing photo (required, image/*, max 10MB)
        - type: Manual clothing type (optional)
        - styles: Comma-separated styles (optional)
        - description: Free-text description (optional)
    """
    try:
        content = await image.read()
        result = await classify_and_store(
            content=content,
            content_type=image.content_type,
            manual_type=item_type,
            manual_styles=parse_csv(styles),
            description=description,
        )
    except (ValidationError, FashionAIError) as e:
        raise _http_error(e)
    except Exception as e:
        logger.error(f"Clothing classification failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return JSONResponse(
        status_code=201,
        content={
            "success": True,
            "item": result["item"].to_dict(),
            "classification": result["classification"].to_dict(),
        }
    )


@router.get("/api/clothing-classify")
async def list_clothing_items(
    item_id: Optional[str] = Query(None, alias="id", description="Return a single item"),
    item_type: Optional[str] = Query(None, alias="type", description="Exact type (case-insensitive)"),
    styles: Optional[str] = Query(None, description="Comma-separated styles"),
    colors: Optional[str] = Query(None, description="Comma-separated colors"),
    season: Optional[str] = Query(None, description="Comma-separated seasons"),
    occasion: Optional[str] = Query(None, description="Comma-separated occasions"),
):
    """
    List catalog items with optional filters, plus catalog statistics.
    """
    if item_id:
        item = store.get_clothing_item_by_id(item_id)
        if item is None:
            raise HTTPException(status_code=404, detail="Item not found")
        return JSONResponse(content={"success": True, "item": item.to_dict()})

    items = store.filter_clothing_items(
        type=item_type,
        styles=parse_csv(styles),
        colors=parse_csv(colors),
        season=parse_csv(season),
        occasion=parse_csv(occasion),
    )

    return JSONResponse(content={
        "success": True,
        "items": [item.to_dict() for item in items],
        "count": len(items),
        "stats": store.get_stats().to_dict(),
    })


@router.patch("/api/clothing-classify")
async def update_clothing_item(
    updates: ClothingItemUpdate,
    item_id: str = Query(..., alias="id", description="Item to update"),
):
    """
    Update fields of a catalog item (type, colors, styles, ...).
    """
    changes = {
        key: value
        for key, value in updates.model_dump(exclude_unset=True).items()
        if value is not None or key == "description"
    }
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")

    item = store.update_clothing_item(item_id, changes)
    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")

    return JSONResponse(content={"success": True, "item": item.to_dict()})


@router.delete("/api/clothing-classify")
async def delete_clothing_item(
    item_id: str = Query(..., alias="id", description="Item to delete"),
):
    """
    Remove an item from the catalog.
    """
    if not store.delete_clothing_item(item_id):
        raise HTTPException(status_code=404, detail="Item not found")

    return JSONResponse(content={"success": True, "message": "Item deleted"})


# ==================== LOOK SUGGESTIONS ====================

@router.post("/api/generate-look")
async def create_look(body: LookRequest):
    """
    Generate a look from the catalog for a context.

    Body:
        - occasion, season (required)
        - weather (optional)
        - preferredStyles: list or comma-separated string (optional)
        - excludeItems: item ids to leave out (optional)
        - city: fills weather from OpenWeatherMap when weather is empty (optional)
    """
    try:
        context = validate_look_context(
            occasion=body.occasion,
            season=body.season,
            weather=body.weather,
            preferred_styles=body.preferred_styles,
            exclude_items=body.exclude_items,
        )
        result = await generate_look(context, city=body.city)
    except (ValidationError, FashionAIError) as e:
        raise _http_error(e)
    except Exception as e:
        logger.error(f"Look generation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return JSONResponse(
        status_code=201,
        content={
            "success": True,
            "suggestion": result["suggestion"].to_dict(),
            "items": [item.to_dict() for item in result["items"]],
            "context": context.to_dict(),
        }
    )


@router.get("/api/generate-look")
async def list_looks(
    look_id: Optional[str] = Query(None, alias="id", description="Return a single suggestion"),
):
    """
    List generated looks, newest first, each with its item details.
    """
    if look_id:
        suggestion = store.get_look_suggestion_by_id(look_id)
        if suggestion is None:
            raise HTTPException(status_code=404, detail="Look not found")
        return JSONResponse(content={
            "success": True,
            "suggestion": _suggestion_with_items(suggestion),
            "feedback": store.get_look_feedback_summary(look_id),
        })

    suggestions = list(reversed(store.get_all_look_suggestions()))
    return JSONResponse(content={
        "success": True,
        "suggestions": [_suggestion_with_items(s) for s in suggestions],
    })


# ==================== FEEDBACK ====================

@router.post("/api/feedback")
async def create_feedback(body: FeedbackRequest):
    """
    Rate a generated look (approve or reject).
    """
    try:
        look_id, rating = validate_feedback_input(body.look_id, body.rating)
        feedback = submit_feedback(look_id, rating, body.comments or "")
    except (ValidationError, FashionAIError) as e:
        raise _http_error(e)

    return JSONResponse(status_code=201, content={"success": True, "feedback": feedback.to_dict()})


@router.get("/api/feedback")
async def list_feedback(
    look_id: Optional[str] = Query(None, alias="lookId", description="Restrict to one look"),
):
    """
    Approval statistics and feedback records, newest first.
    """
    if look_id:
        feedbacks = store.get_feedbacks_for_look(look_id)
    else:
        feedbacks = store.get_all_feedbacks()

    content = {
        "success": True,
        "stats": store.get_stats().feedback_dict(),
        "feedbacks": [f.to_dict() for f in reversed(feedbacks)],
    }
    if look_id:
        content["look"] = store.get_look_feedback_summary(look_id)

    return JSONResponse(content=content)
