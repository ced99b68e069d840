"""
Request Logger (v1.0.0)
Structured JSON-lines logging for every stylist model call.
"""
import json
import logging
from pathlib import Path
from datetime import datetime, timezone
from typing import Optional

from fashion_ai.config import get_settings

DEFAULT_LOGS_DIR = Path(__file__).parent.parent.parent / "logs"

# Configure request logger
request_logger = logging.getLogger("fashion_ai.requests")
request_logger.setLevel(logging.INFO)

# Prevent propagation to root logger
request_logger.propagate = False


def _ensure_handler():
    """Attach the file handler on first use so imports never touch the disk."""
    if request_logger.handlers:
        return

    settings = get_settings()
    logs_dir = Path(settings.logs_dir) if settings.logs_dir else DEFAULT_LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(logs_dir / "requests.log", encoding="utf-8")
    file_handler.setFormatter(logging.Formatter("%(message)s"))
    request_logger.addHandler(file_handler)


def log_request(
    request_id: str,
    operation: str,
    provider_used: str,
    model: Optional[str],
    latency_ms: int,
    status: str,
    error: Optional[str] = None,
    tokens: int = 0,
    cost_usd: float = 0.0
):
    """
    Log a structured request entry.

    Args:
        request_id: Unique id of the model call
        operation: classify or generate_look
        provider_used: LLM provider (openrouter/openai/gemini)
        model: Model that answered
        latency_ms: Request latency in milliseconds
        status: success or fail
        error: Error message if failed
        tokens: Token usage reported by the provider
        cost_usd: Estimated cost in USD
    """
    if not is_logging_enabled():
        return

    entry = {
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "request_id": request_id,
        "operation": operation,
        "provider": provider_used,
        "model": model,
        "latency_ms": latency_ms,
        "status": status,
        "tokens": tokens,
        "cost_usd": round(cost_usd, 6)
    }

    if error:
        entry["error"] = error

    _ensure_handler()
    request_logger.info(json.dumps(entry, ensure_ascii=False))


def is_logging_enabled() -> bool:
    """Check if request logging is enabled."""
    return get_settings().logging_enabled
