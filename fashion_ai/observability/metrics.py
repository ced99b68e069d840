"""
Metrics Module (v1.0.0)
Track model call counts, failures and token costs.
"""
import threading
from typing import Dict, Any


def _empty_metrics() -> Dict[str, Any]:
    return {
        "total_requests": 0,
        "requests_by_operation": {},
        "requests_by_provider": {},
        "total_tokens": 0,
        "total_cost_usd": 0.0,
        "total_latency_ms": 0,
        "errors": 0
    }


# Thread-safe metrics storage
_lock = threading.Lock()
_metrics = _empty_metrics()


def increment_request(
    operation: str,
    provider: str,
    latency_ms: int = 0,
    tokens: int = 0,
    cost_usd: float = 0.0,
    error: bool = False
):
    """
    Record a model call in metrics.

    Args:
        operation: classify or generate_look
        provider: LLM provider used
        latency_ms: Call latency
        tokens: Token count
        cost_usd: Estimated cost
        error: Whether the call failed
    """
    with _lock:
        _metrics["total_requests"] += 1
        _metrics["total_tokens"] += tokens
        _metrics["total_cost_usd"] += cost_usd
        _metrics["total_latency_ms"] += latency_ms

        by_operation = _metrics["requests_by_operation"]
        by_operation[operation] = by_operation.get(operation, 0) + 1

        if provider:
            by_provider = _metrics["requests_by_provider"]
            by_provider[provider] = by_provider.get(provider, 0) + 1

        if error:
            _metrics["errors"] += 1


def get_metrics() -> Dict[str, Any]:
    """Get current metrics snapshot."""
    with _lock:
        total = _metrics["total_requests"]

        return {
            "total_requests": total,
            "requests_by_operation": dict(_metrics["requests_by_operation"]),
            "requests_by_provider": dict(_metrics["requests_by_provider"]),
            "total_tokens": _metrics["total_tokens"],
            "total_cost_usd": round(_metrics["total_cost_usd"], 4),
            "avg_latency_ms": round(_metrics["total_latency_ms"] / total) if total > 0 else 0,
            "errors": _metrics["errors"],
            "error_ratio": round(_metrics["errors"] / total, 3) if total > 0 else 0.0
        }


def reset_metrics():
    """Reset all metrics (for testing)."""
    global _metrics
    with _lock:
        _metrics = _empty_metrics()


# Cost per 1K tokens (approximate)
COST_PER_1K_TOKENS = {
    "openrouter": 0.005,  # openai/gpt-4o blended
    "openai": 0.005,
    "gemini": 0.0005  # Gemini Flash
}


def estimate_cost(provider: str, tokens: int) -> float:
    """Estimate the USD cost of a call."""
    rate = COST_PER_1K_TOKENS.get(provider, 0.001)
    return round((tokens / 1000) * rate, 6)
