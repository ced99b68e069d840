# Observability module
from fashion_ai.observability.logger import log_request, is_logging_enabled
from fashion_ai.observability.metrics import (
    increment_request,
    get_metrics,
    reset_metrics,
    estimate_cost,
)
