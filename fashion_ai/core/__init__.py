# Core module
from fashion_ai.core.exceptions import (
    FashionAIError,
    LLMNotConfiguredError,
    AnalysisError,
    LookGenerationError,
    EmptyCatalogError,
    LookNotFoundError,
    DuplicateIdError,
)
from fashion_ai.core.models import (
    ClothingItem,
    ClassificationResult,
    LookContext,
    LookSuggestion,
    Feedback,
    CatalogStats,
)
from fashion_ai.core.validation import (
    ValidationError,
    validate_image_bytes,
    validate_look_context,
    validate_feedback_input,
    parse_csv,
)
