"""
Domain errors for the stylist service.
Each error carries the HTTP status the routes translate it into.
"""


class FashionAIError(Exception):
    """Base error for catalog and model failures."""
    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class LLMNotConfiguredError(FashionAIError):
    status_code = 503


class AnalysisError(FashionAIError):
    """Clothing image classification failed."""
    status_code = 502


class LookGenerationError(FashionAIError):
    """Look suggestion generation failed."""
    status_code = 502


class EmptyCatalogError(FashionAIError):
    status_code = 400


class LookNotFoundError(FashionAIError):
    status_code = 404


class DuplicateIdError(FashionAIError):
    status_code = 409
