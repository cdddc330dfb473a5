"""
ChefNotes Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for each failure the API can report.
Why:   Services raise these; global handlers in main.py turn them into JSON
       responses with the right status code, so no route needs try/except.
How:   Each exception carries a user-facing message and an optional context
       dict that is logged but only partially returned.

Exception Hierarchy:
    ChefNotesError (base)
    ├── ValidationError          → 400 Bad Request
    ├── EmptyContentError        → 400 Bad Request (nothing to convert)
    ├── NotFoundError            → 404 Not Found
    ├── RateLimitExceededError   → 429 Too Many Requests
    ├── SynthesisError           → 500 Internal Server Error
    └── LLMServiceError          → 503 Service Unavailable

Every error is local to the request that raised it. Nothing here is retried
automatically; retrying is the client's decision.
"""

from typing import Any, Dict, Optional


class ChefNotesError(Exception):
    """
    Base exception for all ChefNotes application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where noted)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ChefNotesError):
    """
    Raised when client input fails a business rule after schema parsing.

    HTTP: 400 Bad Request. Schema-level failures (wrong types, missing
    fields, non-numeric path ids) arrive as FastAPI's RequestValidationError
    and are mapped to the same 400 response shape.

    Example response:
        {
            "error": "validation_error",
            "message": "Audio data is not valid base64",
            "details": {"field": "audioData"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class EmptyContentError(ChefNotesError):
    """
    Raised when a conversion is requested for a recipe with no usable notes.

    HTTP: 400 Bad Request. Raised before the model is called, so an empty
    recipe never costs a Gemini request.
    """

    def __init__(
        self,
        message: str = "No content to convert to recipe",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(ChefNotesError):
    """
    Raised when a referenced recipe, recording or note does not exist.

    HTTP: 404 Not Found. The store returns None for missing records; the
    service layer converts that into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource


class RateLimitExceededError(ChefNotesError):
    """
    Raised when a client exceeds the per-IP conversion rate limit.

    HTTP: 429 Too Many Requests, with a Retry-After header.
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class LLMServiceError(ChefNotesError):
    """
    Raised by an LLMService implementation when the provider call fails.

    Covers network errors, API errors (bad key, quota, invalid model) and
    SDK exceptions. The synthesizer translates it into SynthesisError; it
    only reaches the HTTP layer if some other caller lets it escape.
    """

    def __init__(
        self,
        message: str = "AI recipe service is temporarily unavailable",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class SynthesisError(ChefNotesError):
    """
    Raised when a recipe could not be generated from the aggregated notes.

    HTTP: 500 Internal Server Error. Nothing is persisted when this is
    raised; the aggregated content is not cached, so a retry re-aggregates.
    """

    def __init__(
        self,
        message: str = "Failed to convert to recipe",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
