"""
ChefNotes Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract between frontend and backend.
Why:   Strict input validation, automatic serialization, and OpenAPI doc generation.
How:   FastAPI validates request bodies against the *Create models and serializes
       store records through the *Response models (from_attributes=True).
Who:   Used by route handlers as body types and response models.

Wire format:
    JSON keys are camelCase (recipeId, audioData, mimeType, createdAt) because
    that is what the browser client sends and reads. Python attribute names
    stay snake_case; populate_by_name lets snake_case input through as well.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every API model: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what the client sends
# ══════════════════════════════════════════════════════════════════════════


class RecipeCreate(CamelModel):
    """Body of POST /api/recipes."""

    name: str = Field(min_length=1, description="Dish name shown in the recipe picker")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Recipe name must not be blank")
        return v


class AudioRecordingCreate(CamelModel):
    """
    Body of POST /api/recipes/{recipeId}/audio-recordings.

    The owning recipe comes from the path, never from the body.
    audio_data is checked for valid base64 and size by the service layer,
    since the size limit is a configuration value.
    """

    name: str = Field(min_length=1, description="Display name, e.g. 'Recording 3'")
    duration: int = Field(ge=0, description="Length of the recording in whole seconds")
    audio_data: str = Field(min_length=1, description="Base64-encoded audio bytes")
    mime_type: str = Field(min_length=1, description="Content type reported by MediaRecorder")
    transcription: Optional[str] = Field(
        default=None,
        description="Browser speech-recognition result; omit when none was produced",
    )

    @field_validator("transcription")
    @classmethod
    def empty_transcription_is_absent(cls, v: Optional[str]) -> Optional[str]:
        # An empty transcription contributes nothing, same as a missing one
        return v or None


class TextNoteCreate(CamelModel):
    """Body of POST /api/recipes/{recipeId}/text-notes."""

    content: str = Field(min_length=1, description="Free text of the note")


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns
# ══════════════════════════════════════════════════════════════════════════


class RecipeResponse(CamelModel):
    id: int = Field(description="Recipe id, assigned in creation order")
    name: str
    created_at: datetime = Field(description="When the recipe was created (UTC ISO 8601)")


class AudioRecordingResponse(CamelModel):
    id: int
    recipe_id: int
    name: str
    duration: int
    audio_data: str
    mime_type: str
    transcription: Optional[str] = None
    created_at: datetime


class TextNoteResponse(CamelModel):
    id: int
    recipe_id: int
    content: str
    created_at: datetime


class RecipeWithContentResponse(CamelModel):
    """
    What:  A recipe together with all of its notes.
    Who:   Returned by GET /api/recipes/{id}; the recipe screen renders from it.
    Order: Both lists are in creation order.
    """

    recipe: RecipeResponse
    audio_recordings: List[AudioRecordingResponse]
    text_notes: List[TextNoteResponse]


class ConvertResponse(CamelModel):
    """
    What:  Result of POST /api/recipes/{id}/convert-to-recipe (HTTP 201).

    recipe is the generated text exactly as the model returned it; note is
    the stored TextNote, whose content is that text behind the generated marker.
    """

    recipe: str = Field(description="Generated recipe text")
    note: TextNoteResponse = Field(description="Text note the generated recipe was saved as")


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "empty_content",
            "message": "No content to convert to recipe",
            "request_id": "1f0c2a9e"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy or degraded")
    version: str = Field(description="Application version")
    gemini: str = Field(description="Gemini API status: available, unavailable")
    recipes: int = Field(description="Recipes currently held in the store")
    audio_recordings: int
    text_notes: int
    uptime_seconds: float = Field(description="Seconds since service started")
