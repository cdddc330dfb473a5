"""
ChefNotes Backend — Audio Recording Route Handlers
====================================================

What:  Attach, play back and delete voice notes.
Who:   Called by the record button and the recording list of the frontend.

Transcription happens in the browser; the server stores whatever
transcription the client sends (or none).
"""

import logging

from fastapi import APIRouter, Depends, Response

from chefnotes.schemas.recipe import (
    AudioRecordingCreate,
    AudioRecordingResponse,
    ErrorResponse,
)
from chefnotes.services.recipe_service import recipe_service
from chefnotes.store import RecipeStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Audio Recordings"])


@router.post(
    "/recipes/{recipe_id}/audio-recordings",
    status_code=201,
    response_model=AudioRecordingResponse,
    responses={
        400: {"description": "Invalid recording data", "model": ErrorResponse},
        404: {"description": "Recipe not found", "model": ErrorResponse},
    },
    summary="Add a voice note to a recipe",
)
async def create_audio_recording(
    recipe_id: int,
    body: AudioRecordingCreate,
    store: RecipeStore = Depends(get_store),
):
    return await recipe_service.add_audio_recording(store, recipe_id, body)


@router.get(
    "/audio-recordings/{recording_id}/audio",
    response_class=Response,
    responses={
        200: {"description": "Raw audio bytes in the recorded MIME type"},
        404: {"description": "Recording not found", "model": ErrorResponse},
    },
    summary="Stream a recording's audio",
)
async def get_audio(
    recording_id: int,
    store: RecipeStore = Depends(get_store),
) -> Response:
    """
    Serve the decoded audio so an <audio> element can point straight at it.

    Recordings never change after creation, hence the long private cache.
    """
    audio_bytes, mime_type = await recipe_service.get_audio_payload(store, recording_id)
    return Response(
        content=audio_bytes,
        media_type=mime_type,
        headers={"Cache-Control": "private, max-age=86400"},
    )


@router.delete(
    "/audio-recordings/{recording_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Recording not found", "model": ErrorResponse}},
    summary="Delete a voice note",
)
async def delete_audio_recording(
    recording_id: int,
    store: RecipeStore = Depends(get_store),
) -> Response:
    await recipe_service.delete_audio_recording(store, recording_id)
    return Response(status_code=204)
