"""
ChefNotes Backend — Entity Records
====================================

What:  The three record types the store keeps: Recipe, AudioRecording, TextNote.
Why:   Gives the store, services and schemas one shared shape per entity.
How:   Plain dataclasses; Pydantic response schemas read them via from_attributes.
Who:   Created only by the store; read by services and routes.

Ownership:
    Recipe ──< AudioRecording   (recipe_id foreign key)
           └─< TextNote         (recipe_id foreign key)

    Children never outlive their recipe: the store cascades recipe deletion.
    If a durable backend is added, these map one-to-one onto three tables
    with recipe_id as a foreign key on the two child tables.
"""

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union


class EntityKind(str, enum.Enum):
    """Entity kinds the store keeps a separate collection and id counter for."""

    RECIPE = "recipe"
    AUDIO_RECORDING = "audio_recording"
    TEXT_NOTE = "text_note"

    @property
    def is_child(self) -> bool:
        """True for kinds owned by a recipe through recipe_id."""
        return self is not EntityKind.RECIPE


@dataclass
class Recipe:
    """Top-level container grouping all notes about one dish."""

    id: int
    name: str
    created_at: datetime


@dataclass
class AudioRecording:
    """
    A captured voice note.

    audio_data is the base64 text the browser produced; mime_type is whatever
    MediaRecorder picked (usually audio/webm;codecs=opus). transcription is
    None when the browser had no speech recognition result.
    """

    id: int
    recipe_id: int
    name: str
    duration: int  # whole seconds
    audio_data: str
    mime_type: str
    transcription: Optional[str]
    created_at: datetime


@dataclass
class TextNote:
    """A freeform note, or a generated recipe prefixed with the generated marker."""

    id: int
    recipe_id: int
    content: str
    created_at: datetime


Record = Union[Recipe, AudioRecording, TextNote]

RECORD_TYPES = {
    EntityKind.RECIPE: Recipe,
    EntityKind.AUDIO_RECORDING: AudioRecording,
    EntityKind.TEXT_NOTE: TextNote,
}
