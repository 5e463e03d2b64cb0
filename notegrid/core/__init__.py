"""Core types, configuration and constants for notegrid."""

from .note import NoteEvent
from .config import ModelConfig, DetectionConfig
from .errors import (
    NotegridError,
    ConfigurationError,
    InputTooLargeError,
    ModelOutputShapeError,
    TranscriptionCancelled,
)
from .constants import (
    PITCH_NAMES,
    MODEL_SAMPLE_RATE,
    ANNOTATIONS_FPS,
    DEFAULT_TEMPO,
)

__all__ = [
    "NoteEvent",
    "ModelConfig",
    "DetectionConfig",
    "NotegridError",
    "ConfigurationError",
    "InputTooLargeError",
    "ModelOutputShapeError",
    "TranscriptionCancelled",
    "PITCH_NAMES",
    "MODEL_SAMPLE_RATE",
    "ANNOTATIONS_FPS",
    "DEFAULT_TEMPO",
]
