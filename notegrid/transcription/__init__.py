"""Transcription layer - Audio buffer to note events.

Ties the stages together: window scheduling, per-window inference,
overlap merging, note segmentation and tempo estimation.
"""

from .transcriber import NoteTranscriber
from .result import TranscriptionResult, TranscriptionStats

__all__ = [
    "NoteTranscriber",
    "TranscriptionResult",
    "TranscriptionStats",
]
