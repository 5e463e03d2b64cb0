"""Output layer - Export detected notes.

- MIDI files (pretty_midi)
- Plain-text note reports
"""

from .midi import MIDIExporter
from .report import NoteReport

__all__ = [
    "MIDIExporter",
    "NoteReport",
]
