"""NoteEvent data class - a single detected note."""

from dataclasses import dataclass

import numpy as np

from .constants import PITCH_NAMES, MIDI_MAX


@dataclass(frozen=True)
class NoteEvent:
    """A note segmented from the merged activation timeline."""

    pitch: int  # MIDI pitch (21-108)
    start: float  # Start time in seconds
    end: float  # End time in seconds
    confidence: float  # Mean note activation over the segment

    @property
    def duration(self) -> float:
        """Note duration in seconds."""
        return self.end - self.start

    @property
    def pitch_name(self) -> str:
        """Get note name (e.g., 'C4', 'A#3')."""
        octave = (self.pitch // 12) - 1
        name = PITCH_NAMES[self.pitch % 12]
        return f"{name}{octave}"

    @property
    def frequency(self) -> float:
        """Fundamental frequency in Hz."""
        return self.midi_to_freq(self.pitch)

    @property
    def velocity(self) -> int:
        """MIDI velocity derived from confidence (1-127)."""
        return int(np.clip(round(self.confidence * MIDI_MAX), 1, MIDI_MAX))

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary."""
        return {
            "pitch": self.pitch,
            "name": self.pitch_name,
            "start": round(self.start, 4),
            "end": round(self.end, 4),
            "duration": round(self.duration, 4),
            "confidence": round(self.confidence, 4),
        }

    @staticmethod
    def midi_to_freq(midi: int) -> float:
        """Convert MIDI pitch to frequency (Hz)."""
        return 440.0 * (2 ** ((midi - 69) / 12.0))
