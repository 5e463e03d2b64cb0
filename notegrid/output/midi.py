"""MIDI export functionality."""

from pathlib import Path
from typing import List

import pretty_midi

from ..core import NoteEvent
from ..core.constants import DEFAULT_TEMPO


class MIDIExporter:
    """Export notes to MIDI format."""

    def __init__(
        self,
        tempo: float = DEFAULT_TEMPO,
        instrument_name: str = "Acoustic Grand Piano",
        instrument_program: int = 0,
        resolution: int = 480,
    ):
        """
        Initialize MIDIExporter.

        Args:
            tempo: Tempo in BPM
            instrument_name: MIDI instrument name
            instrument_program: MIDI program number (0-127)
            resolution: Ticks per quarter note
        """
        self.tempo = tempo
        self.instrument_name = instrument_name
        self.instrument_program = instrument_program
        self.resolution = resolution

    def export(self, notes: List[NoteEvent], output_path: str) -> None:
        """
        Export notes to MIDI file.

        Args:
            notes: Detected notes
            output_path: Path to output MIDI file
        """
        midi = self.to_pretty_midi(notes)

        # Ensure output directory exists
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        midi.write(str(output_path))

    def to_pretty_midi(self, notes: List[NoteEvent]) -> pretty_midi.PrettyMIDI:
        """Convert notes to PrettyMIDI object without saving."""
        midi = pretty_midi.PrettyMIDI(
            resolution=self.resolution,
            initial_tempo=float(self.tempo),
        )

        instrument = pretty_midi.Instrument(
            program=self.instrument_program,
            name=self.instrument_name,
        )

        for note in notes:
            instrument.notes.append(
                pretty_midi.Note(
                    velocity=note.velocity,
                    pitch=note.pitch,
                    start=note.start,
                    end=note.end,
                )
            )

        midi.instruments.append(instrument)
        return midi
