"""Tests for MIDI and text report export."""

from datetime import datetime

import pretty_midi
import pytest

from notegrid.core import NoteEvent
from notegrid.output import MIDIExporter, NoteReport


@pytest.fixture
def notes():
    return [
        NoteEvent(pitch=60, start=0.0, end=0.5, confidence=0.8),
        NoteEvent(pitch=64, start=0.5, end=1.0, confidence=0.5),
        NoteEvent(pitch=67, start=1.0, end=2.0, confidence=1.0),
    ]


class TestMIDIExporter:
    """Tests for MIDIExporter."""

    def test_to_pretty_midi(self, notes):
        midi = MIDIExporter(tempo=100).to_pretty_midi(notes)

        assert len(midi.instruments) == 1
        exported = midi.instruments[0].notes
        assert [n.pitch for n in exported] == [60, 64, 67]
        assert [n.velocity for n in exported] == [102, 64, 127]
        _, tempi = midi.get_tempo_changes()
        assert tempi[0] == pytest.approx(100.0)

    def test_export_round_trip(self, notes, tmp_path):
        path = tmp_path / "nested" / "out.mid"
        MIDIExporter().export(notes, str(path))

        assert path.exists()
        midi = pretty_midi.PrettyMIDI(str(path))
        loaded = midi.instruments[0].notes
        assert len(loaded) == 3
        assert loaded[2].start == pytest.approx(1.0, abs=0.01)
        assert loaded[2].end == pytest.approx(2.0, abs=0.01)

    def test_empty(self, tmp_path):
        path = tmp_path / "empty.mid"
        MIDIExporter().export([], str(path))
        assert path.exists()


class TestNoteReport:
    """Tests for NoteReport."""

    def test_render(self, notes):
        text = NoteReport().render(notes, tempo=120, generated=datetime(2024, 1, 2, 3, 4, 5))
        lines = text.splitlines()

        assert lines[0] == "=== Note Detection Results ==="
        assert lines[1] == "Generated on: 2024-01-02 03:04:05"
        assert "Total notes detected: 3" in lines
        assert "Estimated tempo: 120 BPM" in lines
        assert "C4   |    60 |    0.000 |   0.500 |      0.500 |      261.63 | 0.800" in lines
        assert "Lowest note: C4 (MIDI 60)" in lines
        assert "Highest note: G4 (MIDI 67)" in lines

    def test_render_empty(self):
        text = NoteReport().render([])
        assert "Total notes detected: 0" in text
        assert "Lowest note" not in text
        assert "Estimated tempo" not in text

    def test_export(self, notes, tmp_path):
        path = tmp_path / "reports" / "notes.txt"
        NoteReport(title="Test").export(notes, str(path), tempo=90)

        content = path.read_text(encoding="utf-8")
        assert content.startswith("=== Test ===")
        assert "Estimated tempo: 90 BPM" in content
