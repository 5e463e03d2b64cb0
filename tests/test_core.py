"""Tests for core types and configuration."""

import pytest

from notegrid.core import (
    NoteEvent,
    ModelConfig,
    DetectionConfig,
    NotegridError,
    ConfigurationError,
    InputTooLargeError,
    ModelOutputShapeError,
    TranscriptionCancelled,
)


class TestNoteEvent:
    """Tests for NoteEvent dataclass."""

    def test_note_creation(self):
        note = NoteEvent(pitch=60, start=0.5, end=1.5, confidence=0.8)
        assert note.pitch == 60
        assert note.duration == 1.0

    def test_pitch_name(self):
        assert NoteEvent(pitch=60, start=0, end=1, confidence=1).pitch_name == "C4"
        assert NoteEvent(pitch=69, start=0, end=1, confidence=1).pitch_name == "A4"
        assert NoteEvent(pitch=21, start=0, end=1, confidence=1).pitch_name == "A0"

    def test_frequency(self):
        assert NoteEvent(pitch=69, start=0, end=1, confidence=1).frequency == 440.0
        assert abs(NoteEvent.midi_to_freq(60) - 261.63) < 0.01

    def test_velocity_from_confidence(self):
        assert NoteEvent(pitch=60, start=0, end=1, confidence=0.8).velocity == 102
        assert NoteEvent(pitch=60, start=0, end=1, confidence=1.0).velocity == 127
        assert NoteEvent(pitch=60, start=0, end=1, confidence=0.0).velocity == 1

    def test_immutable(self):
        note = NoteEvent(pitch=60, start=0, end=1, confidence=0.5)
        with pytest.raises(AttributeError):
            note.pitch = 61

    def test_to_dict(self):
        data = NoteEvent(pitch=61, start=0.1, end=0.35, confidence=0.66666).to_dict()
        assert data["name"] == "C#4"
        assert data["duration"] == 0.25
        assert data["confidence"] == 0.6667


class TestModelConfig:
    """Tests for model geometry."""

    def test_defaults(self):
        model = ModelConfig()
        assert model.sample_rate == 22050
        assert model.window_length == 43844
        assert model.annotations_fps == 86
        assert model.n_pitches == 88
        assert model.n_contour_bins == 264
        assert model.lowest_midi == 21

    def test_expected_frames(self):
        model = ModelConfig()
        assert model.expected_frames(22050) == 86
        assert model.expected_frames(0) == 0
        assert model.expected_frames(300) == 1

    def test_frame_to_time(self):
        assert ModelConfig().frame_to_time(86) == 1.0

    def test_rejects_non_positive(self):
        with pytest.raises(ConfigurationError, match="fft_hop"):
            ModelConfig(fft_hop=0)


class TestDetectionConfig:
    """Tests for detection configuration."""

    def test_defaults(self):
        config = DetectionConfig()
        assert config.note_threshold == 0.3
        assert config.onset_threshold == 0.5
        assert config.min_note_duration == 0.127
        assert config.overlapping_frames == 30
        assert config.auto_normalize
        assert config.onset_splitting
        assert config.min_frames_between_onsets == 3

    def test_default_geometry(self):
        config = DetectionConfig()
        model = ModelConfig()
        assert config.overlap_length(model) == 7680
        assert config.hop_size(model) == 36164
        assert config.overlap_frames_per_side == 15

    @pytest.mark.parametrize("kwargs", [
        {"note_threshold": -0.1},
        {"onset_threshold": 1.01},
        {"min_note_duration": -1.0},
        {"overlapping_frames": -2},
        {"min_frames_between_onsets": -1},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ConfigurationError):
            DetectionConfig(**kwargs)

    def test_overlap_must_be_shorter_than_window(self):
        config = DetectionConfig(overlapping_frames=172)
        with pytest.raises(ConfigurationError, match="Invalid hop size"):
            config.hop_size(ModelConfig())

    def test_immutable_after_validation(self):
        config = DetectionConfig(overlapping_frames=4)
        with pytest.raises(AttributeError):
            config.overlapping_frames = -1
        assert config.overlapping_frames == 4


class TestErrors:
    """Exception hierarchy."""

    def test_all_derive_from_base(self):
        for cls in (ConfigurationError, InputTooLargeError,
                    ModelOutputShapeError, TranscriptionCancelled):
            assert issubclass(cls, NotegridError)

    def test_builtin_bases(self):
        assert issubclass(ConfigurationError, ValueError)
        assert issubclass(ModelOutputShapeError, ValueError)
        assert issubclass(InputTooLargeError, OverflowError)
