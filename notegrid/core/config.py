"""Model geometry and detection configuration."""

from dataclasses import dataclass

from .constants import (
    MODEL_SAMPLE_RATE,
    FFT_HOP,
    AUDIO_WINDOW_LENGTH,
    ANNOTATIONS_FPS,
    N_PITCHES,
    N_CONTOUR_BINS,
    LOWEST_MIDI,
    DEFAULT_NOTE_THRESHOLD,
    DEFAULT_ONSET_THRESHOLD,
    DEFAULT_MIN_NOTE_DURATION,
    DEFAULT_OVERLAPPING_FRAMES,
    DEFAULT_MIN_FRAMES_BETWEEN_ONSETS,
    ONSET_LOOKAHEAD_FRAMES,
)
from .errors import ConfigurationError


@dataclass(frozen=True)
class ModelConfig:
    """Fixed geometry of the pitch-detection model.

    Attributes:
        sample_rate: Sample rate the model expects (default: 22050)
        fft_hop: Samples per output frame (default: 256)
        window_length: Samples per inference window (default: 43844)
        annotations_fps: Output frames per second (default: 86)
        n_pitches: Channels in the note and onset grids (default: 88)
        n_contour_bins: Channels in the contour grid (default: 264)
        lowest_midi: MIDI pitch of note channel 0 (default: 21, A0)
    """

    sample_rate: int = MODEL_SAMPLE_RATE
    fft_hop: int = FFT_HOP
    window_length: int = AUDIO_WINDOW_LENGTH
    annotations_fps: int = ANNOTATIONS_FPS
    n_pitches: int = N_PITCHES
    n_contour_bins: int = N_CONTOUR_BINS
    lowest_midi: int = LOWEST_MIDI

    def __post_init__(self):
        for name in ("sample_rate", "fft_hop", "window_length", "annotations_fps",
                     "n_pitches", "n_contour_bins"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(
                    f"{name} must be positive, got {getattr(self, name)}"
                )

    def expected_frames(self, sample_count: int) -> int:
        """Number of output frames covering `sample_count` samples."""
        return (sample_count * self.annotations_fps) // self.sample_rate

    def frame_to_time(self, frame: int) -> float:
        """Convert a frame index to seconds."""
        return frame / self.annotations_fps


@dataclass(frozen=True)
class DetectionConfig:
    """Configuration for windowing, merging and note segmentation.

    Attributes:
        note_threshold: Note activation must exceed this (default: 0.3)
        onset_threshold: Onset activation must exceed this (default: 0.5)
        min_note_duration: Minimum note duration in seconds (default: 0.127)
        overlapping_frames: Frames shared by consecutive windows (default: 30)
        auto_normalize: Apply a sigmoid to out-of-range model output (default: True)
        onset_splitting: Split continuous activity at onsets (default: True)
        min_frames_between_onsets: Frames after a segment start before an
            onset may split it (default: 3)
        onset_lookahead_frames: Frames past the candidate scanned for an
            onset (default: 2)
    """

    note_threshold: float = DEFAULT_NOTE_THRESHOLD
    onset_threshold: float = DEFAULT_ONSET_THRESHOLD
    min_note_duration: float = DEFAULT_MIN_NOTE_DURATION
    overlapping_frames: int = DEFAULT_OVERLAPPING_FRAMES
    auto_normalize: bool = True
    onset_splitting: bool = True
    min_frames_between_onsets: int = DEFAULT_MIN_FRAMES_BETWEEN_ONSETS
    onset_lookahead_frames: int = ONSET_LOOKAHEAD_FRAMES

    def __post_init__(self):
        if not 0.0 <= self.note_threshold <= 1.0:
            raise ConfigurationError(
                f"note_threshold must be in [0, 1], got {self.note_threshold}"
            )
        if not 0.0 <= self.onset_threshold <= 1.0:
            raise ConfigurationError(
                f"onset_threshold must be in [0, 1], got {self.onset_threshold}"
            )
        if self.min_note_duration < 0:
            raise ConfigurationError(
                f"min_note_duration must be >= 0, got {self.min_note_duration}"
            )
        if self.overlapping_frames < 0:
            raise ConfigurationError(
                f"overlapping_frames must be >= 0, got {self.overlapping_frames}"
            )
        if self.min_frames_between_onsets < 0 or self.onset_lookahead_frames < 0:
            raise ConfigurationError("onset frame gaps must be >= 0")

    @property
    def overlap_frames_per_side(self) -> int:
        """Frames dropped at each inner window edge when merging."""
        return self.overlapping_frames // 2

    def overlap_length(self, model: ModelConfig) -> int:
        """Overlap between consecutive windows in samples."""
        return self.overlapping_frames * model.fft_hop

    def hop_size(self, model: ModelConfig) -> int:
        """
        Distance between consecutive window starts in samples.

        Raises:
            ConfigurationError: If the overlap is not shorter than the window
        """
        hop = model.window_length - self.overlap_length(model)
        if hop <= 0:
            raise ConfigurationError(
                f"Invalid hop size {hop}: window length ({model.window_length}) "
                f"must be greater than overlap length ({self.overlap_length(model)})"
            )
        return hop
