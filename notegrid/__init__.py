"""notegrid - Windowed pitch-model output to note events and tempo.

Architecture Layers:
    1. core/          - Note type, configuration, constants and errors
    2. input/         - Audio loading
    3. windowing/     - Fixed-size model windows over long audio
    4. model/         - Inference adapter boundary (ONNX Runtime)
    5. merging/       - Overlap-aware reassembly of per-window grids
    6. segmentation/  - Onset-aware note segmentation
    7. analysis/      - Tempo estimation from onsets
    8. transcription/ - End-to-end orchestration
    9. output/        - Export (MIDI, text report)
"""

__version__ = "0.1.0"

# Core types
from .core import (
    NoteEvent,
    ModelConfig,
    DetectionConfig,
    NotegridError,
    ConfigurationError,
    InputTooLargeError,
    ModelOutputShapeError,
    TranscriptionCancelled,
)

# Input layer
from .input import AudioLoader

# Pipeline stages
from .windowing import Window, WindowScheduler
from .model import ActivationGrids, InferenceAdapter, OnnxBasicPitchAdapter
from .merging import ActivationStats, MergedTimeline, OverlapMerger
from .segmentation import NoteSegmenter
from .analysis import TempoEstimator, TempoEstimate

# Transcription layer
from .transcription import NoteTranscriber, TranscriptionResult, TranscriptionStats

# Output layer
from .output import MIDIExporter, NoteReport

__all__ = [
    # Core
    "NoteEvent",
    "ModelConfig",
    "DetectionConfig",
    "NotegridError",
    "ConfigurationError",
    "InputTooLargeError",
    "ModelOutputShapeError",
    "TranscriptionCancelled",
    # Input
    "AudioLoader",
    # Stages
    "Window",
    "WindowScheduler",
    "ActivationGrids",
    "InferenceAdapter",
    "OnnxBasicPitchAdapter",
    "ActivationStats",
    "MergedTimeline",
    "OverlapMerger",
    "NoteSegmenter",
    "TempoEstimator",
    "TempoEstimate",
    # Transcription
    "NoteTranscriber",
    "TranscriptionResult",
    "TranscriptionStats",
    # Output
    "MIDIExporter",
    "NoteReport",
]
