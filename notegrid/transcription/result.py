"""Results returned by NoteTranscriber."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..analysis.tempo import TempoEstimate
from ..core import NoteEvent
from ..merging import ActivationStats, MergedTimeline


@dataclass
class TranscriptionStats:
    """Diagnostics collected while transcribing one buffer."""

    windows_processed: int = 0
    frame_count: int = 0
    detections_above_threshold: int = 0
    activations: ActivationStats = field(default_factory=ActivationStats)
    processing_time: float = 0.0  # Seconds

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "windows_processed": self.windows_processed,
            "frame_count": self.frame_count,
            "detections_above_threshold": self.detections_above_threshold,
            "activations": self.activations.to_dict(),
            "processing_time": self.processing_time,
        }


@dataclass
class TranscriptionResult:
    """Notes, tempo and the timeline they were segmented from."""

    notes: List[NoteEvent]
    tempo: TempoEstimate
    timeline: MergedTimeline
    stats: TranscriptionStats

    @property
    def bpm(self) -> int:
        return self.tempo.bpm

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output (grids are omitted)."""
        return {
            "tempo": self.tempo.bpm,
            "tempo_snapped": self.tempo.snapped,
            "notes_count": len(self.notes),
            "notes": [n.to_dict() for n in self.notes],
            "stats": self.stats.to_dict(),
        }
