"""Tempo estimation from note onsets."""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core import NoteEvent
from ..core.constants import (
    DEFAULT_TEMPO,
    MIN_TEMPO,
    MAX_TEMPO,
    MIN_BEAT_INTERVAL,
    MAX_BEAT_INTERVAL,
    BEAT_DIVISIONS,
    TEMPO_VOTE_TOLERANCE,
    COMMON_TEMPOS,
    COMMON_TEMPO_SNAP,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TempoEstimate:
    """Container for tempo estimation results."""

    bpm: int
    raw_bpm: Optional[int] = None  # Histogram winner before snapping
    votes: int = 0
    snapped: bool = False

    @property
    def is_default(self) -> bool:
        """True when there was not enough evidence to vote."""
        return self.raw_bpm is None


class TempoEstimator:
    """Estimate BPM by voting over inter-onset intervals.

    Each usable interval votes for the tempo it implies as a quarter,
    eighth and sixteenth note, with a small tolerance band. The winner is
    snapped to a common metronome marking when one is close.
    """

    def __init__(
        self,
        default_tempo: int = DEFAULT_TEMPO,
        tempo_range: Sequence[int] = (MIN_TEMPO, MAX_TEMPO),
        interval_range: Sequence[float] = (MIN_BEAT_INTERVAL, MAX_BEAT_INTERVAL),
        divisions: Sequence[int] = BEAT_DIVISIONS,
        tolerance: int = TEMPO_VOTE_TOLERANCE,
        common_tempos: Sequence[int] = COMMON_TEMPOS,
        snap_distance: int = COMMON_TEMPO_SNAP,
    ):
        """
        Initialize TempoEstimator.

        Args:
            default_tempo: Tempo returned without enough onsets
            tempo_range: Inclusive (min, max) BPM considered
            interval_range: Exclusive (min, max) onset interval in seconds
            divisions: Beat division hypotheses per interval
            tolerance: Votes also go to BPMs within this distance
            common_tempos: Metronome markings to snap to
            snap_distance: Maximum BPM distance for snapping
        """
        self.default_tempo = default_tempo
        self.min_tempo, self.max_tempo = tempo_range
        self.min_interval, self.max_interval = interval_range
        self.divisions = tuple(divisions)
        self.tolerance = tolerance
        self.common_tempos = tuple(common_tempos)
        self.snap_distance = snap_distance

    def estimate(self, notes: List[NoteEvent]) -> TempoEstimate:
        """
        Estimate tempo from note start times.

        Args:
            notes: Detected notes (any order)

        Returns:
            TempoEstimate with an integer BPM
        """
        if len(notes) < 2:
            return TempoEstimate(bpm=self.default_tempo)

        onsets = sorted(n.start for n in notes)
        intervals = [
            b - a for a, b in zip(onsets, onsets[1:])
            if self.min_interval < b - a < self.max_interval
        ]

        histogram = self.vote(intervals)
        if not histogram:
            return TempoEstimate(bpm=self.default_tempo)

        # Most votes wins; ties go to the tempo that was voted for first
        raw_bpm, votes = max(histogram.items(), key=lambda kv: kv[1])

        common = self.snap(raw_bpm)
        if common is not None:
            logger.info("Tempo detection: %d BPM -> snapped to common tempo %d BPM", raw_bpm, common)
            return TempoEstimate(bpm=common, raw_bpm=raw_bpm, votes=votes, snapped=True)

        logger.info("Tempo detection: %d BPM (%d votes)", raw_bpm, votes)
        return TempoEstimate(bpm=raw_bpm, raw_bpm=raw_bpm, votes=votes)

    def detect(self, notes: List[NoteEvent]) -> int:
        """Estimate tempo and return only the BPM."""
        return self.estimate(notes).bpm

    def vote(self, intervals: List[float]) -> Counter:
        """Build the BPM vote histogram for a list of onset intervals."""
        histogram = Counter()
        for interval in intervals:
            for division in self.divisions:
                bpm = round(60.0 / (interval * division))
                if not self.min_tempo <= bpm <= self.max_tempo:
                    continue
                for candidate in range(bpm - self.tolerance, bpm + self.tolerance + 1):
                    if self.min_tempo <= candidate <= self.max_tempo:
                        histogram[candidate] += 1
        return histogram

    def snap(self, bpm: int) -> Optional[int]:
        """Nearest common tempo within the snap distance, or None."""
        close = [t for t in self.common_tempos if abs(bpm - t) <= self.snap_distance]
        if not close:
            return None
        return min(close, key=lambda t: (abs(bpm - t), t))
