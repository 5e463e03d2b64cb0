"""Overlap-aware reassembly of per-window activation grids.

Consecutive windows share `overlapping_frames` frames. Each inner window
edge drops half of them, so every instant of the audio is represented by
exactly one frame in the merged timeline:

    window 0:  [kept ........................ | drop]
    window 1:               [drop | kept ............ | drop]
    window 2:                              [drop | kept ...........]

The first window keeps its leading frames and the last window keeps its
trailing frames. The result is truncated to the frame count implied by the
original sample count so right-padding of the final window never leaks.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Optional, Sequence, Tuple

import numpy as np

from ..core import ModelConfig, DetectionConfig, InputTooLargeError
from ..core.constants import MAX_INDEX
from ..model import ActivationGrids

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActivationStats:
    """Running statistics over every merged activation value."""

    minimum: float = float("inf")
    maximum: float = float("-inf")
    total: float = 0.0
    count: int = 0
    normalized: bool = False  # A sigmoid was applied to at least one value

    @property
    def mean(self) -> Optional[float]:
        """Mean activation, or None before any value was seen."""
        if self.count == 0:
            return None
        return self.total / self.count

    def update(self, grids: ActivationGrids, normalized: bool = False) -> "ActivationStats":
        """Return a copy that also accounts for `grids`."""
        minimum, maximum = self.minimum, self.maximum
        total, count = self.total, self.count
        for grid in (grids.note, grids.onset, grids.contour):
            if grid.size == 0:
                continue
            minimum = min(minimum, float(grid.min()))
            maximum = max(maximum, float(grid.max()))
            total += float(grid.sum(dtype=np.float64))
            count += grid.size
        return ActivationStats(
            minimum=minimum,
            maximum=maximum,
            total=total,
            count=count,
            normalized=self.normalized or normalized,
        )

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary."""
        return {
            "min": self.minimum if self.count else None,
            "max": self.maximum if self.count else None,
            "mean": self.mean,
            "count": self.count,
            "normalized": self.normalized,
        }


@dataclass(frozen=True)
class MergedTimeline:
    """Continuous note, onset and contour grids for a whole buffer."""

    grids: ActivationGrids
    frame_rate: float

    @property
    def note(self) -> np.ndarray:
        return self.grids.note

    @property
    def onset(self) -> np.ndarray:
        return self.grids.onset

    @property
    def contour(self) -> np.ndarray:
        return self.grids.contour

    @property
    def frame_count(self) -> int:
        return self.grids.frame_count

    @property
    def duration(self) -> float:
        """Timeline length in seconds."""
        return self.frame_count / self.frame_rate


@dataclass(frozen=True)
class MergeState:
    """Progress of one merge: accepted frame ranges, cursor and stats."""

    expected_frames: int
    window_count: int
    parts: Tuple[ActivationGrids, ...] = ()
    cursor: int = 0
    windows_merged: int = 0
    stats: ActivationStats = field(default_factory=ActivationStats)


class OverlapMerger:
    """Merge per-window activation grids, discarding duplicated overlap frames."""

    def __init__(
        self,
        model: Optional[ModelConfig] = None,
        config: Optional[DetectionConfig] = None,
    ):
        """
        Initialize OverlapMerger.

        Args:
            model: Model geometry (channel counts, frame rate)
            config: Detection configuration (overlap, normalization)
        """
        self.model = model or ModelConfig()
        self.config = config or DetectionConfig()
        self.discard = self.config.overlap_frames_per_side

    def kept_range(self, index: int, window_count: int, frames: int) -> Tuple[int, int]:
        """Frame range [start, stop) of window `index` that survives merging."""
        start = 0 if index == 0 else self.discard
        stop = frames if index == window_count - 1 else frames - self.discard
        return start, max(start, stop)

    def start(self, sample_count: int, window_count: int) -> MergeState:
        """
        Begin a merge for a buffer of `sample_count` samples.

        Raises:
            InputTooLargeError: If the merged grids could not be indexed
        """
        expected = self.model.expected_frames(sample_count)
        widest = max(self.model.n_pitches, self.model.n_contour_bins)
        if expected * widest > MAX_INDEX:
            raise InputTooLargeError(
                f"Merged timeline of {expected} frames x {widest} channels "
                f"exceeds {MAX_INDEX} values"
            )
        return MergeState(expected_frames=expected, window_count=window_count)

    def step(self, state: MergeState, grids: ActivationGrids) -> MergeState:
        """
        Append the kept frames of the next window.

        Args:
            state: Merge state after the previous window
            grids: This window's activations

        Returns:
            Updated merge state

        Raises:
            ModelOutputShapeError: If the grids have an unexpected shape
        """
        grids.validate(self.model)
        index = state.windows_merged

        normalized = False
        if self.config.auto_normalize and grids.out_of_range():
            grids = grids.normalized()
            normalized = True

        start, stop = self.kept_range(index, state.window_count, grids.frame_count)
        stop = min(stop, start + max(0, state.expected_frames - state.cursor))
        kept = grids.frames(start, stop)

        return replace(
            state,
            parts=state.parts + (kept,),
            cursor=state.cursor + kept.frame_count,
            windows_merged=index + 1,
            stats=state.stats.update(kept, normalized=normalized),
        )

    def finish(self, state: MergeState) -> MergedTimeline:
        """Concatenate the accepted frame ranges into a timeline."""
        if not state.parts:
            grids = ActivationGrids.empty(self.model)
        else:
            grids = ActivationGrids(
                note=np.concatenate([p.note for p in state.parts]),
                onset=np.concatenate([p.onset for p in state.parts]),
                contour=np.concatenate([p.contour for p in state.parts]),
            )
        logger.info(
            "Merged %d windows into %d frames (expected %d, normalized=%s)",
            state.windows_merged, grids.frame_count, state.expected_frames,
            state.stats.normalized,
        )
        return MergedTimeline(grids=grids, frame_rate=self.model.annotations_fps)

    def merge(
        self,
        windows: Sequence[ActivationGrids],
        sample_count: int,
    ) -> Tuple[MergedTimeline, ActivationStats]:
        """
        Merge a complete, ordered list of window activations.

        Args:
            windows: One ActivationGrids per window, in offset order
            sample_count: Length of the original (unpadded) buffer

        Returns:
            Tuple of (merged timeline, activation statistics)
        """
        state = self.start(sample_count, len(windows))
        for grids in windows:
            state = self.step(state, grids)
        return self.finish(state), state.stats
