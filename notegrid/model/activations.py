"""Activation grids produced by the pitch-detection model."""

from dataclasses import dataclass

import numpy as np

from ..core import ModelConfig, ModelOutputShapeError


def sigmoid(x: np.ndarray) -> np.ndarray:
    """Logistic function, elementwise."""
    with np.errstate(over="ignore"):
        return 1.0 / (1.0 + np.exp(-x))


def _squash_out_of_range(grid: np.ndarray) -> np.ndarray:
    # In-range values are already probabilities and pass through unchanged
    return np.where((grid < 0.0) | (grid > 1.0), sigmoid(grid), grid)


@dataclass(frozen=True)
class ActivationGrids:
    """Note, onset and contour grids sharing one frame axis.

    Each grid is indexed [frame, channel]. Note and onset have one channel
    per piano key; contour has a finer pitch resolution.
    """

    note: np.ndarray
    onset: np.ndarray
    contour: np.ndarray

    @property
    def frame_count(self) -> int:
        """Number of frames on the shared time axis."""
        return self.note.shape[0]

    @classmethod
    def empty(cls, model: ModelConfig) -> "ActivationGrids":
        """Zero-frame grids with the model's channel counts."""
        return cls(
            note=np.zeros((0, model.n_pitches), dtype=np.float32),
            onset=np.zeros((0, model.n_pitches), dtype=np.float32),
            contour=np.zeros((0, model.n_contour_bins), dtype=np.float32),
        )

    def validate(self, model: ModelConfig) -> None:
        """
        Check rank, channel counts and frame agreement.

        Raises:
            ModelOutputShapeError: If any grid has an unexpected shape
        """
        expected = {
            "note": model.n_pitches,
            "onset": model.n_pitches,
            "contour": model.n_contour_bins,
        }
        for name, channels in expected.items():
            grid = getattr(self, name)
            if grid is None or np.ndim(grid) != 2:
                raise ModelOutputShapeError(
                    f"Expected 2-D {name} grid, got shape {np.shape(grid)}"
                )
            if grid.shape[1] != channels:
                raise ModelOutputShapeError(
                    f"Expected {channels} {name} channels, got {grid.shape[1]}"
                )
        frames = {self.note.shape[0], self.onset.shape[0], self.contour.shape[0]}
        if len(frames) != 1:
            raise ModelOutputShapeError(
                f"Grids disagree on frame count: note={self.note.shape[0]}, "
                f"onset={self.onset.shape[0]}, contour={self.contour.shape[0]}"
            )

    def out_of_range(self) -> bool:
        """True if any value lies outside [0, 1]."""
        return any(
            grid.size > 0 and (grid.min() < 0.0 or grid.max() > 1.0)
            for grid in (self.note, self.onset, self.contour)
        )

    def normalized(self) -> "ActivationGrids":
        """Grids with only the values outside [0, 1] passed through the logistic function."""
        return ActivationGrids(
            note=_squash_out_of_range(self.note),
            onset=_squash_out_of_range(self.onset),
            contour=_squash_out_of_range(self.contour),
        )

    def frames(self, start: int, stop: int) -> "ActivationGrids":
        """Frame range [start, stop) of all three grids."""
        return ActivationGrids(
            note=self.note[start:stop],
            onset=self.onset[start:stop],
            contour=self.contour[start:stop],
        )
