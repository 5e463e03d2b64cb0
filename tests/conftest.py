"""Shared fixtures: a small model geometry and scripted inference adapters."""

import numpy as np
import pytest

from notegrid.core import ModelConfig, DetectionConfig
from notegrid.model import ActivationGrids, InferenceAdapter

# 20 frames per window, 4 pitches, 100 fps
SMALL_MODEL = ModelConfig(
    sample_rate=1000,
    fft_hop=10,
    window_length=200,
    annotations_fps=100,
    n_pitches=4,
    n_contour_bins=12,
    lowest_midi=60,
)


class ScriptedAdapter(InferenceAdapter):
    """Serve window slices of a precomputed timeline.

    `note`, `onset` and `contour` are indexed by frame on the padded
    timeline; window k covers frames [k * hop_frames, k * hop_frames + frames).
    """

    def __init__(self, model, config, note, onset=None, contour=None):
        self.model = model
        self.frames = model.window_length // model.fft_hop
        self.hop_frames = config.hop_size(model) // model.fft_hop
        self.note = note
        self.onset = np.zeros_like(note) if onset is None else onset
        self.contour = (
            np.zeros((len(note), model.n_contour_bins)) if contour is None else contour
        )
        self.calls = 0

    def _slice(self, grid, start):
        out = np.zeros((self.frames, grid.shape[1]), dtype=np.float64)
        chunk = grid[start:start + self.frames]
        out[:len(chunk)] = chunk
        return out

    def infer(self, window):
        assert len(window) == self.model.window_length
        start = self.calls * self.hop_frames
        self.calls += 1
        return ActivationGrids(
            note=self._slice(self.note, start),
            onset=self._slice(self.onset, start),
            contour=self._slice(self.contour, start),
        )


def ramp_adapter(model, config, total_frames, scale=1000.0):
    """Adapter whose note channel 0 holds each frame's padded position / scale."""
    note = np.zeros((total_frames, model.n_pitches))
    note[:, 0] = np.arange(total_frames) / scale
    return ScriptedAdapter(model, config, note)


def make_grids(model, frames, note=None, onset=None):
    """ActivationGrids with optional note/onset overrides and zero contour."""
    return ActivationGrids(
        note=np.zeros((frames, model.n_pitches)) if note is None else note,
        onset=np.zeros((frames, model.n_pitches)) if onset is None else onset,
        contour=np.zeros((frames, model.n_contour_bins)),
    )


@pytest.fixture
def small_model():
    return SMALL_MODEL


@pytest.fixture
def small_config():
    # 4 overlapping frames: 40 sample overlap, 160 sample hop, 20 sample pre-pad
    return DetectionConfig(overlapping_frames=4)
