"""Inference adapter contract."""

from abc import ABC, abstractmethod

import numpy as np

from .activations import ActivationGrids


class InferenceAdapter(ABC):
    """Abstract base class for running the model on one window."""

    @abstractmethod
    def infer(self, window: np.ndarray) -> ActivationGrids:
        """
        Run the model on a single window.

        Args:
            window: Exactly `window_length` samples at the model sample rate

        Returns:
            Note, onset and contour grids, each shaped [frames, channels]
        """
        pass
