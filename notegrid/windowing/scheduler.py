"""Sliding-window scheduling over a full sample buffer."""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np

from ..core import ModelConfig, DetectionConfig, InputTooLargeError
from ..core.constants import MAX_INDEX

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Window:
    """A fixed-length slice of the padded sample buffer."""

    index: int  # Position in the window sequence
    start: int  # Offset of the first sample in the padded buffer
    samples: np.ndarray  # Always exactly `window_length` samples


class WindowScheduler:
    """Produce overlapping, fixed-length windows covering a sample buffer.

    The buffer is pre-padded with half an overlap of silence so that the
    frames dropped from the start of every window during merging line up
    with the frames kept from the end of the previous one.
    """

    def __init__(
        self,
        model: Optional[ModelConfig] = None,
        config: Optional[DetectionConfig] = None,
    ):
        """
        Initialize WindowScheduler.

        Args:
            model: Model geometry (window length, FFT hop)
            config: Detection configuration (overlapping frame count)

        Raises:
            ConfigurationError: If the overlap is not shorter than the window
        """
        self.model = model or ModelConfig()
        self.config = config or DetectionConfig()

        self.window_length = self.model.window_length
        self.overlap_length = self.config.overlap_length(self.model)
        self.hop_size = self.config.hop_size(self.model)
        self.pad_length = self.overlap_length // 2

    def padded_length(self, sample_count: int) -> int:
        """Length of the buffer after pre-padding."""
        padded = sample_count + self.pad_length
        if padded > MAX_INDEX:
            raise InputTooLargeError(
                f"Audio too large: {sample_count} + {self.pad_length} samples "
                f"exceeds {MAX_INDEX}"
            )
        return padded

    def window_count(self, sample_count: int) -> int:
        """Number of windows `windows()` yields for `sample_count` samples."""
        padded = self.padded_length(sample_count)
        if padded == 0:
            return 0
        remaining = padded - self.window_length
        if remaining <= 0:
            return 1
        return -(-remaining // self.hop_size) + 1

    def pad(self, audio: np.ndarray) -> np.ndarray:
        """Prepend half an overlap of zeros to the buffer."""
        self.padded_length(len(audio))
        return np.concatenate([np.zeros(self.pad_length, dtype=np.float32), audio.astype(np.float32)])

    def windows(self, audio: np.ndarray) -> Iterator[Window]:
        """
        Yield windows in strictly increasing offset order.

        The final window may extend past the end of the buffer; it is
        zero-padded on the right and iteration stops after it.

        Args:
            audio: Mono sample buffer at the model sample rate

        Yields:
            Window objects
        """
        padded = self.pad(audio)
        total = len(padded)
        logger.debug(
            "Scheduling windows: samples=%d, padded=%d, window=%d, hop=%d, overlap=%d",
            len(audio), total, self.window_length, self.hop_size, self.overlap_length,
        )

        index = 0
        start = 0
        while start < total:
            chunk = padded[start:start + self.window_length]
            if len(chunk) < self.window_length:
                chunk = np.pad(chunk, (0, self.window_length - len(chunk)))
            yield Window(index=index, start=start, samples=chunk)

            if start + self.window_length >= total:
                break
            index += 1
            start += self.hop_size
