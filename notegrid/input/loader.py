"""Audio loading and preprocessing utilities."""

import logging
from pathlib import Path
from typing import Tuple, Optional

import numpy as np
import librosa

from ..core.constants import MODEL_SAMPLE_RATE

logger = logging.getLogger(__name__)


class AudioLoader:
    """Load audio as a mono buffer at the model sample rate."""

    SUPPORTED_FORMATS = {".wav", ".mp3", ".flac", ".ogg", ".m4a", ".mp4"}

    def __init__(
        self,
        target_sr: int = MODEL_SAMPLE_RATE,
        boost_quiet: bool = True,
        quiet_peak: float = 0.5,
        target_peak: float = 0.95,
    ):
        """
        Initialize AudioLoader.

        Args:
            target_sr: Target sample rate for resampling
            boost_quiet: Rescale audio whose peak is below `quiet_peak`
            quiet_peak: Peak amplitude under which audio counts as too quiet
            target_peak: Peak amplitude quiet audio is rescaled to
        """
        self.target_sr = target_sr
        self.boost_quiet = boost_quiet
        self.quiet_peak = quiet_peak
        self.target_peak = target_peak

    def load(self, path: str) -> Tuple[np.ndarray, int]:
        """
        Load audio file and preprocess.

        Args:
            path: Path to audio file

        Returns:
            Tuple of (audio array, sample rate)

        Raises:
            ValueError: If file format not supported
            FileNotFoundError: If file doesn't exist
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")

        if path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {self.SUPPORTED_FORMATS}"
            )

        # librosa handles resampling and mono conversion
        audio, sr = librosa.load(str(path), sr=self.target_sr, mono=True)

        if self.boost_quiet:
            audio = self.ensure_loudness(audio)

        return audio.astype(np.float32), sr

    def ensure_loudness(self, audio: np.ndarray) -> np.ndarray:
        """Rescale quiet audio so its peak reaches `target_peak`."""
        if len(audio) == 0:
            return audio
        peak = float(np.abs(audio).max())
        if 0 < peak < self.quiet_peak:
            logger.info("Audio peak %.3f is quiet, rescaling to %.2f", peak, self.target_peak)
            return audio * (self.target_peak / peak)
        return audio

    def get_duration(self, audio: np.ndarray, sr: Optional[int] = None) -> float:
        """Get duration in seconds."""
        sr = sr or self.target_sr
        return len(audio) / sr
