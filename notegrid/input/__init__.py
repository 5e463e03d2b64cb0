"""Input layer - Audio loading."""

from .loader import AudioLoader

__all__ = [
    "AudioLoader",
]
