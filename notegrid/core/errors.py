"""Exceptions raised by notegrid."""


class NotegridError(Exception):
    """Base class for all notegrid errors."""


class ConfigurationError(NotegridError, ValueError):
    """Invalid model or detection configuration."""


class InputTooLargeError(NotegridError, OverflowError):
    """Audio long enough to overflow frame or flattened-grid indices."""


class ModelOutputShapeError(NotegridError, ValueError):
    """Inference adapter returned grids of an unexpected shape."""


class TranscriptionCancelled(NotegridError):
    """Raised when a caller cancels transcription between windows."""
