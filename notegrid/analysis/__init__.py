"""Analysis layer - Musical analysis of detected notes."""

from .tempo import TempoEstimator, TempoEstimate

__all__ = [
    "TempoEstimator",
    "TempoEstimate",
]
