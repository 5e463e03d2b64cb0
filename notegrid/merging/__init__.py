"""Merging layer - Stitch per-window grids into one continuous timeline."""

from .merger import ActivationStats, MergeState, MergedTimeline, OverlapMerger

__all__ = [
    "ActivationStats",
    "MergeState",
    "MergedTimeline",
    "OverlapMerger",
]
