"""Segmentation layer - Turn activation timelines into discrete notes."""

from .segmenter import NoteSegmenter, Segment

__all__ = [
    "NoteSegmenter",
    "Segment",
]
