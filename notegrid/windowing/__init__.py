"""Windowing layer - Split long audio into fixed-size model windows."""

from .scheduler import Window, WindowScheduler

__all__ = [
    "Window",
    "WindowScheduler",
]
