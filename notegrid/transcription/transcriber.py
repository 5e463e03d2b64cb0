"""End-to-end note transcription over arbitrarily long audio."""

import logging
import time
from typing import Callable, Optional

import numpy as np

from .result import TranscriptionResult, TranscriptionStats
from ..analysis.tempo import TempoEstimator
from ..core import ModelConfig, DetectionConfig, TranscriptionCancelled
from ..merging import OverlapMerger
from ..model import InferenceAdapter
from ..segmentation import NoteSegmenter
from ..windowing import WindowScheduler

logger = logging.getLogger(__name__)


class NoteTranscriber:
    """Run the windowed model over a buffer and turn its output into notes.

    Windows are inferred and merged strictly in offset order; the merger's
    overlap handling depends on it.
    """

    def __init__(
        self,
        adapter: InferenceAdapter,
        model: Optional[ModelConfig] = None,
        config: Optional[DetectionConfig] = None,
        tempo_estimator: Optional[TempoEstimator] = None,
    ):
        """
        Initialize NoteTranscriber.

        Args:
            adapter: Runs the model on one window
            model: Model geometry
            config: Detection configuration
            tempo_estimator: Estimator applied to the detected notes

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.adapter = adapter
        self.model = model or ModelConfig()
        self.config = config or DetectionConfig()

        self.scheduler = WindowScheduler(self.model, self.config)
        self.merger = OverlapMerger(self.model, self.config)
        self.segmenter = NoteSegmenter(self.model, self.config)
        self.tempo_estimator = tempo_estimator or TempoEstimator()

    def transcribe(
        self,
        audio: np.ndarray,
        sr: Optional[int] = None,
        should_cancel: Optional[Callable[[], bool]] = None,
        progress: Optional[Callable[[int, int], None]] = None,
    ) -> TranscriptionResult:
        """
        Transcribe a mono buffer to notes and a tempo.

        Args:
            audio: Mono audio at the model sample rate
            sr: Sample rate of `audio`, checked against the model's if given
            should_cancel: Polled between windows; returning True aborts
            progress: Called with (windows done, total windows)

        Returns:
            TranscriptionResult

        Raises:
            ValueError: If the audio is not mono or has the wrong sample rate
            TranscriptionCancelled: If `should_cancel` returned True
            InputTooLargeError: If the audio is too long to index
            ModelOutputShapeError: If the adapter returns malformed grids
        """
        audio = np.asarray(audio)
        if audio.ndim != 1:
            raise ValueError(f"Expected mono audio, got shape {audio.shape}")
        if sr is not None and sr != self.model.sample_rate:
            raise ValueError(
                f"Audio must be resampled to {self.model.sample_rate} Hz. Current: {sr} Hz"
            )

        start_time = time.time()
        sample_count = len(audio)
        total = self.scheduler.window_count(sample_count)
        logger.info(
            "Processing audio: %d samples (%.2f seconds) in %d windows",
            sample_count, sample_count / self.model.sample_rate, total,
        )

        state = self.merger.start(sample_count, total)
        for window in self.scheduler.windows(audio):
            if should_cancel is not None and should_cancel():
                logger.info("Transcription cancelled after %d of %d windows", window.index, total)
                raise TranscriptionCancelled(
                    f"Cancelled after {window.index} of {total} windows"
                )
            state = self.merger.step(state, self.adapter.infer(window.samples))
            if progress is not None:
                progress(window.index + 1, total)

        timeline = self.merger.finish(state)
        notes, detections = self.segmenter.segment_with_stats(timeline)
        tempo = self.tempo_estimator.estimate(notes)

        stats = TranscriptionStats(
            windows_processed=state.windows_merged,
            frame_count=timeline.frame_count,
            detections_above_threshold=detections,
            activations=state.stats,
            processing_time=time.time() - start_time,
        )
        logger.info(
            "Detected %d notes at %d BPM in %.2fs", len(notes), tempo.bpm, stats.processing_time
        )
        return TranscriptionResult(notes=notes, tempo=tempo, timeline=timeline, stats=stats)
