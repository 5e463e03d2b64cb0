"""Onset-aware note segmentation of a merged activation timeline."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

import numpy as np

from ..core import ModelConfig, DetectionConfig, NoteEvent
from ..merging import MergedTimeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Segment:
    """A run of active frames on one pitch channel."""

    start_frame: int
    end_frame: int  # Inclusive
    confidence: float  # Mean note activation over the run


class NoteSegmenter:
    """Segment per-channel note activity into NoteEvents.

    Activity above the note threshold is grouped into runs of consecutive
    frames. With onset splitting enabled, a run is also broken when the
    onset grid shows a new attack on the same pitch, so repeated notes
    played legato come out as separate events.
    """

    def __init__(
        self,
        model: Optional[ModelConfig] = None,
        config: Optional[DetectionConfig] = None,
    ):
        """
        Initialize NoteSegmenter.

        Args:
            model: Model geometry (frame rate, lowest MIDI pitch)
            config: Thresholds, minimum duration and onset splitting options
        """
        self.model = model or ModelConfig()
        self.config = config or DetectionConfig()

    def segment(self, timeline: MergedTimeline) -> List[NoteEvent]:
        """
        Detect notes on every pitch channel.

        Args:
            timeline: Merged note and onset grids

        Returns:
            Notes sorted by start time, then pitch
        """
        notes, _ = self.segment_with_stats(timeline)
        return notes

    def segment_with_stats(self, timeline: MergedTimeline) -> Tuple[List[NoteEvent], int]:
        """
        Detect notes and count frames above the note threshold.

        Returns:
            Tuple of (sorted notes, number of active note frames)
        """
        notes = []
        detections = 0
        if timeline.frame_count == 0:
            return notes, detections

        for channel in range(timeline.note.shape[1]):
            activity = timeline.note[:, channel]
            frames = np.flatnonzero(activity > self.config.note_threshold)
            if len(frames) == 0:
                continue
            detections += len(frames)

            onset_frames = set(
                np.flatnonzero(timeline.onset[:, channel] > self.config.onset_threshold).tolist()
            )
            segments = self.group_frames(frames, activity[frames], onset_frames)
            pitch = self.model.lowest_midi + channel

            if onset_frames and len(segments) > 1:
                logger.debug(
                    "MIDI %d: %d onsets, %d segments", pitch, len(onset_frames), len(segments)
                )

            for seg in segments:
                note = self._to_note(seg, pitch)
                if note is not None:
                    notes.append(note)

        notes.sort(key=lambda n: (n.start, n.pitch))
        return notes, detections

    def group_frames(
        self,
        frames: np.ndarray,
        values: np.ndarray,
        onset_frames: Set[int],
    ) -> List[Segment]:
        """
        Group ascending active frames into segments.

        Args:
            frames: Ascending frame indices above the note threshold
            values: Note activation at each of those frames
            onset_frames: Frames whose onset activation exceeds the onset threshold

        Returns:
            Segments in frame order
        """
        segments = []
        if len(frames) == 0:
            return segments

        split_on_onsets = self.config.onset_splitting and bool(onset_frames)
        start = end = int(frames[0])
        total = float(values[0])
        count = 1

        for frame, value in zip(frames[1:].tolist(), values[1:].tolist()):
            split = frame != end + 1
            if not split and split_on_onsets:
                split = self._onset_between(start, end, frame, onset_frames)

            if split:
                segments.append(Segment(start, end, total / count))
                start = end = frame
                total = value
                count = 1
            else:
                end = frame
                total += value
                count += 1

        segments.append(Segment(start, end, total / count))
        return segments

    def _onset_between(self, start: int, end: int, candidate: int, onset_frames: Set[int]) -> bool:
        # Scans [end, candidate + lookahead] and only counts onsets far enough
        # past the segment start; see DESIGN.md on the onset-split window.
        floor = start + self.config.min_frames_between_onsets
        for frame in range(end, candidate + self.config.onset_lookahead_frames + 1):
            if frame > floor and frame in onset_frames:
                logger.debug("Splitting at onset frame %d (segment started at %d)", frame, start)
                return True
        return False

    def _to_note(self, segment: Segment, pitch: int) -> Optional[NoteEvent]:
        start = self.model.frame_to_time(segment.start_frame)
        end = self.model.frame_to_time(segment.end_frame)
        duration = end - start
        if duration <= 0 or duration < self.config.min_note_duration:
            return None
        return NoteEvent(pitch=pitch, start=start, end=end, confidence=segment.confidence)
