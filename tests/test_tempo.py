"""Tests for onset-interval tempo estimation."""

from notegrid.analysis import TempoEstimator
from notegrid.core import NoteEvent


def notes_at(*onsets, pitch=60):
    return [NoteEvent(pitch=pitch, start=t, end=t + 0.2, confidence=0.8) for t in onsets]


class TestDefaults:
    """Too little evidence falls back to 120 BPM."""

    def test_no_notes(self):
        estimate = TempoEstimator().estimate([])
        assert estimate.bpm == 120
        assert estimate.is_default

    def test_one_note(self):
        assert TempoEstimator().detect(notes_at(1.0)) == 120

    def test_all_intervals_filtered(self):
        # 0.01s is ornamentation, 2.99s is a long rest
        estimate = TempoEstimator().estimate(notes_at(0.0, 0.01, 3.0))
        assert estimate.bpm == 120
        assert estimate.is_default

    def test_simultaneous_onsets_are_ignored(self):
        estimate = TempoEstimator().estimate(notes_at(0.0, 0.0) + notes_at(0.0, pitch=64))
        assert estimate.is_default


class TestEstimation:
    """Histogram voting and snapping."""

    def test_half_second_quarter_notes(self):
        estimate = TempoEstimator().estimate(notes_at(0.0, 0.5, 1.0, 1.5))
        assert estimate.bpm == 120
        assert estimate.snapped

    def test_unsorted_input(self):
        assert TempoEstimator().detect(notes_at(1.5, 0.0, 1.0, 0.5)) == 120

    def test_uncommon_tempo_is_not_snapped(self):
        interval = 60.0 / 176
        estimate = TempoEstimator().estimate(notes_at(*[i * interval for i in range(8)]))

        assert not estimate.snapped
        assert abs(estimate.bpm - 176) <= 2
        assert estimate.raw_bpm == estimate.bpm

    def test_result_stays_in_range(self):
        estimate = TempoEstimator().estimate(notes_at(0.0, 1.9, 3.8))
        assert 40 <= estimate.bpm <= 200

    def test_votes_respect_tempo_range(self):
        histogram = TempoEstimator().vote([1.5])
        # 60 / 1.5 = 40 BPM; 38 and 39 fall outside the range
        assert set(histogram) == {40, 41, 42}

    def test_divisions_all_vote(self):
        histogram = TempoEstimator().vote([0.25])
        # 240 (out of range), 120, 60
        assert set(histogram) == set(range(118, 123)) | set(range(58, 63))


class TestSnap:
    """Snapping to common metronome markings."""

    def test_122_snaps_to_120(self):
        assert TempoEstimator().snap(122) == 120

    def test_within_three(self):
        estimator = TempoEstimator()
        assert estimator.snap(87) == 90
        assert estimator.snap(163) == 160

    def test_too_far_to_snap(self):
        estimator = TempoEstimator()
        assert estimator.snap(125) is None
        assert estimator.snap(176) is None

    def test_exact_tie_prefers_lower(self):
        estimator = TempoEstimator(common_tempos=(100, 106))
        assert estimator.snap(103) == 100
