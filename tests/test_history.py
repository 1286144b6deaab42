"""Tests for seedphen.history — opt-in hourly recording."""

import numpy as np

from seedphen.history import HistoryRecorder


class TestHistoryRecorder:
    def test_disabled_is_noop(self):
        recorder = HistoryRecorder(enabled=False)
        recorder.capture(np.ones(3))
        assert len(recorder) == 0
        assert recorder.to_array() is None

    def test_vector_snapshots_stack(self):
        recorder = HistoryRecorder(enabled=True)
        for k in range(4):
            recorder.capture(np.full(3, float(k)))
        history = recorder.to_array()
        assert history.shape == (4, 3)
        np.testing.assert_array_equal(history[:, 0], [0.0, 1.0, 2.0, 3.0])

    def test_scalar_snapshots(self):
        recorder = HistoryRecorder(enabled=True)
        for total in (7.0, 7.0, 14.0):
            recorder.capture(total)
        np.testing.assert_array_equal(recorder.to_array(), [7.0, 7.0, 14.0])

    def test_capture_copies(self):
        recorder = HistoryRecorder(enabled=True)
        values = np.zeros(2)
        recorder.capture(values)
        values[:] = 5.0
        np.testing.assert_array_equal(recorder.to_array()[0], [0.0, 0.0])

    def test_empty_enabled(self):
        history = HistoryRecorder(enabled=True).to_array()
        assert history is not None
        assert history.size == 0
