"""Tests for GPS signal quality evaluation"""
import math
import unittest

from navigation.signal_monitor import SignalQualityMonitor
from notifications.notification_manager import AlertLevel, NotificationSink


class CapturingSink(NotificationSink):
    def __init__(self):
        self.messages = []

    def notify(self, message, level):
        self.messages.append((message, level))


class TestSignalQualityMonitor(unittest.TestCase):

    def setUp(self):
        self.sink = CapturingSink()
        self.monitor = SignalQualityMonitor(self.sink)

    def test_defaults(self):
        self.assertTrue(self.monitor.available)
        self.assertEqual(self.monitor.satellite_count, 8)
        self.assertEqual(self.monitor.accuracy, 3.0)
        self.assertEqual(self.sink.messages, [])

    def test_good_and_poor_signal(self):
        self.assertTrue(self.monitor.update(8, 3.0).available)
        self.assertFalse(self.monitor.update(2, 15.0).available)

    def test_thresholds_are_inclusive(self):
        self.assertTrue(self.monitor.update(4, 10.0).available)
        self.assertFalse(self.monitor.update(3, 10.0).available)
        self.assertTrue(self.monitor.update(4, 10.0).available)
        self.assertFalse(self.monitor.update(4, 10.01).available)

    def test_loss_notified_once(self):
        state = self.monitor.update(1, 3.0)
        self.assertTrue(state.lost)
        self.assertFalse(state.restored)
        self.monitor.update(0, 50.0)
        self.monitor.update(2, 3.0)
        self.assertEqual(self.sink.messages, [("GPS signal lost!", AlertLevel.CRITICAL)])

    def test_restore_notified(self):
        self.monitor.update(1, 3.0)
        state = self.monitor.update(8, 3.0)
        self.assertTrue(state.restored)
        self.assertEqual(self.sink.messages[-1], ("GPS signal restored", AlertLevel.INFO))

    def test_no_notification_without_edge(self):
        self.monitor.update(10, 1.5)
        self.monitor.update(6, 4.0)
        self.assertEqual(self.sink.messages, [])

    def test_negative_readings_clamped(self):
        state = self.monitor.update(-3, -2.0)
        self.assertEqual(state.satellite_count, 0)
        self.assertEqual(state.accuracy_m, 0.0)
        self.assertFalse(state.available)

    def test_nan_accuracy_is_unusable(self):
        state = self.monitor.update(12, float('nan'))
        self.assertTrue(math.isinf(state.accuracy_m))
        self.assertFalse(state.available)

    def test_non_finite_satellite_count_treated_as_none(self):
        for reading in (float('nan'), float('inf'), float('-inf')):
            state = self.monitor.update(reading, 3.0)
            self.assertEqual(state.satellite_count, 0)
            self.assertFalse(state.available)
        self.assertEqual(self.sink.messages, [("GPS signal lost!", AlertLevel.CRITICAL)])

    def test_custom_thresholds(self):
        monitor = SignalQualityMonitor(self.sink, min_satellites=6, max_accuracy_m=2.0)
        self.assertFalse(monitor.available)
        self.assertTrue(monitor.update(6, 2.0).available)


if __name__ == '__main__':
    unittest.main()
