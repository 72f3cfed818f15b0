"""Tests for replaying NMEA sentences into the navigation facade"""
import os
import tempfile
import unittest

from gps.nmea_feed import NMEAFeed
from navigation.gps_navigator import GPSNavigator
from navigation.core.data_types import GeoCoordinate, NavigationStatus
from notifications.notification_manager import NotificationManager

GGA_FIX = "$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47"
RMC_ACTIVE = "$GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A"
GGA_NO_FIX = "$GPGGA,123520,,,,,0,00,99.9,,M,,M,,"
RMC_VOID = "$GPRMC,123520,V,,,,,,,230394,,"
RMC_BAD_SPEED = "$GPRMC,123519,A,4807.038,N,01131.000,E,abc,084.4,230394,003.1,W*20"
RMC_STATIONARY = "$GPRMC,123519,A,4807.038,N,01131.000,E,000.0,000.0,230394,003.1,W*66"
GGA_BAD_ALTITUDE = "$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,xx,M,46.9,M,,*69"


class TestNMEAFeed(unittest.TestCase):

    def setUp(self):
        self.notifications = NotificationManager(sound_enabled=False)
        self.navigator = GPSNavigator(self.notifications)
        self.feed = NMEAFeed(self.navigator, uere_m=5.0)

    def test_gga_updates_signal_and_location(self):
        self.assertTrue(self.feed.feed_sentence(GGA_FIX))

        location = self.navigator.current_location
        self.assertAlmostEqual(location.latitude, 48.1173, places=4)
        self.assertAlmostEqual(location.longitude, 11.516667, places=5)
        self.assertAlmostEqual(location.altitude, 545.4)
        self.assertEqual(self.navigator.satellite_count, 8)
        self.assertAlmostEqual(self.navigator.accuracy, 4.5)
        self.assertTrue(self.navigator.signal_available)

    def test_rmc_updates_speed_and_heading(self):
        self.assertTrue(self.feed.feed_sentence(RMC_ACTIVE))
        self.assertAlmostEqual(self.navigator.current_speed, 22.4 * 1.852)
        self.assertAlmostEqual(self.navigator.current_heading, 84.4)

    def test_void_rmc_ignored(self):
        self.navigator.update_speed(30.0)
        self.assertFalse(self.feed.feed_sentence(RMC_VOID))
        self.assertEqual(self.navigator.current_speed, 30.0)
        self.assertEqual(self.feed.sentences_skipped, 1)

    def test_no_fix_drops_signal_and_keeps_location(self):
        self.feed.feed_sentence(GGA_FIX)
        self.navigator.set_destination(GeoCoordinate(48.2, 11.6), "Target")
        self.navigator.start_navigation()
        location = self.navigator.current_location

        self.assertTrue(self.feed.feed_sentence(GGA_NO_FIX))

        self.assertFalse(self.navigator.signal_available)
        self.assertEqual(self.navigator.status, NavigationStatus.GPS_LOST)
        self.assertEqual(self.navigator.current_location, location)

    def test_garbage_skipped(self):
        self.assertFalse(self.feed.feed_sentence("this is not nmea"))
        self.assertFalse(self.feed.feed_sentence(""))
        # Corrupted checksum
        self.assertFalse(self.feed.feed_sentence(GGA_FIX[:-2] + "00"))
        self.assertIsNone(self.navigator.current_location)

    def test_non_numeric_speed_skipped(self):
        self.navigator.update_speed(30.0)
        self.navigator.update_heading(10.0)

        self.assertFalse(self.feed.feed_sentence(RMC_BAD_SPEED))

        self.assertEqual(self.navigator.current_speed, 30.0)
        self.assertEqual(self.navigator.current_heading, 10.0)
        self.assertEqual(self.feed.sentences_skipped, 1)

    def test_non_numeric_altitude_skipped_without_partial_update(self):
        self.assertFalse(self.feed.feed_sentence(GGA_BAD_ALTITUDE))

        self.assertIsNone(self.navigator.current_location)
        self.assertEqual(self.navigator.accuracy, 3.0)
        self.assertEqual(self.feed.sentences_skipped, 1)

    def test_malformed_sentence_does_not_abort_replay(self):
        applied = self.feed.replay([RMC_BAD_SPEED, GGA_BAD_ALTITUDE, GGA_FIX])
        self.assertEqual(applied, 1)
        self.assertIsNotNone(self.navigator.current_location)

    def test_stationary_rmc_zeroes_speed_and_heading(self):
        self.navigator.update_speed(30.0)
        self.navigator.update_heading(45.0)

        self.assertTrue(self.feed.feed_sentence(RMC_STATIONARY))

        self.assertEqual(self.navigator.current_speed, 0.0)
        self.assertEqual(self.navigator.current_heading, 0.0)

    def test_replay_counts_applied(self):
        applied = self.feed.replay([GGA_FIX, "garbage", RMC_ACTIVE, RMC_VOID])
        self.assertEqual(applied, 2)
        self.assertEqual(self.feed.sentences_applied, 2)
        self.assertEqual(self.feed.sentences_skipped, 2)

    def test_replay_file(self):
        fd, path = tempfile.mkstemp(suffix=".nmea")
        try:
            with os.fdopen(fd, "w") as f:
                f.write(f"{GGA_FIX}\r\n{RMC_ACTIVE}\r\n")
            self.assertEqual(self.feed.replay_file(path), 2)
        finally:
            os.remove(path)
        self.assertIsNotNone(self.navigator.current_location)


if __name__ == '__main__':
    unittest.main()
