"""
NMEA replay feed
Drives the navigation facade from recorded GGA and RMC sentences
"""

import logging
from pathlib import Path
from typing import Iterable, Union

import pynmea2

from navigation.core.data_types import GeoCoordinate
from navigation.gps_navigator import GPSNavigator

logger = logging.getLogger(__name__)

KNOTS_TO_KMH = 1.852


class NMEAFeed:
    """Feeds parsed NMEA sentences into a GPSNavigator"""

    def __init__(self, navigator: GPSNavigator, uere_m: float = 5.0):
        """
        Initialize NMEA feed

        Args:
            navigator: Facade receiving the sensor updates
            uere_m: User-equivalent range error; accuracy = HDOP * uere_m
        """
        self.navigator = navigator
        self.uere_m = uere_m
        self.sentences_applied = 0
        self.sentences_skipped = 0

    def feed_sentence(self, sentence: str) -> bool:
        """
        Parse one NMEA sentence and apply it

        Returns:
            True if the sentence produced at least one sensor update
        """
        sentence = sentence.strip()
        if not sentence:
            return False

        try:
            msg = pynmea2.parse(sentence)
        except pynmea2.ParseError as e:
            logger.debug(f"Failed to parse NMEA sentence: {e}")
            self.sentences_skipped += 1
            return False

        if isinstance(msg, pynmea2.GGA):
            applied = self._apply_gga(msg)
        elif isinstance(msg, pynmea2.RMC):
            applied = self._apply_rmc(msg)
        else:
            applied = False

        if applied:
            self.sentences_applied += 1
        else:
            self.sentences_skipped += 1
        return applied

    def replay(self, lines: Iterable[str]) -> int:
        """Feed every line, returning how many were applied"""
        return sum(1 for line in lines if self.feed_sentence(line))

    def replay_file(self, path: Union[str, Path]) -> int:
        """Replay an NMEA capture file"""
        path = Path(path)
        with open(path, encoding="ascii", errors="replace") as f:
            applied = self.replay(f)
        logger.info(f"📼 Replayed {path.name}: {applied} sentence(s) applied, "
                    f"{self.sentences_skipped} skipped")
        return applied

    def _apply_gga(self, gga: pynmea2.GGA) -> bool:
        """GGA carries fix quality, satellites and HDOP, then position"""
        try:
            fix_quality = int(gga.gps_qual) if gga.gps_qual else 0
            satellites = int(gga.num_sats) if gga.num_sats else 0
            hdop = float(gga.horizontal_dil) if gga.horizontal_dil else 99.9
            location = None
            if fix_quality != 0 and gga.lat and gga.lon:
                altitude = float(gga.altitude) if gga.altitude is not None else 0.0
                location = GeoCoordinate(float(gga.latitude), float(gga.longitude), altitude)
        except (ValueError, TypeError, AttributeError) as e:
            logger.debug(f"Error parsing GGA values: {e}")
            return False

        if fix_quality == 0:
            satellites = 0
        self.navigator.update_gps_signal(satellites, hdop * self.uere_m)

        if location is not None:
            self.navigator.update_location(location)
        return True

    def _apply_rmc(self, rmc: pynmea2.RMC) -> bool:
        """RMC carries speed over ground and course; void fixes are ignored"""
        if rmc.status != 'A':
            return False

        try:
            speed = float(rmc.spd_over_grnd) * KNOTS_TO_KMH if rmc.spd_over_grnd is not None else None
            heading = float(rmc.true_course) if rmc.true_course is not None else None
        except (ValueError, TypeError) as e:
            logger.debug(f"Error parsing RMC values: {e}")
            return False

        if speed is not None:
            self.navigator.update_speed(speed)
        if heading is not None:
            self.navigator.update_heading(heading)
        return True
