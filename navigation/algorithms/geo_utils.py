"""Geographic utility functions for navigation"""
import math
from typing import Optional

from ..core.data_types import GeoCoordinate, is_valid_coordinate


class GeoUtils:
    """Spherical-earth geometry on GeoCoordinate values"""

    EARTH_RADIUS_KM = 6371.0

    @staticmethod
    def haversine_distance(a: Optional[GeoCoordinate], b: Optional[GeoCoordinate]) -> float:
        """
        Calculate great-circle distance between two coordinates using Haversine formula

        Args:
            a: First point
            b: Second point

        Returns:
            Distance in kilometers, -1.0 if either point is invalid
        """
        if not is_valid_coordinate(a) or not is_valid_coordinate(b):
            return -1.0

        lat1_rad = math.radians(a.latitude)
        lat2_rad = math.radians(b.latitude)
        delta_lat = math.radians(b.latitude - a.latitude)
        delta_lon = math.radians(b.longitude - a.longitude)

        h = (math.sin(delta_lat / 2) ** 2 +
             math.cos(lat1_rad) * math.cos(lat2_rad) *
             math.sin(delta_lon / 2) ** 2)
        c = 2 * math.atan2(math.sqrt(h), math.sqrt(max(0.0, 1 - h)))

        return GeoUtils.EARTH_RADIUS_KM * c

    @staticmethod
    def calculate_bearing(start: Optional[GeoCoordinate], target: Optional[GeoCoordinate]) -> float:
        """
        Calculate initial bearing from start to target

        Args:
            start: Starting point
            target: Target point

        Returns:
            Bearing in degrees (0-360, where 0 is North), 0.0 if either point is invalid
        """
        if not is_valid_coordinate(start) or not is_valid_coordinate(target):
            return 0.0

        lat1_rad = math.radians(start.latitude)
        lat2_rad = math.radians(target.latitude)
        delta_lon = math.radians(target.longitude - start.longitude)

        x = math.sin(delta_lon) * math.cos(lat2_rad)
        y = (math.cos(lat1_rad) * math.sin(lat2_rad) -
             math.sin(lat1_rad) * math.cos(lat2_rad) * math.cos(delta_lon))

        return GeoUtils.normalize_heading(math.degrees(math.atan2(x, y)))

    @staticmethod
    def normalize_heading(angle: float) -> float:
        """Wrap angle into [0, 360)"""
        # fmod keeps the wrap loops short for inputs far outside the range
        angle = math.fmod(angle, 360.0)
        while angle < 0:
            angle += 360.0
        while angle >= 360.0:
            angle -= 360.0
        return angle
