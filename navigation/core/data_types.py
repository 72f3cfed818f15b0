"""Data structures for navigation system"""
from dataclasses import dataclass, field
from typing import Optional, Tuple
from enum import Enum


class NavigationStatus(Enum):
    """Current navigation status"""
    IDLE = "idle"
    NAVIGATING = "navigating"
    ARRIVED = "arrived"
    OFF_ROUTE = "off_route"  # reserved, no transition produces it yet
    GPS_LOST = "gps_lost"


@dataclass(frozen=True)
class GeoCoordinate:
    """Latitude/longitude in decimal degrees, altitude in meters"""
    latitude: float
    longitude: float
    altitude: float = 0.0

    def is_valid(self) -> bool:
        """Latitude and longitude within range; altitude never invalidates"""
        return (-90.0 <= self.latitude <= 90.0) and (-180.0 <= self.longitude <= 180.0)

    def to_dict(self):
        return {
            'lat': self.latitude,
            'lon': self.longitude,
            'alt': self.altitude
        }


def is_valid_coordinate(coord: Optional[GeoCoordinate]) -> bool:
    """Validity check that also treats a missing coordinate as invalid"""
    return coord is not None and coord.is_valid()


@dataclass
class Waypoint:
    """Named point of interest on the route"""
    coordinate: GeoCoordinate
    name: str
    address: str = ""

    def to_dict(self):
        return {
            'name': self.name,
            'address': self.address,
            **self.coordinate.to_dict()
        }


@dataclass(frozen=True)
class SignalState:
    """Result of a GPS signal quality evaluation"""
    satellite_count: int
    accuracy_m: float
    available: bool
    lost: bool = False  # available -> unavailable on this update
    restored: bool = False  # unavailable -> available on this update

    def to_dict(self):
        return {
            'satellites': self.satellite_count,
            'accuracy_m': self.accuracy_m,
            'available': self.available
        }


@dataclass(frozen=True)
class NavigationState:
    """Immutable snapshot of the navigation session"""
    current_location: Optional[GeoCoordinate]
    destination: Optional[GeoCoordinate]
    destination_name: Optional[str]
    status: NavigationStatus
    current_speed: float  # km/h
    current_heading: float  # degrees
    signal: SignalState
    route: Tuple[Waypoint, ...] = field(default_factory=tuple)
    distance_to_destination: float = -1.0  # km
    eta_minutes: float = -1.0

    def to_dict(self):
        return {
            'current_location': self.current_location.to_dict() if self.current_location else None,
            'destination': self.destination.to_dict() if self.destination else None,
            'destination_name': self.destination_name,
            'status': self.status.name,
            'current_speed': self.current_speed,
            'current_heading': self.current_heading,
            'signal': self.signal.to_dict(),
            'route': [wp.to_dict() for wp in self.route],
            'distance_to_destination_km': self.distance_to_destination,
            'eta_minutes': self.eta_minutes
        }
