"""Telemetry and metrics collection for the navigation dashboard"""
from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class NavigationMetrics:
    """Counters for navigation session tracking"""

    # Navigation lifecycle
    navigations_started: int = 0
    destinations_reached: int = 0

    # Distance and speed
    total_distance_km: float = 0.0  # sum of legs between accepted fixes
    max_speed: float = 0.0  # km/h

    # Errors and events
    gps_loss_events: int = 0
    gps_restore_events: int = 0
    rejected_updates: int = 0  # invalid coordinates, destinations, waypoints

    # Session info
    session_start: datetime = field(default_factory=datetime.now)

    def add_navigation_started(self):
        self.navigations_started += 1

    def add_destination_reached(self):
        self.destinations_reached += 1

    def add_gps_loss_event(self):
        """Record GPS loss event"""
        self.gps_loss_events += 1

    def add_gps_restore_event(self):
        """Record GPS restore event"""
        self.gps_restore_events += 1

    def add_rejected_update(self):
        self.rejected_updates += 1

    def add_distance(self, distance_km: float):
        """Accumulate travelled distance, ignoring unknown (-1) legs"""
        if distance_km > 0:
            self.total_distance_km += distance_km

    def update_max_speed(self, speed: float):
        """Update maximum speed if higher"""
        if speed > self.max_speed:
            self.max_speed = speed

    def to_dict(self) -> dict:
        """Convert metrics to dictionary"""
        return {
            'navigations_started': self.navigations_started,
            'destinations_reached': self.destinations_reached,
            'total_distance_km': round(self.total_distance_km, 3),
            'max_speed_kmh': round(self.max_speed, 1),
            'gps_loss_events': self.gps_loss_events,
            'gps_restore_events': self.gps_restore_events,
            'rejected_updates': self.rejected_updates,
            'session_start': self.session_start.isoformat(),
            'session_duration_s': (datetime.now() - self.session_start).total_seconds()
        }
