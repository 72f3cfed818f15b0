"""Public navigation surface used by the dashboard, web API and sensor feeds"""
import logging
import random
from typing import List, Optional

from .core.data_types import GeoCoordinate, Waypoint, NavigationStatus, NavigationState
from .core.interfaces import NotificationSink
from .algorithms.geo_utils import GeoUtils
from .navigator import Navigator, format_coordinate as _format_coordinate
from .signal_monitor import SignalQualityMonitor
from telemetry.metrics import NavigationMetrics

logger = logging.getLogger(__name__)

_STATUS_LABELS = {
    NavigationStatus.IDLE: "IDLE",
    NavigationStatus.NAVIGATING: "NAVIGATING",
    NavigationStatus.ARRIVED: "ARRIVED",
    NavigationStatus.OFF_ROUTE: "OFF ROUTE",
    NavigationStatus.GPS_LOST: "GPS LOST",
}


class GPSNavigator:
    """
    Facade over the navigation state machine

    Delegates every operation to Navigator; adds display formatting and the
    simulated sensor update used by the console dashboard.
    """

    def __init__(self,
                 notifier: NotificationSink,
                 min_satellites: int = SignalQualityMonitor.MIN_SATELLITES,
                 max_accuracy_m: float = SignalQualityMonitor.MAX_ACCURACY_M,
                 arrival_radius_km: float = Navigator.ARRIVAL_RADIUS_KM,
                 home: Optional[GeoCoordinate] = None,
                 rng: Optional[random.Random] = None,
                 metrics: Optional[NavigationMetrics] = None):
        """
        Initialize the navigation facade

        Args:
            notifier: Notification sink shared with the rest of the dashboard
            min_satellites: Minimum satellites for a usable fix
            max_accuracy_m: Worst acceptable accuracy in meters
            arrival_radius_km: Distance to destination that counts as arrived
            home: Starting point for simulate_update() before the first fix
            rng: Random source for simulate_update()
            metrics: Telemetry counters
        """
        monitor = SignalQualityMonitor(notifier, min_satellites=min_satellites,
                                       max_accuracy_m=max_accuracy_m)
        self._navigator = Navigator(notifier, signal_monitor=monitor,
                                    arrival_radius_km=arrival_radius_km, metrics=metrics)
        self._home = home or GeoCoordinate(0.0, 0.0, 0.0)
        self._rng = rng or random.Random()

    # Operations

    def update_location(self, location: GeoCoordinate) -> bool:
        return self._navigator.update_location(location)

    def set_destination(self, destination: GeoCoordinate, name: str = "Destination") -> bool:
        return self._navigator.set_destination(destination, name)

    def start_navigation(self) -> bool:
        return self._navigator.start_navigation()

    def stop_navigation(self):
        self._navigator.stop_navigation()

    def add_waypoint(self, waypoint: Waypoint) -> bool:
        return self._navigator.add_waypoint(waypoint)

    def clear_route(self):
        self._navigator.clear_route()

    def calculate_distance(self, a: GeoCoordinate, b: GeoCoordinate) -> float:
        """Great-circle distance in km, -1 if either coordinate is invalid"""
        return GeoUtils.haversine_distance(a, b)

    def calculate_bearing(self, start: GeoCoordinate, target: GeoCoordinate) -> float:
        """Initial bearing in degrees, 0 if either coordinate is invalid"""
        return GeoUtils.calculate_bearing(start, target)

    def get_distance_to_destination(self) -> float:
        return self._navigator.get_distance_to_destination()

    def get_estimated_time_to_arrival(self) -> float:
        return self._navigator.get_estimated_time_to_arrival()

    def update_speed(self, speed: float):
        self._navigator.update_speed(speed)

    def update_heading(self, heading: float):
        self._navigator.update_heading(heading)

    def update_gps_signal(self, satellites: int, accuracy: float):
        self._navigator.update_gps_signal(satellites, accuracy)

    # Getters

    @property
    def current_location(self) -> Optional[GeoCoordinate]:
        return self._navigator.current_location

    @property
    def destination(self) -> Optional[GeoCoordinate]:
        return self._navigator.destination

    @property
    def destination_name(self) -> Optional[str]:
        return self._navigator.destination_name

    @property
    def status(self) -> NavigationStatus:
        return self._navigator.status

    @property
    def current_speed(self) -> float:
        return self._navigator.current_speed

    @property
    def current_heading(self) -> float:
        return self._navigator.current_heading

    @property
    def signal_available(self) -> bool:
        return self._navigator.signal_monitor.available

    @property
    def satellite_count(self) -> int:
        return self._navigator.signal_monitor.satellite_count

    @property
    def accuracy(self) -> float:
        return self._navigator.signal_monitor.accuracy

    @property
    def route(self) -> List[Waypoint]:
        return self._navigator.route_manager.get_waypoints()

    @property
    def metrics(self) -> NavigationMetrics:
        return self._navigator.metrics

    def get_state(self) -> NavigationState:
        return self._navigator.get_state()

    # Formatting

    @staticmethod
    def status_to_string(status: NavigationStatus) -> str:
        return _STATUS_LABELS[status]

    @staticmethod
    def format_coordinate(coord: GeoCoordinate) -> str:
        return _format_coordinate(coord)

    def gps_status_report(self) -> List[str]:
        """Lines for the GPS status screen"""
        location = self.current_location
        lines = [
            "🛰️  === GPS STATUS ===",
            "=" * 35,
            f"📍 Current Location: {self.format_coordinate(location) if location else 'No fix'}",
            f"📡 GPS Signal: {'✅ GOOD' if self.signal_available else '❌ POOR/LOST'} "
            f"({self.satellite_count} satellites, {self.accuracy:.1f}m accuracy)",
            f"🏎️  Speed: {self.current_speed:.1f} km/h",
            f"🧭 Heading: {self.current_heading:.0f}°",
            f"🗺️  Navigation: {self.status_to_string(self.status)}",
        ]

        if self.destination is not None:
            lines.append(f"🎯 Destination: {self.destination_name} "
                         f"({self.format_coordinate(self.destination)})")
            distance = self.get_distance_to_destination()
            eta = self.get_estimated_time_to_arrival()
            if distance >= 0:
                lines.append(f"📏 Distance: {distance:.1f} km")
            if eta >= 0:
                lines.append(f"⏱️  ETA: {eta:.0f} minutes")

        lines.append("=" * 35)
        return lines

    def route_report(self) -> List[str]:
        """Lines for the route screen, with distance from the current location"""
        route = self.route
        if not route:
            return ["🗺️  No route waypoints set"]

        lines = ["🗺️  === ROUTE WAYPOINTS ===", "=" * 40]
        for i, waypoint in enumerate(route, start=1):
            lines.append(f"{i}. {waypoint.name}")
            lines.append(f"   📍 {self.format_coordinate(waypoint.coordinate)}")
            if waypoint.address:
                lines.append(f"   🏠 {waypoint.address}")
            distance = self.calculate_distance(self.current_location, waypoint.coordinate)
            if distance >= 0:
                lines.append(f"   📏 {distance:.1f} km away")
            lines.append("")
        lines.append("=" * 40)
        return lines

    # Simulation

    def simulate_update(self):
        """Apply one randomly perturbed round of sensor updates"""
        base = self.current_location or self._home
        self.update_location(GeoCoordinate(
            base.latitude + self._rng.uniform(-0.001, 0.001),
            base.longitude + self._rng.uniform(-0.001, 0.001),
            base.altitude
        ))
        self.update_speed(self.current_speed + self._rng.uniform(-2.0, 5.0))
        self.update_heading(self.current_heading + self._rng.uniform(-10.0, 10.0))
        self.update_gps_signal(self._rng.randint(4, 12), self._rng.uniform(1.0, 8.0))
        logger.info("📡 GPS data updated (simulated)")
