"""Navigation state machine"""
import logging
import math
from typing import Optional

from .core.data_types import (
    GeoCoordinate, Waypoint, NavigationStatus, NavigationState, SignalState,
    is_valid_coordinate
)
from .core.interfaces import NotificationSink
from .algorithms.geo_utils import GeoUtils
from .route_manager import RouteManager
from .signal_monitor import SignalQualityMonitor
from notifications.notification_manager import AlertLevel
from telemetry.metrics import NavigationMetrics

logger = logging.getLogger(__name__)


def format_coordinate(coord: GeoCoordinate) -> str:
    """Format as "lat, lon" with 6 decimals, plus altitude when non-zero"""
    text = f"{coord.latitude:.6f}, {coord.longitude:.6f}"
    if coord.altitude != 0.0:
        text += f" (alt: {coord.altitude:.1f}m)"
    return text


class Navigator:
    """
    Navigation session state machine

    Owns current location, destination, speed, heading, status and route.

        IDLE ──(start, destination + signal)──> NAVIGATING
        NAVIGATING ──(within arrival radius)──> ARRIVED
        NAVIGATING ──(signal lost)──> GPS_LOST
        GPS_LOST ──(signal restored)──> NAVIGATING
        any ──(set_destination / stop)──> IDLE

    Invalid coordinates are rejected with a WARNING and never mutate state;
    scalar sensor values are clamped instead.
    """

    ARRIVAL_RADIUS_KM = 0.1

    def __init__(self,
                 notifier: NotificationSink,
                 signal_monitor: Optional[SignalQualityMonitor] = None,
                 arrival_radius_km: float = ARRIVAL_RADIUS_KM,
                 metrics: Optional[NavigationMetrics] = None):
        """
        Initialize navigator

        Args:
            notifier: Notification sink shared with the rest of the dashboard
            signal_monitor: GPS signal monitor (default thresholds if None)
            arrival_radius_km: Distance to destination that counts as arrived
            metrics: Telemetry counters (fresh instance if None)
        """
        self._notifier = notifier
        self.signal_monitor = signal_monitor or SignalQualityMonitor(notifier)
        self.route_manager = RouteManager(notifier)
        self.metrics = metrics or NavigationMetrics()
        self.arrival_radius_km = arrival_radius_km

        # Session state
        self._current_location: Optional[GeoCoordinate] = None
        self._destination: Optional[GeoCoordinate] = None
        self._destination_name: Optional[str] = None
        self._status = NavigationStatus.IDLE
        self._current_speed = 0.0  # km/h
        self._current_heading = 0.0  # degrees

        logger.info("Navigator initialized")
        logger.info(f"  Arrival radius: {arrival_radius_km} km, signal: "
                    f">= {self.signal_monitor.min_satellites} sats, "
                    f"<= {self.signal_monitor.max_accuracy_m}m")

    # Sensor updates

    def update_location(self, location: GeoCoordinate) -> bool:
        """Update current position, checking for arrival while navigating"""
        if not location.is_valid():
            logger.warning(f"Rejected GPS fix: {location}")
            self.metrics.add_rejected_update()
            self._notifier.notify("Invalid GPS coordinates received", AlertLevel.WARNING)
            return False

        previous = self._current_location
        self._current_location = location
        if previous is not None:
            self.metrics.add_distance(GeoUtils.haversine_distance(previous, location))
        logger.debug(f"Position updated: {format_coordinate(location)}")

        if self._status == NavigationStatus.NAVIGATING:
            distance = self.get_distance_to_destination()
            if 0 <= distance < self.arrival_radius_km:
                self._transition_to(NavigationStatus.ARRIVED)
                self.metrics.add_destination_reached()
                logger.info(f"🏁 Arrived at '{self._destination_name}' ({distance * 1000:.0f}m)")
                self._notifier.notify("Destination reached!", AlertLevel.INFO)
        return True

    def update_speed(self, speed: float):
        """Update speed in km/h, clamped to >= 0"""
        if not math.isfinite(speed):
            logger.warning(f"Ignoring non-finite speed reading: {speed}")
            return
        self._current_speed = max(0.0, speed)
        self.metrics.update_max_speed(self._current_speed)

    def update_heading(self, heading: float):
        """Update heading, normalized into [0, 360)"""
        if not math.isfinite(heading):
            logger.warning(f"Ignoring non-finite heading reading: {heading}")
            return
        self._current_heading = GeoUtils.normalize_heading(heading)

    def update_gps_signal(self, satellites: int, accuracy: float) -> SignalState:
        """Feed signal readings to the monitor and react to availability edges"""
        state = self.signal_monitor.update(satellites, accuracy)

        if state.lost:
            self.metrics.add_gps_loss_event()
            if self._status == NavigationStatus.NAVIGATING:
                self._transition_to(NavigationStatus.GPS_LOST)
        elif state.restored:
            self.metrics.add_gps_restore_event()
            if self._status == NavigationStatus.GPS_LOST:
                self._transition_to(NavigationStatus.NAVIGATING)
        return state

    # Navigation control

    def set_destination(self, destination: GeoCoordinate, name: str = "Destination") -> bool:
        """Set destination and reset status to IDLE"""
        if not destination.is_valid():
            logger.warning(f"Rejected destination '{name}': {destination}")
            self.metrics.add_rejected_update()
            self._notifier.notify("Invalid destination coordinates", AlertLevel.WARNING)
            return False

        self._destination = destination
        self._destination_name = name
        self._transition_to(NavigationStatus.IDLE)
        logger.info(f"🎯 Destination set: {name} at {format_coordinate(destination)}")
        self._notifier.notify(f"Destination set: {name} ({format_coordinate(destination)})",
                              AlertLevel.INFO)
        return True

    def start_navigation(self) -> bool:
        """
        Start navigation to the current destination

        Returns:
            True if status is now NAVIGATING
        """
        if self._status != NavigationStatus.IDLE:
            logger.debug(f"start_navigation ignored in {self._status.name}")
            return self._status == NavigationStatus.NAVIGATING

        if not is_valid_coordinate(self._destination):
            logger.warning("No destination to navigate to")
            self._notifier.notify("No destination set for navigation", AlertLevel.WARNING)
            return False

        if not self.signal_monitor.available:
            logger.warning("Cannot start navigation without GPS signal")
            self._notifier.notify("GPS signal unavailable - cannot start navigation",
                                  AlertLevel.CRITICAL)
            return False

        self._transition_to(NavigationStatus.NAVIGATING)
        self.metrics.add_navigation_started()

        distance = self.get_distance_to_destination()
        eta = self.get_estimated_time_to_arrival()
        distance_text = f"{distance:.1f} km" if distance >= 0 else "unknown"
        eta_text = f"{eta:.0f} min" if eta >= 0 else "unknown"
        logger.info(f"🚀 Navigating to '{self._destination_name}'")
        self._notifier.notify(f"Navigation started - Distance: {distance_text}, ETA: {eta_text}",
                              AlertLevel.INFO)
        return True

    def stop_navigation(self):
        """Stop navigation and clear the route"""
        self._transition_to(NavigationStatus.IDLE)
        self.route_manager.clear_route()
        self._notifier.notify("Navigation stopped", AlertLevel.INFO)

    def add_waypoint(self, waypoint: Waypoint) -> bool:
        accepted = self.route_manager.add_waypoint(waypoint)
        if not accepted:
            self.metrics.add_rejected_update()
        return accepted

    def clear_route(self):
        self.route_manager.clear_route()

    # Queries

    def get_distance_to_destination(self) -> float:
        """Distance in km, -1 if destination or current location is unknown"""
        return GeoUtils.haversine_distance(self._current_location, self._destination)

    def get_estimated_time_to_arrival(self) -> float:
        """ETA in minutes, -1 if distance is unknown or vehicle is stationary"""
        distance = self.get_distance_to_destination()
        if distance < 0 or self._current_speed <= 0:
            return -1.0
        return distance / self._current_speed * 60.0

    @property
    def current_location(self) -> Optional[GeoCoordinate]:
        return self._current_location

    @property
    def destination(self) -> Optional[GeoCoordinate]:
        return self._destination

    @property
    def destination_name(self) -> Optional[str]:
        return self._destination_name

    @property
    def status(self) -> NavigationStatus:
        return self._status

    @property
    def current_speed(self) -> float:
        return self._current_speed

    @property
    def current_heading(self) -> float:
        return self._current_heading

    def get_state(self) -> NavigationState:
        """
        Get current navigation state

        Returns:
            NavigationState: Immutable snapshot including derived distance and ETA
        """
        return NavigationState(
            current_location=self._current_location,
            destination=self._destination,
            destination_name=self._destination_name,
            status=self._status,
            current_speed=self._current_speed,
            current_heading=self._current_heading,
            signal=self.signal_monitor.state(),
            route=tuple(self.route_manager.get_waypoints()),
            distance_to_destination=self.get_distance_to_destination(),
            eta_minutes=self.get_estimated_time_to_arrival()
        )

    def _transition_to(self, new_status: NavigationStatus):
        if new_status != self._status:
            logger.info(f"🔄 Status transition: {self._status.name} → {new_status.name}")
            self._status = new_status
