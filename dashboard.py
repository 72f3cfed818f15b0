"""
Console dashboard
Interactive text menu over the navigation facade and notification centre
"""
import logging
from typing import Callable, Optional

from navigation.core.data_types import GeoCoordinate, Waypoint
from navigation.gps_navigator import GPSNavigator
from notifications.notification_manager import NotificationManager

logger = logging.getLogger(__name__)

MENU = """
========== VEHICLE DASHBOARD ==========
1. GPS Navigator Status
2. Route Waypoints
3. Set Destination
4. Add Waypoint
5. Start Navigation
6. Stop Navigation
7. Simulate GPS Update
8. View All Notifications
9. GPS Navigation Demo
10. Toggle Notification Sound
0. Exit
======================================="""


class DashboardMenu:
    """Text menu loop; input and output are injectable for tests"""

    def __init__(self,
                 navigator: GPSNavigator,
                 notifications: NotificationManager,
                 input_func: Callable[[str], str] = input,
                 output: Callable[[str], None] = print):
        self.navigator = navigator
        self.notifications = notifications
        self._input = input_func
        self._output = output
        self._actions = {
            '1': self.show_status,
            '2': self.show_route,
            '3': self.set_destination,
            '4': self.add_waypoint,
            '5': self.navigator.start_navigation,
            '6': self.navigator.stop_navigation,
            '7': self.simulate_update,
            '8': self.show_notifications,
            '9': self.run_demo,
            '10': self.toggle_sound,
        }

    def run(self):
        """Run until the user chooses Exit or input ends"""
        while True:
            self._output(MENU)
            try:
                choice = self._input("Choose an option: ").strip()
                if choice == '0':
                    break
                action = self._actions.get(choice)
                if action is None:
                    self._output("❌ Invalid option, please try again.")
                    continue
                action()
            except EOFError:
                break

        self._output("👋 Goodbye!")

    def _print_lines(self, lines):
        for line in lines:
            self._output(line)

    def _read_float(self, prompt: str, default: Optional[float] = None) -> Optional[float]:
        raw = self._input(prompt).strip()
        if not raw and default is not None:
            return default
        try:
            return float(raw)
        except ValueError:
            self._output(f"❌ '{raw}' is not a number")
            return None

    def _read_coordinate(self) -> Optional[GeoCoordinate]:
        lat = self._read_float("Latitude: ")
        if lat is None:
            return None
        lon = self._read_float("Longitude: ")
        if lon is None:
            return None
        alt = self._read_float("Altitude in meters [0]: ", default=0.0)
        if alt is None:
            return None
        return GeoCoordinate(lat, lon, alt)

    def show_status(self):
        self._print_lines(self.navigator.gps_status_report())
        metrics = self.navigator.metrics
        self._output(f"📊 Trips started: {metrics.navigations_started}, "
                     f"arrivals: {metrics.destinations_reached}, "
                     f"signal losses: {metrics.gps_loss_events}, "
                     f"distance logged: {metrics.total_distance_km:.1f} km")

    def show_route(self):
        self._print_lines(self.navigator.route_report())

    def set_destination(self):
        coord = self._read_coordinate()
        if coord is None:
            return
        name = self._input("Destination name [Destination]: ").strip() or "Destination"
        self.navigator.set_destination(coord, name)

    def add_waypoint(self):
        coord = self._read_coordinate()
        if coord is None:
            return
        name = self._input("Waypoint name: ").strip() or "Waypoint"
        address = self._input("Address (optional): ").strip()
        self.navigator.add_waypoint(Waypoint(coord, name, address))

    def simulate_update(self):
        self.navigator.simulate_update()
        self._output("📡 GPS data updated...")

    def show_notifications(self):
        self._print_lines(self.notifications.format_notifications())

    def toggle_sound(self):
        self.notifications.set_sound_enabled(not self.notifications.is_sound_enabled())
        state = "enabled" if self.notifications.is_sound_enabled() else "disabled"
        self._output(f"🔊 Notification sounds {state}")

    def run_demo(self):
        """San Francisco to Alcatraz with two sightseeing stops"""
        self._output("\n=== GPS NAVIGATION DEMO ===")
        logger.info("🎬 Running navigation demo")
        nav = self.navigator
        nav.update_location(GeoCoordinate(37.7749, -122.4194, 50.0))
        nav.update_speed(45.0)
        nav.update_heading(90.0)

        nav.add_waypoint(Waypoint(GeoCoordinate(37.7849, -122.4094, 60.0),
                                  "Golden Gate Park", "Golden Gate Park, San Francisco, CA"))
        nav.add_waypoint(Waypoint(GeoCoordinate(37.8049, -122.4194, 70.0),
                                  "Fisherman's Wharf", "Pier 39, San Francisco, CA"))

        nav.set_destination(GeoCoordinate(37.8267, -122.4233, 40.0), "Alcatraz Island")
        nav.start_navigation()

        self._print_lines(nav.gps_status_report())
        self._print_lines(nav.route_report())
        nav.stop_navigation()
