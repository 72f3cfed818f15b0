"""Route waypoint manager implementation"""
from typing import List
from .core.interfaces import RouteManagerInterface, NotificationSink
from .core.data_types import Waypoint
from notifications.notification_manager import AlertLevel
import logging

logger = logging.getLogger(__name__)


class RouteManager(RouteManagerInterface):
    """Ordered list of informational stops, independent of the destination"""

    def __init__(self, notifier: NotificationSink):
        self._notifier = notifier
        self._waypoints: List[Waypoint] = []

    def add_waypoint(self, waypoint: Waypoint) -> bool:
        """Append waypoint to end of route, rejecting invalid coordinates"""
        if not waypoint.coordinate.is_valid():
            logger.warning(f"Rejected waypoint '{waypoint.name}': {waypoint.coordinate}")
            self._notifier.notify("Invalid waypoint coordinates", AlertLevel.WARNING)
            return False

        self._waypoints.append(waypoint)
        coord = waypoint.coordinate
        logger.info(f"➕ Added waypoint #{len(self._waypoints)}: '{waypoint.name}' "
                    f"at ({coord.latitude:.6f}, {coord.longitude:.6f})")
        self._notifier.notify(f"Waypoint added: {waypoint.name}", AlertLevel.INFO)
        return True

    def clear_route(self):
        """Clear all waypoints"""
        count = len(self._waypoints)
        self._waypoints.clear()
        logger.info(f"🗑️  Cleared {count} waypoint(s) from route")

    def get_waypoints(self) -> List[Waypoint]:
        """Get all waypoints in route"""
        return self._waypoints.copy()

    def has_waypoints(self) -> bool:
        return len(self._waypoints) > 0

    def __len__(self) -> int:
        return len(self._waypoints)
