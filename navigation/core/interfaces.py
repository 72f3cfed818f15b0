"""Navigation system interfaces"""
from abc import ABC, abstractmethod
from typing import List
from .data_types import Waypoint
from notifications.notification_manager import NotificationSink

__all__ = ['NotificationSink', 'RouteManagerInterface']


class RouteManagerInterface(ABC):
    """Interface for route waypoint management"""

    @abstractmethod
    def add_waypoint(self, waypoint: Waypoint) -> bool:
        """Append waypoint to route, False if rejected"""
        pass

    @abstractmethod
    def clear_route(self):
        """Remove all waypoints"""
        pass

    @abstractmethod
    def get_waypoints(self) -> List[Waypoint]:
        """Get all waypoints in insertion order"""
        pass
