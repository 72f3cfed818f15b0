"""Navigation core interfaces and data structures"""
from .interfaces import NotificationSink, RouteManagerInterface
from .data_types import (
    GeoCoordinate, Waypoint, NavigationStatus, SignalState, NavigationState,
    is_valid_coordinate
)

__all__ = [
    'NotificationSink',
    'RouteManagerInterface',
    'GeoCoordinate',
    'Waypoint',
    'NavigationStatus',
    'SignalState',
    'NavigationState',
    'is_valid_coordinate'
]
