"""Navigation system module"""
from .gps_navigator import GPSNavigator
from .navigator import Navigator
from .route_manager import RouteManager
from .signal_monitor import SignalQualityMonitor

__all__ = ['GPSNavigator', 'Navigator', 'RouteManager', 'SignalQualityMonitor']
