from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException
from datetime import datetime
import logging
import math
import threading
from typing import Optional

from navigation.core.data_types import GeoCoordinate, Waypoint
from navigation.gps_navigator import GPSNavigator
from notifications.notification_manager import NotificationManager

logger = logging.getLogger(__name__)


class PayloadError(Exception):
    """Malformed API payload"""
    pass


def _number(data: dict, key: str, default=None) -> float:
    """Read a finite number from the payload or raise PayloadError"""
    value = data.get(key, default)
    if value is None:
        raise PayloadError(f"{key} is required")
    if isinstance(value, bool):
        raise PayloadError(f"{key} must be a valid number")
    try:
        value = float(value)
    except (ValueError, TypeError):
        raise PayloadError(f"{key} must be a valid number")
    if not math.isfinite(value):
        raise PayloadError(f"{key} must be a finite number")
    return value


def _coordinate(data: dict) -> GeoCoordinate:
    """Build a coordinate from lat/lon/alt; range is checked by the navigator"""
    if not isinstance(data, dict):
        raise PayloadError("Coordinate must be an object")
    return GeoCoordinate(_number(data, 'lat'), _number(data, 'lon'), _number(data, 'alt', 0.0))


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise PayloadError("No data provided")
    return data


def create_app(navigator: Optional[GPSNavigator] = None,
               notifications: Optional[NotificationManager] = None) -> Flask:
    """
    Flask application factory

    Args:
        navigator: Navigation facade to expose (new one if None)
        notifications: Notification centre the navigator reports to
    """
    app = Flask(__name__)

    if notifications is None:
        notifications = NotificationManager()
    if navigator is None:
        navigator = GPSNavigator(notifications)

    app.config['NAVIGATOR'] = navigator
    app.config['NOTIFICATIONS'] = notifications
    # Flask serves requests on worker threads; the navigator is single-threaded
    app.config['NAVIGATOR_LOCK'] = threading.Lock()

    _register_error_handlers(app)
    _register_routes(app)

    logger.info("Dashboard API initialized")
    return app


def _register_error_handlers(app):
    """Register JSON error handlers"""

    @app.errorhandler(PayloadError)
    def bad_request(error):
        return jsonify({"error": str(error), "success": False}), 400

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Endpoint not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(Exception)
    def internal_error(error):
        if isinstance(error, HTTPException):
            return jsonify({"error": error.description}), error.code
        logger.error(f"Unhandled API error: {error}", exc_info=True)
        return jsonify({"error": "Internal server error"}), 500


def _register_routes(app):
    """Register dashboard routes"""
    navigator: GPSNavigator = app.config['NAVIGATOR']
    notifications: NotificationManager = app.config['NOTIFICATIONS']
    lock: threading.Lock = app.config['NAVIGATOR_LOCK']

    def state_response(success: bool = True, status_code: int = 200):
        body = navigator.get_state().to_dict()
        body['status_text'] = navigator.status_to_string(navigator.status)
        body['success'] = success
        return jsonify(body), status_code

    @app.route('/api/health')
    def api_health():
        """Health check endpoint for monitoring"""
        with lock:
            return jsonify({
                "status": "healthy",
                "timestamp": datetime.now().isoformat(),
                "navigation_status": navigator.status.name,
                "gps_signal": "available" if navigator.signal_available else "unavailable",
                "critical_alerts": notifications.has_critical_alerts()
            })

    # ==========================================
    # NAVIGATION API
    # ==========================================

    @app.route('/api/navigation/status')
    def api_nav_status():
        """Get comprehensive navigation status"""
        with lock:
            return state_response()

    @app.route('/api/navigation/destination', methods=['POST'])
    def api_set_destination():
        data = _json_body()
        destination = _coordinate(data)
        name = str(data.get('name') or "Destination")
        with lock:
            accepted = navigator.set_destination(destination, name)
            return state_response(accepted)

    @app.route('/api/navigation/start', methods=['POST'])
    def api_start_navigation():
        with lock:
            started = navigator.start_navigation()
            return state_response(started)

    @app.route('/api/navigation/stop', methods=['POST'])
    def api_stop_navigation():
        with lock:
            navigator.stop_navigation()
            return state_response()

    @app.route('/api/navigation/waypoints', methods=['GET'])
    def api_get_waypoints():
        with lock:
            waypoints = [wp.to_dict() for wp in navigator.route]
        return jsonify({"waypoints": waypoints, "count": len(waypoints)})

    @app.route('/api/navigation/waypoints', methods=['POST'])
    def api_add_waypoint():
        """Append a waypoint to the route"""
        data = _json_body()
        coordinate = _coordinate(data)
        name = str(data.get('name') or f"WP_{datetime.now().strftime('%H%M%S')}")
        address = str(data.get('address') or "")
        with lock:
            accepted = navigator.add_waypoint(Waypoint(coordinate, name, address))
            count = len(navigator.route)
        return jsonify({"success": accepted, "count": count})

    @app.route('/api/navigation/waypoints', methods=['DELETE'])
    def api_clear_waypoints():
        with lock:
            navigator.clear_route()
        return jsonify({"success": True, "message": "All waypoints cleared"})

    @app.route('/api/navigation/distance', methods=['POST'])
    def api_distance():
        """Distance and initial bearing between two arbitrary points"""
        data = _json_body()
        start = _coordinate(data.get('from'))
        target = _coordinate(data.get('to'))
        distance = navigator.calculate_distance(start, target)
        if distance < 0:
            return jsonify({"error": "Coordinates out of range", "success": False}), 400
        return jsonify({
            "success": True,
            "distance_km": distance,
            "bearing_deg": navigator.calculate_bearing(start, target)
        })

    # ==========================================
    # SENSOR FEED API
    # ==========================================

    @app.route('/api/gps/location', methods=['POST'])
    def api_update_location():
        location = _coordinate(_json_body())
        with lock:
            accepted = navigator.update_location(location)
            return state_response(accepted)

    @app.route('/api/gps/speed', methods=['POST'])
    def api_update_speed():
        speed = _number(_json_body(), 'speed')
        with lock:
            navigator.update_speed(speed)
            return state_response()

    @app.route('/api/gps/heading', methods=['POST'])
    def api_update_heading():
        heading = _number(_json_body(), 'heading')
        with lock:
            navigator.update_heading(heading)
            return state_response()

    @app.route('/api/gps/signal', methods=['POST'])
    def api_update_signal():
        data = _json_body()
        satellites = int(_number(data, 'satellites'))
        accuracy = _number(data, 'accuracy')
        with lock:
            navigator.update_gps_signal(satellites, accuracy)
            return state_response()

    @app.route('/api/gps/simulate', methods=['POST'])
    def api_simulate():
        with lock:
            navigator.simulate_update()
            return state_response()

    # ==========================================
    # NOTIFICATIONS & TELEMETRY
    # ==========================================

    @app.route('/api/notifications', methods=['GET'])
    def api_notifications():
        with lock:
            items = [n.to_dict() for n in notifications.get_notifications()]
            critical = notifications.has_critical_alerts()
        return jsonify({"notifications": items, "count": len(items), "has_critical": critical})

    @app.route('/api/notifications', methods=['DELETE'])
    def api_clear_notifications():
        with lock:
            notifications.clear_notifications()
        return jsonify({"success": True, "message": "All notifications cleared"})

    @app.route('/api/metrics')
    def api_metrics():
        """Get navigation telemetry"""
        with lock:
            metrics = navigator.metrics.to_dict()
        return jsonify({
            "success": True,
            "metrics": metrics,
            "timestamp": datetime.now().isoformat()
        })
