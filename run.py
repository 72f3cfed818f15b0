#!/usr/bin/env python3
import sys
import os
import argparse
import logging
import random
import signal
from pathlib import Path

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import navigation_config, nmea_config, notification_config, dashboard_config
from navigation.core.data_types import GeoCoordinate
from navigation.gps_navigator import GPSNavigator
from notifications.notification_manager import NotificationManager


def setup_logging():
    """Setup logging configuration"""
    log_level = logging.DEBUG if os.getenv('DASH_DEBUG', 'False').lower() == 'true' else logging.INFO

    handlers = [logging.StreamHandler(sys.stdout)]

    # Add file handler if enabled
    if os.getenv('LOG_TO_FILE', 'False').lower() == 'true':
        log_dir = PROJECT_ROOT / 'logs'
        log_dir.mkdir(exist_ok=True)
        file_handler = logging.FileHandler(log_dir / 'dashboard.log')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        handlers.append(file_handler)

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )
    # Reduce noisy third-party loggers
    logging.getLogger('werkzeug').setLevel(logging.WARNING)
    logging.getLogger('pynmea2').setLevel(logging.ERROR)


def setup_signal_handlers(navigator: GPSNavigator):
    """Stop active guidance before exiting"""
    def signal_handler(signum, frame):
        logging.info(f"Received signal {signum}, shutting down gracefully...")
        navigator.stop_navigation()
        logging.info("Shutdown complete")
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Vehicle dashboard navigation")
    parser.add_argument('--web', action='store_true',
                        help="Serve the dashboard JSON API instead of the console menu")
    parser.add_argument('--nmea', metavar='FILE',
                        help="Replay an NMEA capture into the navigator before starting")
    parser.add_argument('--seed', type=int, default=None,
                        help="Seed for the simulated GPS updates")
    return parser.parse_args(argv)


def build_navigator(notifications: NotificationManager, seed=None) -> GPSNavigator:
    """Create the navigator and apply the start-up sensor state"""
    home = GeoCoordinate(navigation_config['home_lat'],
                         navigation_config['home_lon'],
                         navigation_config['home_alt'])
    navigator = GPSNavigator(
        notifications,
        min_satellites=navigation_config['min_satellites'],
        max_accuracy_m=navigation_config['max_accuracy_m'],
        arrival_radius_km=navigation_config['arrival_radius_km'],
        home=home,
        rng=random.Random(seed),
    )

    navigator.update_location(home)
    navigator.update_speed(navigation_config['initial_speed'])
    navigator.update_heading(navigation_config['initial_heading'])
    navigator.update_gps_signal(8, 3.5)
    return navigator


def run_web(navigator: GPSNavigator, notifications: NotificationManager):
    from app import create_app

    logger = logging.getLogger(__name__)
    app = create_app(navigator, notifications)

    host = dashboard_config['host']
    port = dashboard_config['port']
    debug = dashboard_config['debug']

    logger.info("🌐 Web interface configuration:")
    logger.info(f"   Host: {host}")
    logger.info(f"   Port: {port}")
    logger.info(f"   Debug: {debug}")
    logger.info(f"   URLs: http://{host}:{port}")
    if host == '0.0.0.0':
        logger.info(f"         http://localhost:{port}")

    logger.info("🚀 Starting Flask development server...")
    app.run(
        host=host,
        port=port,
        debug=debug,
        threaded=True,
        use_reloader=False  # Reloader would build a second navigator
    )


def main(argv=None):
    """Main application entry point"""
    setup_logging()
    args = parse_args(argv)

    logger = logging.getLogger(__name__)
    logger.info("Vehicle dashboard starting...")

    try:
        notifications = NotificationManager(**notification_config)
        navigator = build_navigator(notifications, seed=args.seed)
        setup_signal_handlers(navigator)

        if args.nmea:
            from gps.nmea_feed import NMEAFeed
            NMEAFeed(navigator, uere_m=nmea_config['uere_m']).replay_file(args.nmea)

        if args.web:
            run_web(navigator, notifications)
        else:
            from dashboard import DashboardMenu
            DashboardMenu(navigator, notifications).run()

    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
    except Exception as e:
        logger.error(f"Failed to start application: {e}", exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
