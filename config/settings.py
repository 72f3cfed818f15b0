import os
import logging
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables from .env file
load_dotenv()


class ConfigurationError(Exception):
    """Raised when configuration is invalid or incomplete"""
    pass


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def load_navigation_config() -> dict:
    """Read navigation settings from the environment"""
    return {
        'min_satellites': int(os.getenv("NAV_MIN_SATELLITES", "4")),
        'max_accuracy_m': float(os.getenv("NAV_MAX_ACCURACY_M", "10.0")),  # accuracy must be <= this
        'arrival_radius_km': float(os.getenv("NAV_ARRIVAL_RADIUS_KM", "0.1")),
        # Start position for the simulator before the first fix (Los Angeles)
        'home_lat': float(os.getenv("NAV_HOME_LAT", "34.0522")),
        'home_lon': float(os.getenv("NAV_HOME_LON", "-118.2437")),
        'home_alt': float(os.getenv("NAV_HOME_ALT", "100.0")),
        'initial_speed': float(os.getenv("NAV_INITIAL_SPEED", "60.0")),  # km/h
        'initial_heading': float(os.getenv("NAV_INITIAL_HEADING", "45.0")),
    }


def validate_navigation_config(config: dict) -> bool:
    """
    Validate navigation settings

    Raises:
        ConfigurationError: listing every invalid setting
    """
    errors = []

    if config['min_satellites'] < 1:
        errors.append(f"NAV_MIN_SATELLITES must be at least 1, got {config['min_satellites']}")
    if config['max_accuracy_m'] <= 0:
        errors.append(f"NAV_MAX_ACCURACY_M must be positive, got {config['max_accuracy_m']}")
    if config['arrival_radius_km'] <= 0:
        errors.append(f"NAV_ARRIVAL_RADIUS_KM must be positive, got {config['arrival_radius_km']}")
    if not -90 <= config['home_lat'] <= 90:
        errors.append(f"NAV_HOME_LAT must be between -90 and 90, got {config['home_lat']}")
    if not -180 <= config['home_lon'] <= 180:
        errors.append(f"NAV_HOME_LON must be between -180 and 180, got {config['home_lon']}")
    if config['initial_speed'] < 0:
        errors.append(f"NAV_INITIAL_SPEED cannot be negative, got {config['initial_speed']}")

    if errors:
        error_msg = "Navigation configuration validation failed:\n" + "\n".join(f"  - {err}" for err in errors)
        logger.error(error_msg)
        raise ConfigurationError(error_msg)

    logger.info("Navigation configuration validation passed")
    return True


# Validate configuration on import
try:
    navigation_config = load_navigation_config()
    validate_navigation_config(navigation_config)
except (ConfigurationError, ValueError) as e:
    logger.error(f"Navigation configuration invalid: {e}")
    logger.info("Falling back to default navigation settings")
    navigation_config = {
        'min_satellites': 4,
        'max_accuracy_m': 10.0,
        'arrival_radius_km': 0.1,
        'home_lat': 34.0522,
        'home_lon': -118.2437,
        'home_alt': 100.0,
        'initial_speed': 60.0,
        'initial_heading': 45.0,
    }

# NMEA replay settings
nmea_config = {
    'uere_m': float(os.getenv("NMEA_UERE_M", "5.0")),  # meters of error per unit of HDOP
}

# Notification centre
notification_config = {
    'sound_enabled': _env_bool("NOTIFY_SOUND", "True"),
    'max_history': int(os.getenv("NOTIFY_MAX_HISTORY", "500")),
}

# Dashboard web API
dashboard_config = {
    'host': os.getenv("DASH_HOST", "0.0.0.0"),
    'port': int(os.getenv("DASH_PORT", "5002")),
    'debug': _env_bool("DASH_DEBUG", "False"),
}
