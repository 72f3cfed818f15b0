"""Navigation algorithms implementations"""
from .geo_utils import GeoUtils

__all__ = ['GeoUtils']
