"""
Overpass (OpenStreetMap) adapter for SafeHer.

This module provides the implementation of PointOfInterestPort.
"""

from .client import OverpassClient

__all__ = ["OverpassClient"]
