"""
Port interfaces for SafeHer hexagonal architecture.

This module defines the port interfaces (Protocols) that define
the contracts between the core domain and external adapters.
"""

from .poi_source import PointOfInterestPort
from .resource_counts import ResourceCountPort
from .broadcast import BroadcastPort

__all__ = ["PointOfInterestPort", "ResourceCountPort", "BroadcastPort"]
