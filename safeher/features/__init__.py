"""
Feature services for SafeHer.

These services connect the pure core functions to the ports:
nearby resource lookup, safety scoring and SOS broadcasting.
"""

from .nearby import GeoResourceLocator, LocatorResourceCounter
from .safety_score import SafetyScorer, local_clock
from .sos import SOSBroadcaster

__all__ = ["GeoResourceLocator", "LocatorResourceCounter", "SafetyScorer", "local_clock", "SOSBroadcaster"]
