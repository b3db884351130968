"""
Core domain models and pure functions for SafeHer.

This module contains the domain models and pure business logic
that are independent of external I/O and infrastructure concerns.
"""

from .models import (
    Coordinate, SOSLocation, ResourceCandidate, RankedResource,
    ScoreFactor, SafetyAssessment, SOSAlert, ResourceType, SafetyStatus,
)
from .errors import SafeHerError, InvalidArgument, UpstreamUnavailable, BroadcastFailure
from .locator import rank_candidates, tag_filter_for
from .scoring import assess
from .sos import build_alert, SOS_EVENT

__all__ = [
    "Coordinate", "SOSLocation", "ResourceCandidate", "RankedResource",
    "ScoreFactor", "SafetyAssessment", "SOSAlert", "ResourceType", "SafetyStatus",
    "SafeHerError", "InvalidArgument", "UpstreamUnavailable", "BroadcastFailure",
    "rank_candidates", "tag_filter_for", "assess", "build_alert", "SOS_EVENT",
]
