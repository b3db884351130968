"""
SafeHer core service.

Nearby help resource lookup, time/resource based safety scoring
and SOS fan-out broadcasting.
"""

__version__ = "0.1.0"
