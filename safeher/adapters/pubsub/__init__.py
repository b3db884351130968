"""
In-process pub/sub adapter for SafeHer.
"""

from .memory import InMemoryPubSub

__all__ = ["InMemoryPubSub"]
