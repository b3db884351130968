"""
Adapters for SafeHer hexagonal architecture.

This module contains the concrete implementations of port interfaces
that handle external I/O and infrastructure concerns.
"""

from .overpass.client import OverpassClient
from .mqtt.publisher_async import MqttBroadcaster
from .pubsub.memory import InMemoryPubSub

__all__ = ["OverpassClient", "MqttBroadcaster", "InMemoryPubSub"]
