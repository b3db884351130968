"""
MQTT broadcast adapter for SafeHer.

This module provides an implementation of BroadcastPort
that publishes SOS events to an MQTT broker.
"""

from .publisher_async import MqttBroadcaster

__all__ = ["MqttBroadcaster"]
