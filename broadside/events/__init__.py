"""
Events - Outbound game notifications.

Informational only: nothing in the engine depends on delivery.
"""

from .notifier import (
    EventNotifier,
    EventType,
    ShotEventData,
    OutcomeEventData,
)

__all__ = [
    "EventNotifier",
    "EventType",
    "ShotEventData",
    "OutcomeEventData",
]
