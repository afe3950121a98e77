"""Notification des changements d'état du plateau."""

from .event_bus import EventBus
from .events import RoadOwnerChangedEvent, SettlementChangedEvent

__all__ = [
    "EventBus",
    "RoadOwnerChangedEvent",
    "SettlementChangedEvent",
]
