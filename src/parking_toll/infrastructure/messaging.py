# File: src/parking_toll/infrastructure/messaging.py
"""
Messaging Infrastructure for the Parking Toll library

In-process publish/subscribe of the domain events raised by the parking lot
aggregate (vehicle parked, vehicle left). Handlers are plain objects; a
failing handler is logged and does not prevent the other handlers from
receiving the event.
"""

from abc import ABC, abstractmethod
from typing import Dict, List
import logging
import threading

from ..domain.models import DomainEvent


# ============================================================================
# EVENT HANDLERS
# ============================================================================

class EventHandler(ABC):
    """Abstract base class for event handlers"""

    @abstractmethod
    def handle(self, event: DomainEvent) -> None:
        """Handle a domain event"""
        pass

    def can_handle(self, event: DomainEvent) -> bool:
        """Check if this handler can handle the event"""
        return True


class RecordingEventHandler(EventHandler):
    """Keeps every event it receives, e.g. for auditing or tests"""

    def __init__(self):
        self._events: List[DomainEvent] = []
        self._lock = threading.Lock()

    def handle(self, event: DomainEvent) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> List[DomainEvent]:
        with self._lock:
            return list(self._events)


# ============================================================================
# EVENT BUS (In-memory)
# ============================================================================

class EventBus:
    """
    In-memory event bus for intra-process event publishing

    Implements publish/subscribe pattern within the same process. Subscribers
    are keyed by event type string (e.g. "vehicle.parked"); "*" receives every
    event. Safe to use from several threads.
    """

    WILDCARD = "*"

    def __init__(self):
        self._subscribers: Dict[str, List[EventHandler]] = {}
        self._lock = threading.Lock()
        self._logger = logging.getLogger(self.__class__.__name__)

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """Subscribe to events of a specific type"""
        with self._lock:
            handlers = self._subscribers.setdefault(event_type, [])
            if handler not in handlers:
                handlers.append(handler)
        self._logger.debug(f"Subscribed {handler.__class__.__name__} to {event_type}")

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        """Unsubscribe handler from events"""
        with self._lock:
            handlers = self._subscribers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)
                self._logger.debug(f"Unsubscribed {handler.__class__.__name__} from {event_type}")

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers"""
        self._logger.debug(f"Publishing event: {event.event_type} (ID: {event.event_id})")

        with self._lock:
            handlers = (list(self._subscribers.get(event.event_type, []))
                        + list(self._subscribers.get(self.WILDCARD, [])))

        for handler in handlers:
            if not handler.can_handle(event):
                continue
            try:
                handler.handle(event)
            except Exception as e:
                self._logger.error(
                    f"Error handling event {event.event_type} with {handler.__class__.__name__}: {e}"
                )

    def publish_all(self, events: List[DomainEvent]) -> None:
        for event in events:
            self.publish(event)

    def clear_subscribers(self) -> None:
        """Clear all subscribers (for testing)"""
        with self._lock:
            self._subscribers.clear()
