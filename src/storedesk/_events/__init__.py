from ._event_bus import EventBus, get_event_bus
from ._events import SessionEvents

__all__ = ["EventBus", "SessionEvents", "get_event_bus"]
