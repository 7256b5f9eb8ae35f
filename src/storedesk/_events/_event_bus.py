"""In-process publish/subscribe used to broadcast session events."""

import asyncio
import inspect
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

EventHandler = Callable[..., Union[None, Awaitable[None]]]


def _event_name(event: Union[str, Enum]) -> str:
    return str(event.value) if isinstance(event, Enum) else str(event)


class EventBus:
    """Dispatch named events to subscribed handlers.

    Handlers may be plain functions or coroutine functions. A handler is
    called with the payload when one was published, and with no arguments
    otherwise. A failing handler is logged and does not prevent the
    remaining handlers from running.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[EventHandler]] = {}

    def subscribe(self, event: Union[str, Enum], handler: EventHandler) -> None:
        self._subscribers.setdefault(_event_name(event), []).append(handler)
        name = getattr(handler, "__name__", handler)
        logger.debug(f"Subscribed {name} to {_event_name(event)}")

    def unsubscribe(self, event: Union[str, Enum], handler: EventHandler) -> None:
        handlers = self._subscribers.get(_event_name(event), [])
        if handler in handlers:
            handlers.remove(handler)

    def subscribers(self, event: Union[str, Enum]) -> List[EventHandler]:
        return list(self._subscribers.get(_event_name(event), []))

    async def publish(self, event: Union[str, Enum], payload: Optional[Any] = None) -> None:
        name = _event_name(event)
        for handler in self.subscribers(name):
            try:
                result = handler() if payload is None else handler(payload)
                if inspect.isawaitable(result):
                    await result
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Handler for event '{name}' failed: {e}", exc_info=True)


_event_bus: Optional[EventBus] = None


def get_event_bus() -> EventBus:
    """Return the process-wide event bus."""
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus
