from datetime import datetime
from typing import Callable, Dict, List, NamedTuple

__all__ = ['EXPENDITURES_UPDATED', 'SETTINGS_CHANGED', 'FREQUENCY_CHANGED', 'Event', 'EventBus']

EXPENDITURES_UPDATED = "EXPENDITURES_UPDATED"
SETTINGS_CHANGED = "SETTINGS_CHANGED"
FREQUENCY_CHANGED = "FREQUENCY_CHANGED"


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], object]


class EventBus:
    """Synchronous publish/subscribe used for change notifications.

    There is no module-level instance; whoever owns the stores creates one
    and passes it in.
    """

    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def unsubscribe(self, name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, name: str, payload: dict) -> List[object]:
        handlers = list(self._subscribers.get(name, []))
        if not handlers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        return [handler(event, payload) for handler in handlers]
