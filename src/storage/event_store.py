from __future__ import annotations

import datetime as dt
import itertools
import logging
import threading
from typing import Callable, Optional

from study_assistant.models import CalendarEvent, EventColor

logger = logging.getLogger(__name__)

EventListener = Callable[[CalendarEvent], None]


class EventStore:
    """Calendar events plus a tiny bus: listeners hear about every new event."""

    def __init__(self):
        self._events: list[CalendarEvent] = []
        self._ids = itertools.count(1)
        self._listeners: list[EventListener] = []
        self._lock = threading.Lock()

    def add_listener(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: EventListener) -> None:
        self._listeners = [l for l in self._listeners if l is not listener]

    def list_events(self, on: Optional[dt.date] = None) -> list[CalendarEvent]:
        with self._lock:
            events = list(self._events)
        if on is not None:
            events = [e for e in events if e.date == on]
        return events

    def create_event(
        self,
        title: str,
        date: dt.date,
        time: Optional[str] = None,
        color: EventColor = EventColor.BLUE,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
    ) -> CalendarEvent:
        with self._lock:
            event = CalendarEvent(
                id=next(self._ids),
                title=title,
                date=date,
                color=color,
                time=time,
                start_time=start_time or time,
                end_time=end_time,
            )
            self._events.append(event)

        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                # keep notifying the rest
                logger.exception("Event listener failed for event %s", event.id)
        return event

    def clear(self) -> None:
        with self._lock:
            self._events.clear()
