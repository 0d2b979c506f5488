# SPDX-License-Identifier: MIT

"""In-process change notifications for the presentation layer."""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import pendulum

from habitual.model.entity_id import EntityId

HABIT_CREATED = "habit.created"
HABIT_UPDATED = "habit.updated"
HABIT_ARCHIVED = "habit.archived"
HABIT_UNARCHIVED = "habit.unarchived"
HABIT_DELETED = "habit.deleted"
ENTRY_RECORDED = "entry.recorded"
ENTRY_CLEARED = "entry.cleared"
HABIT_HIDDEN = "habit.hidden"
HABIT_UNHIDDEN = "habit.unhidden"
HIDDEN_CLEARED = "hidden.cleared"
PRESET_CREATED = "preset.created"
PRESET_DELETED = "preset.deleted"

EVENT_TYPES = (
    HABIT_CREATED,
    HABIT_UPDATED,
    HABIT_ARCHIVED,
    HABIT_UNARCHIVED,
    HABIT_DELETED,
    ENTRY_RECORDED,
    ENTRY_CLEARED,
    HABIT_HIDDEN,
    HABIT_UNHIDDEN,
    HIDDEN_CLEARED,
    PRESET_CREATED,
    PRESET_DELETED,
)

# Subscribing to this receives every event
ALL_EVENTS = "*"


@dataclass(frozen=True)
class ChangeEvent:
    event_type: str
    habit_id: Optional[EntityId] = None
    date: Optional[pendulum.Date] = None
    payload: dict[str, Any] = field(default_factory=dict)


EventHandler = Callable[[ChangeEvent], None]


class EventBus:
    def __init__(self) -> None:
        self._subscribers: dict[str, list[EventHandler]] = {}

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        if event_type != ALL_EVENTS and event_type not in EVENT_TYPES:
            raise ValueError(f"Unknown event type: {event_type}")
        handlers = self._subscribers.setdefault(event_type, [])
        handlers.append(handler)

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._subscribers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: ChangeEvent) -> None:
        for handler in self._subscribers.get(event.event_type, []):
            handler(event)
        for handler in self._subscribers.get(ALL_EVENTS, []):
            handler(event)

    def clear(self) -> None:
        self._subscribers.clear()


EVENT_BUS = EventBus()
