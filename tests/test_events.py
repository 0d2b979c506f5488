import pytest

from habitual import events
from habitual.events import ALL_EVENTS, ChangeEvent, EventBus


def test_publish_reaches_matching_and_wildcard_subscribers():
    bus = EventBus()
    specific, everything = [], []
    bus.subscribe(events.HABIT_HIDDEN, specific.append)
    bus.subscribe(ALL_EVENTS, everything.append)

    bus.publish(ChangeEvent(events.HABIT_HIDDEN, habit_id="h1"))
    bus.publish(ChangeEvent(events.HABIT_CREATED, habit_id="h2"))

    assert [event.habit_id for event in specific] == ["h1"]
    assert [event.habit_id for event in everything] == ["h1", "h2"]


def test_unsubscribe():
    bus = EventBus()
    received = []
    bus.subscribe(events.ENTRY_RECORDED, received.append)
    bus.unsubscribe(events.ENTRY_RECORDED, received.append)
    bus.publish(ChangeEvent(events.ENTRY_RECORDED))
    assert received == []


def test_unknown_event_type_is_rejected():
    with pytest.raises(ValueError):
        EventBus().subscribe("habit.exploded", print)
