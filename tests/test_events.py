from devtools_prefs.core.collaborators import EventBusAnalytics, MAIN_SCREEN, starting_theme
from devtools_prefs.core.events import Event, EventBus, EventType


def test_unsubscribe_stops_delivery():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.ANALYTICS_IMPRESSION, received.append)
    bus.unsubscribe(EventType.ANALYTICS_IMPRESSION, received.append)
    bus.unsubscribe(EventType.ANALYTICS_IMPRESSION, received.append)

    bus.publish(Event(EventType.ANALYTICS_IMPRESSION))

    assert received == []


def test_handler_error_is_contained():
    bus = EventBus()
    received = []

    def broken(event):
        raise ValueError("bad handler")

    bus.subscribe(EventType.ANALYTICS_IMPRESSION, broken)
    bus.subscribe(EventType.ANALYTICS_IMPRESSION, received.append)

    bus.publish(Event(EventType.ANALYTICS_IMPRESSION))

    assert len(received) == 1


def test_analytics_impression_is_published():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.ANALYTICS_IMPRESSION, received.append)

    EventBusAnalytics(bus).impression(MAIN_SCREEN, starting_theme(dark_mode=False))

    assert received[0].data == {"screen": "main", "item": "startingTheme-light"}


def test_starting_theme_names():
    assert starting_theme(True) == "startingTheme-dark"
    assert starting_theme(False) == "startingTheme-light"
