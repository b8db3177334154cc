"""Collaborators the preferences controllers push side effects into."""

from dataclasses import dataclass
from typing import Protocol
import logging

from .events import EventBus, Event, EventType

logger = logging.getLogger(__name__)

VERBOSE_LOGGING_LEVEL = logging.DEBUG
BASIC_LOGGING_LEVEL = logging.INFO

MAIN_SCREEN = "main"


def starting_theme(dark_mode: bool) -> str:
    """Analytics item describing the theme the session started with."""
    return f"startingTheme-{'dark' if dark_mode else 'light'}"


def set_logging_level(level: int) -> None:
    """Set the level of the root logger.

    Args:
        level: A ``logging`` level such as ``logging.DEBUG``
    """
    logging.getLogger().setLevel(level)
    logger.info(f"Logging level set to {logging.getLevelName(level)}")


@dataclass
class VmServiceFlags:
    """Feature switches read by the VM service connection."""

    enable_private_rpcs: bool = False


class Analytics(Protocol):
    """Fire-and-forget analytics sink."""

    def impression(self, screen: str, item: str) -> None:
        ...


class EventBusAnalytics:
    """Analytics sink that publishes impressions on an event bus."""

    def __init__(self, event_bus: EventBus):
        self._event_bus = event_bus

    def impression(self, screen: str, item: str) -> None:
        """Publish an impression event.

        Args:
            screen: The screen the impression belongs to
            item: What was seen
        """
        logger.debug(f"Impression: {screen}/{item}")
        self._event_bus.publish(
            Event(EventType.ANALYTICS_IMPRESSION, {"screen": screen, "item": item})
        )
