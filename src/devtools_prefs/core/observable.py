"""Observable values and listener bookkeeping."""

from typing import Callable, Generic, TypeVar
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[], None]


class ObservableValue(Generic[T]):
    """Holds a value and notifies listeners when it changes.

    Listeners take no arguments and read ``value`` themselves. They are
    called synchronously, in registration order, on the thread that
    assigned the new value.
    """

    def __init__(self, value: T):
        self._value = value
        self._listeners: list[Listener] = []

    @property
    def value(self) -> T:
        """Get the current value."""
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        if new_value == self._value:
            return
        self._value = new_value
        self.notify_listeners()

    @property
    def has_listeners(self) -> bool:
        return bool(self._listeners)

    def add_listener(self, listener: Listener) -> None:
        """Register a listener.

        Args:
            listener: Callback invoked after every change
        """
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Remove a listener. Unknown listeners are ignored.

        Args:
            listener: The callback to remove
        """
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify_listeners(self) -> None:
        """Call every registered listener."""
        for listener in list(self._listeners):
            try:
                listener()
            except Exception as e:
                logger.error(f"Error in listener for {self!r}: {e}")

    def __repr__(self) -> str:
        return f"ObservableValue({self._value!r})"


class AutoDisposeMixin:
    """Tracks listeners added through it so they can be removed in one call."""

    def __init__(self):
        self._auto_dispose_listeners: list[tuple[ObservableValue, Listener]] = []

    def add_auto_dispose_listener(self, observable: ObservableValue, listener: Listener) -> None:
        """Add a listener that is removed by ``cancel_listeners``.

        Args:
            observable: The value to listen to
            listener: Callback invoked after every change
        """
        observable.add_listener(listener)
        self._auto_dispose_listeners.append((observable, listener))

    def cancel_listeners(self) -> None:
        """Remove every listener added with ``add_auto_dispose_listener``."""
        for observable, listener in self._auto_dispose_listeners:
            observable.remove_listener(listener)
        self._auto_dispose_listeners.clear()
