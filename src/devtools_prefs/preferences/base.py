"""Shared plumbing for preference controllers."""

from abc import ABC, abstractmethod
import json
from typing import Any, Callable, Coroutine, Optional
import logging

from ..core.observable import AutoDisposeMixin, ObservableValue
from ..storage.key_value import KeyValueStorage

logger = logging.getLogger(__name__)

# Hands a coroutine to the event loop without waiting for it.
RunAsync = Callable[[Coroutine[Any, Any, Any]], Any]


def bool_to_storage(value: bool) -> str:
    return "true" if value else "false"


def list_to_storage(value: list[str]) -> str:
    return json.dumps(list(value))


async def bool_value_from_storage(
    storage: KeyValueStorage,
    storage_key: str,
    defaults_to: bool,
) -> bool:
    """Retrieve a boolean preference.

    A missing value resolves to ``defaults_to``. When the default is True,
    anything other than ``"false"`` reads as True; when it is False, only
    ``"true"`` does.

    Args:
        storage: The store to read from
        storage_key: Key of the preference
        defaults_to: Value used when nothing is stored

    Returns:
        The resolved boolean
    """
    value = await storage.get_value(storage_key)
    if defaults_to:
        return value != "false"
    return value == "true"


async def int_value_from_storage(
    storage: KeyValueStorage,
    storage_key: str,
    defaults_to: int,
) -> int:
    """Retrieve an integer preference, falling back to ``defaults_to``."""
    value = await storage.get_value(storage_key)
    if value is None:
        return defaults_to
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer {value!r} stored for {storage_key}, using {defaults_to}")
        return defaults_to


async def list_value_from_storage(storage: KeyValueStorage, storage_key: str) -> list[str]:
    """Retrieve a list of strings stored as a JSON array."""
    value = await storage.get_value(storage_key)
    if value is None:
        return []
    try:
        data = json.loads(value)
    except json.JSONDecodeError:
        logger.warning(f"Invalid list stored for {storage_key}, ignoring it")
        return []
    if not isinstance(data, list):
        logger.warning(f"Invalid list stored for {storage_key}, ignoring it")
        return []
    return [str(item) for item in data]


class BasePreferencesController(AutoDisposeMixin, ABC):
    """Base class for controllers that load, expose and persist preferences.

    Subclasses create their observables in ``__init__`` and implement
    ``_load``, which reads each value, applies it and calls ``write_back``.
    """

    def __init__(self, storage: KeyValueStorage, run_async: RunAsync):
        """Initialize the controller.

        Args:
            storage: Key-value store holding the preferences
            run_async: Schedules storage writes without waiting for them
        """
        super().__init__()
        self._storage = storage
        self._run_async = run_async
        self._initialized = False

    @property
    def storage(self) -> KeyValueStorage:
        return self._storage

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def init(self) -> None:
        """Load preferences and start persisting changes.

        Only the first call per controller does anything.
        """
        if self._initialized:
            return
        self._initialized = True
        await self._load()
        logger.debug(f"{type(self).__name__} initialized")

    @abstractmethod
    async def _load(self) -> None:
        pass

    def dispose(self) -> None:
        """Stop persisting changes."""
        self.cancel_listeners()

    def persist(self, storage_key: str, value: str) -> None:
        """Write a value to storage without waiting for it.

        Args:
            storage_key: Key of the preference
            value: Serialized value
        """
        self._run_async(self._storage.set_value(storage_key, value))

    def write_back(
        self,
        observable: ObservableValue,
        storage_key: str,
        to_storage: Optional[Callable[[Any], str]] = None,
    ) -> None:
        """Persist every future change of ``observable`` under ``storage_key``.

        Args:
            observable: The value to watch
            storage_key: Key to write to
            to_storage: Serializer for the value (``str`` if None)
        """
        serialize = to_storage or str

        def on_change() -> None:
            self.persist(storage_key, serialize(observable.value))

        self.add_auto_dispose_listener(observable, on_change)
