"""Preferences for the logging screen."""

from typing import Optional

from ..core.observable import ObservableValue
from ..storage.key_value import KeyValueStorage
from .base import BasePreferencesController, RunAsync, int_value_from_storage

RETENTION_LIMIT_STORAGE_ID = "logging.retentionLimit"

DEFAULT_RETENTION_LIMIT = 3000


class LoggingPreferencesController(BasePreferencesController):
    """How many log entries the logging screen keeps."""

    def __init__(self, storage: KeyValueStorage, run_async: RunAsync):
        super().__init__(storage, run_async)
        self.retention_limit = ObservableValue(DEFAULT_RETENTION_LIMIT)

    async def _load(self) -> None:
        self.set_retention_limit(
            await int_value_from_storage(
                self.storage, RETENTION_LIMIT_STORAGE_ID, defaults_to=DEFAULT_RETENTION_LIMIT
            )
        )
        self.write_back(self.retention_limit, RETENTION_LIMIT_STORAGE_ID)

    def set_retention_limit(self, limit: Optional[int]) -> None:
        if limit is not None:
            self.retention_limit.value = limit
