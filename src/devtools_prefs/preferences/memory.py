"""Preferences for the memory screen."""

from typing import Optional

from ..core.observable import ObservableValue
from ..storage.key_value import KeyValueStorage
from .base import (
    BasePreferencesController,
    RunAsync,
    bool_to_storage,
    bool_value_from_storage,
    int_value_from_storage,
)

ANDROID_COLLECTION_STORAGE_ID = "memory.androidCollectionEnabled"
SHOW_CHART_STORAGE_ID = "memory.showChart"
REF_LIMIT_STORAGE_ID = "memory.refLimit"

DEFAULT_REF_LIMIT = 100000


class MemoryPreferencesController(BasePreferencesController):
    """Memory screen collection, chart visibility and reference limit."""

    def __init__(self, storage: KeyValueStorage, run_async: RunAsync):
        super().__init__(storage, run_async)
        self.android_collection_enabled = ObservableValue(False)
        self.show_chart = ObservableValue(True)
        self.ref_limit = ObservableValue(DEFAULT_REF_LIMIT)

    async def _load(self) -> None:
        self.toggle_android_collection(
            await bool_value_from_storage(self.storage, ANDROID_COLLECTION_STORAGE_ID, defaults_to=False)
        )
        self.write_back(self.android_collection_enabled, ANDROID_COLLECTION_STORAGE_ID, bool_to_storage)

        self.toggle_show_chart(
            await bool_value_from_storage(self.storage, SHOW_CHART_STORAGE_ID, defaults_to=True)
        )
        self.write_back(self.show_chart, SHOW_CHART_STORAGE_ID, bool_to_storage)

        self.set_ref_limit(
            await int_value_from_storage(self.storage, REF_LIMIT_STORAGE_ID, defaults_to=DEFAULT_REF_LIMIT)
        )
        self.write_back(self.ref_limit, REF_LIMIT_STORAGE_ID)

    def toggle_android_collection(self, enabled: Optional[bool]) -> None:
        if enabled is not None:
            self.android_collection_enabled.value = enabled

    def toggle_show_chart(self, show: Optional[bool]) -> None:
        if show is not None:
            self.show_chart.value = show

    def set_ref_limit(self, limit: Optional[int]) -> None:
        if limit is not None:
            self.ref_limit.value = limit
