"""Preferences for DevTools extensions."""

from typing import Optional

from ..core.observable import ObservableValue
from ..storage.key_value import KeyValueStorage
from .base import BasePreferencesController, RunAsync, bool_to_storage, bool_value_from_storage

SHOW_ONLY_ENABLED_EXTENSIONS_STORAGE_ID = "devtools_extensions.showOnlyEnabledExtensions"


class ExtensionsPreferencesController(BasePreferencesController):
    """Which extensions the extensions screen lists."""

    def __init__(self, storage: KeyValueStorage, run_async: RunAsync):
        super().__init__(storage, run_async)
        self.show_only_enabled_extensions = ObservableValue(False)

    async def _load(self) -> None:
        self.toggle_show_only_enabled_extensions(
            await bool_value_from_storage(
                self.storage, SHOW_ONLY_ENABLED_EXTENSIONS_STORAGE_ID, defaults_to=False
            )
        )
        self.write_back(
            self.show_only_enabled_extensions,
            SHOW_ONLY_ENABLED_EXTENSIONS_STORAGE_ID,
            bool_to_storage,
        )

    def toggle_show_only_enabled_extensions(self, enabled: Optional[bool]) -> None:
        if enabled is not None:
            self.show_only_enabled_extensions.value = enabled
