"""Preferences for the widget inspector."""

from typing import Iterable, Optional

from ..core.observable import ObservableValue
from ..storage.key_value import KeyValueStorage
from .base import (
    BasePreferencesController,
    RunAsync,
    bool_to_storage,
    bool_value_from_storage,
    list_to_storage,
    list_value_from_storage,
)


HOVER_EVAL_MODE_STORAGE_ID = "inspector.hoverEvalMode"
AUTO_REFRESH_STORAGE_ID = "inspector.autoRefreshEnabled"
CUSTOM_PUB_ROOT_DIRECTORIES_STORAGE_ID = "inspector.customPubRootDirectories"


class InspectorPreferencesController(BasePreferencesController):
    """Inspector hover evaluation, auto refresh and package root directories."""

    def __init__(self, storage: KeyValueStorage, run_async: RunAsync):
        super().__init__(storage, run_async)
        self.hover_eval_mode_enabled = ObservableValue(True)
        self.auto_refresh_enabled = ObservableValue(True)
        self.custom_pub_root_directories: ObservableValue[list[str]] = ObservableValue([])

    async def _load(self) -> None:
        self.toggle_hover_eval_mode(
            await bool_value_from_storage(self.storage, HOVER_EVAL_MODE_STORAGE_ID, defaults_to=True)
        )
        self.write_back(self.hover_eval_mode_enabled, HOVER_EVAL_MODE_STORAGE_ID, bool_to_storage)

        self.toggle_auto_refresh(
            await bool_value_from_storage(self.storage, AUTO_REFRESH_STORAGE_ID, defaults_to=True)
        )
        self.write_back(self.auto_refresh_enabled, AUTO_REFRESH_STORAGE_ID, bool_to_storage)

        self.custom_pub_root_directories.value = await list_value_from_storage(
            self.storage, CUSTOM_PUB_ROOT_DIRECTORIES_STORAGE_ID
        )
        self.write_back(
            self.custom_pub_root_directories,
            CUSTOM_PUB_ROOT_DIRECTORIES_STORAGE_ID,
            list_to_storage,
        )

    def toggle_hover_eval_mode(self, enabled: Optional[bool]) -> None:
        if enabled is not None:
            self.hover_eval_mode_enabled.value = enabled

    def toggle_auto_refresh(self, enabled: Optional[bool]) -> None:
        if enabled is not None:
            self.auto_refresh_enabled.value = enabled

    def add_pub_root_directories(self, directories: Iterable[str]) -> None:
        """Add package root directories, skipping ones already present.

        Args:
            directories: Directories to add, in order
        """
        current = list(self.custom_pub_root_directories.value)
        for directory in directories:
            if directory and directory not in current:
                current.append(directory)
        self.custom_pub_root_directories.value = current

    def remove_pub_root_directories(self, directories: Iterable[str]) -> None:
        """Remove package root directories.

        Args:
            directories: Directories to remove
        """
        to_remove = set(directories)
        self.custom_pub_root_directories.value = [
            d for d in self.custom_pub_root_directories.value if d not in to_remove
        ]
