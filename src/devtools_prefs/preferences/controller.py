"""Controller for global application preferences."""

from typing import Callable, Optional
import logging

from ..core.collaborators import (
    Analytics,
    BASIC_LOGGING_LEVEL,
    MAIN_SCREEN,
    VERBOSE_LOGGING_LEVEL,
    VmServiceFlags,
    set_logging_level,
    starting_theme,
)
from ..core.observable import ObservableValue
from ..storage.key_value import KeyValueStorage
from .base import BasePreferencesController, RunAsync, bool_to_storage, bool_value_from_storage
from .extensions import ExtensionsPreferencesController
from .inspector import InspectorPreferencesController
from .logging_preferences import LoggingPreferencesController
from .memory import MemoryPreferencesController
from .performance import PerformancePreferencesController

logger = logging.getLogger(__name__)

USE_DARK_THEME_AS_DEFAULT = True

DARK_MODE_STORAGE_ID = "ui.darkMode"
VM_DEVELOPER_MODE_STORAGE_ID = "ui.vmDeveloperMode"
VERBOSE_LOGGING_STORAGE_ID = "verboseLogging"


class PreferencesController(BasePreferencesController):
    """Global application preferences and the feature-area controllers under them.

    Callers get the instance passed to them; there is no global lookup.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        run_async: RunAsync,
        analytics: Optional[Analytics] = None,
        vm_service_flags: Optional[VmServiceFlags] = None,
        set_log_level: Callable[[int], None] = set_logging_level,
    ):
        """Initialize the controller.

        Args:
            storage: Key-value store holding the preferences
            run_async: Schedules storage writes without waiting for them
            analytics: Receives the starting theme impression (optional)
            vm_service_flags: Flags toggled by VM developer mode
            set_log_level: Called with the new level when verbose logging changes
        """
        super().__init__(storage, run_async)
        self._analytics = analytics
        self._set_log_level = set_log_level
        self.vm_service_flags = vm_service_flags or VmServiceFlags()

        # Only tracks the user preference. Whatever renders the UI decides
        # the effective theme.
        self.dark_mode_enabled = ObservableValue(USE_DARK_THEME_AS_DEFAULT)
        self.vm_developer_mode_enabled = ObservableValue(False)
        self.verbose_logging_enabled = ObservableValue(
            logging.getLogger().level == VERBOSE_LOGGING_LEVEL
        )

        self.inspector = InspectorPreferencesController(storage, run_async)
        self.memory = MemoryPreferencesController(storage, run_async)
        self.logging = LoggingPreferencesController(storage, run_async)
        self.performance = PerformancePreferencesController(storage, run_async)
        self.extensions = ExtensionsPreferencesController(storage, run_async)

    @property
    def children(self) -> list[BasePreferencesController]:
        return [self.inspector, self.memory, self.logging, self.performance, self.extensions]

    async def _load(self) -> None:
        dark_mode_value = await self.storage.get_value(DARK_MODE_STORAGE_ID)
        use_dark_mode = (
            dark_mode_value is None and USE_DARK_THEME_AS_DEFAULT
        ) or dark_mode_value == "true"
        if self._analytics is not None:
            self._analytics.impression(MAIN_SCREEN, starting_theme(dark_mode=use_dark_mode))
        self.toggle_dark_mode_theme(use_dark_mode)
        self.write_back(self.dark_mode_enabled, DARK_MODE_STORAGE_ID, bool_to_storage)

        self.toggle_vm_developer_mode(
            await bool_value_from_storage(self.storage, VM_DEVELOPER_MODE_STORAGE_ID, defaults_to=False)
        )
        self.write_back(self.vm_developer_mode_enabled, VM_DEVELOPER_MODE_STORAGE_ID, bool_to_storage)

        self.toggle_verbose_logging(
            await bool_value_from_storage(self.storage, VERBOSE_LOGGING_STORAGE_ID, defaults_to=False)
        )
        self.write_back(self.verbose_logging_enabled, VERBOSE_LOGGING_STORAGE_ID, bool_to_storage)

        for child in self.children:
            await child.init()

        logger.info(
            f"Preferences loaded (dark mode: {self.dark_mode_enabled.value}, "
            f"VM developer mode: {self.vm_developer_mode_enabled.value}, "
            f"verbose logging: {self.verbose_logging_enabled.value})"
        )

    def dispose(self) -> None:
        """Detach every listener, children first."""
        for child in self.children:
            child.dispose()
        super().dispose()

    def toggle_dark_mode_theme(self, use_dark_mode: Optional[bool]) -> None:
        """Change the value for the dark mode setting."""
        if use_dark_mode is not None:
            self.dark_mode_enabled.value = use_dark_mode

    def toggle_vm_developer_mode(self, enable_vm_developer_mode: Optional[bool]) -> None:
        """Change the value for the VM developer mode setting."""
        if enable_vm_developer_mode is not None:
            self.vm_developer_mode_enabled.value = enable_vm_developer_mode
            self.vm_service_flags.enable_private_rpcs = enable_vm_developer_mode

    def toggle_verbose_logging(self, enable_verbose_logging: Optional[bool]) -> None:
        if enable_verbose_logging is not None:
            self.verbose_logging_enabled.value = enable_verbose_logging
            if enable_verbose_logging:
                self._set_log_level(VERBOSE_LOGGING_LEVEL)
            else:
                self._set_log_level(BASIC_LOGGING_LEVEL)
