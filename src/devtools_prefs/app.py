"""Main application orchestrator."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .core.collaborators import EventBusAnalytics, VmServiceFlags
from .core.events import EventBus, Event, EventType
from .preferences.controller import PreferencesController
from .storage.key_value import JsonFileStorage
from .utils.async_helpers import AsyncBridge

logger = logging.getLogger(__name__)

INIT_TIMEOUT = 10  # seconds


class PreferencesApp:
    """Wires storage, the preferences controller and the window together."""

    def __init__(self, storage_dir: Optional[Path] = None):
        """Initialize the application.

        Args:
            storage_dir: Directory for the preferences file (platform default if None)
        """
        self._setup_logging()

        logger.info("Initializing DevTools Preferences")

        # Core services
        self.event_bus = EventBus()
        self.async_bridge = AsyncBridge()
        self.storage = JsonFileStorage(storage_dir)
        self.vm_service_flags = VmServiceFlags()

        self.preferences = PreferencesController(
            storage=self.storage,
            run_async=self.async_bridge.run_async,
            analytics=EventBusAnalytics(self.event_bus),
            vm_service_flags=self.vm_service_flags,
        )

        self.window = None

        self._setup_event_handlers()

    def _setup_logging(self) -> None:
        """Configure logging."""
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            handlers=[
                logging.StreamHandler(sys.stdout),
            ],
        )

    def _setup_event_handlers(self) -> None:
        """Set up event subscriptions."""
        self.event_bus.subscribe(EventType.ANALYTICS_IMPRESSION, self._on_impression)

    def _on_impression(self, event: Event) -> None:
        logger.info(f"Analytics impression: {event.data['screen']}/{event.data['item']}")

    def load_preferences(self) -> None:
        """Start the async bridge and load every preference.

        Blocks until loading finishes so the window starts with stored values.
        """
        self.async_bridge.start()
        self.async_bridge.run_sync(self.preferences.init(), timeout=INIT_TIMEOUT)
        logger.info(f"Preferences file: {self.storage.path}")

    def run(self) -> None:
        """Load preferences and show the window until it is closed."""
        import customtkinter as ctk

        from .gui.preferences_window import PreferencesWindow, appearance_mode

        logger.info("Starting DevTools Preferences")

        try:
            self.load_preferences()

            ctk.set_appearance_mode(appearance_mode(self.preferences.dark_mode_enabled.value))
            ctk.set_default_color_theme("blue")

            self.window = PreferencesWindow(self.preferences, on_close=self.quit)
            self.window.mainloop()
        finally:
            self._cleanup()

    def run_headless(self) -> dict:
        """Load preferences, log them and return them without opening a window.

        Returns:
            Storage key to resolved value for the global preferences
        """
        try:
            self.load_preferences()
            values = self._resolved_values()
        finally:
            self._cleanup()

        for key, value in values.items():
            logger.info(f"{key} = {value!r}")
        return values

    def _resolved_values(self) -> dict:
        prefs = self.preferences
        return {
            "ui.darkMode": prefs.dark_mode_enabled.value,
            "ui.vmDeveloperMode": prefs.vm_developer_mode_enabled.value,
            "verboseLogging": prefs.verbose_logging_enabled.value,
            "inspector.hoverEvalMode": prefs.inspector.hover_eval_mode_enabled.value,
            "inspector.autoRefreshEnabled": prefs.inspector.auto_refresh_enabled.value,
            "inspector.customPubRootDirectories": prefs.inspector.custom_pub_root_directories.value,
            "memory.androidCollectionEnabled": prefs.memory.android_collection_enabled.value,
            "memory.showChart": prefs.memory.show_chart.value,
            "memory.refLimit": prefs.memory.ref_limit.value,
            "logging.retentionLimit": prefs.logging.retention_limit.value,
            "performance.showFlutterFramesChart": prefs.performance.show_flutter_frames_chart.value,
            "performance.includeCpuSamplesInTimeline": prefs.performance.include_cpu_samples_in_timeline.value,
            "devtools_extensions.showOnlyEnabledExtensions": prefs.extensions.show_only_enabled_extensions.value,
        }

    def _cleanup(self) -> None:
        """Clean up resources."""
        logger.info("Cleaning up...")
        self.preferences.dispose()

        try:
            self.async_bridge.stop()
        except Exception as e:
            logger.error(f"Error stopping async bridge: {e}")

    def quit(self) -> None:
        """Close the window; cleanup runs when the main loop returns."""
        logger.info("Quitting application")

        if self.window is not None:
            try:
                self.window.quit()  # Stop mainloop
                self.window.destroy()
            except Exception as e:
                logger.error(f"Error destroying window: {e}")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="devtools-prefs",
        description="View and edit DevTools user preferences.",
    )
    parser.add_argument(
        "--storage-dir",
        type=Path,
        default=None,
        help="directory holding preferences.json (defaults to the per-user config directory)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="load and print the preferences without opening a window",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    """Application entry point."""
    args = parse_args(argv)
    app = PreferencesApp(storage_dir=args.storage_dir)
    if args.headless:
        app.run_headless()
    else:
        app.run()


if __name__ == "__main__":
    main()
