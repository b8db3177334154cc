"""Preferences window."""

import customtkinter as ctk
from typing import Callable, Optional
import logging

from ..core.observable import AutoDisposeMixin, ObservableValue
from ..preferences.controller import PreferencesController

logger = logging.getLogger(__name__)


def appearance_mode(dark_mode: bool) -> str:
    return "dark" if dark_mode else "light"


class PreferencesWindow(ctk.CTk, AutoDisposeMixin):
    """Main window showing every preference as an editable control.

    Controls write through the controller's toggle methods and follow the
    observables, so changes made elsewhere show up here too.
    """

    def __init__(
        self,
        preferences: PreferencesController,
        on_close: Optional[Callable] = None,
        **kwargs,
    ):
        """Initialize the window.

        Args:
            preferences: The loaded preferences controller
            on_close: Callback when window is closed
            **kwargs: Additional arguments for CTk
        """
        ctk.CTk.__init__(self, **kwargs)
        AutoDisposeMixin.__init__(self)

        self.preferences = preferences
        self._on_close = on_close

        self._setup_window()
        self._setup_ui()
        self._bind_events()

    def _setup_window(self) -> None:
        """Configure the window."""
        self.title("DevTools Preferences")
        self.geometry("560x480")
        self.minsize(480, 400)

    def _setup_ui(self) -> None:
        """Set up the user interface."""
        self.tabview = ctk.CTkTabview(self)
        self.tabview.pack(fill="both", expand=True, padx=10, pady=10)

        for name in ("General", "Inspector", "Memory", "Logging", "Performance", "Extensions"):
            self.tabview.add(name)

        self._setup_general_tab()
        self._setup_inspector_tab()
        self._setup_memory_tab()
        self._setup_logging_tab()
        self._setup_performance_tab()
        self._setup_extensions_tab()

    def _setup_general_tab(self) -> None:
        tab = self.tabview.tab("General")
        prefs = self.preferences

        self._add_switch(tab, "Dark theme", prefs.dark_mode_enabled, prefs.toggle_dark_mode_theme)
        self._add_switch(
            tab, "VM developer mode", prefs.vm_developer_mode_enabled, prefs.toggle_vm_developer_mode
        )
        self._add_switch(
            tab, "Verbose logging", prefs.verbose_logging_enabled, prefs.toggle_verbose_logging
        )

        self.add_auto_dispose_listener(prefs.dark_mode_enabled, self._apply_theme)

    def _setup_inspector_tab(self) -> None:
        tab = self.tabview.tab("Inspector")
        inspector = self.preferences.inspector

        self._add_switch(
            tab, "Hover evaluation mode", inspector.hover_eval_mode_enabled, inspector.toggle_hover_eval_mode
        )
        self._add_switch(
            tab, "Auto refresh", inspector.auto_refresh_enabled, inspector.toggle_auto_refresh
        )

        # Package root directories
        frame = ctk.CTkFrame(tab)
        frame.pack(fill="x", padx=10, pady=10)

        ctk.CTkLabel(
            frame,
            text="Package root directories",
            font=ctk.CTkFont(size=14, weight="bold"),
        ).pack(anchor="w", padx=10, pady=(10, 5))

        row = ctk.CTkFrame(frame, fg_color="transparent")
        row.pack(fill="x", padx=10, pady=5)
        self.directory_entry = ctk.CTkEntry(row, width=260)
        self.directory_entry.pack(side="left", padx=(0, 5))
        ctk.CTkButton(
            row,
            text="Add",
            width=70,
            command=lambda: self._edit_directories(inspector.add_pub_root_directories),
        ).pack(side="left", padx=5)
        ctk.CTkButton(
            row,
            text="Remove",
            width=70,
            fg_color=("gray70", "gray30"),
            command=lambda: self._edit_directories(inspector.remove_pub_root_directories),
        ).pack(side="left", padx=5)

        directories_label = ctk.CTkLabel(frame, text="", justify="left", text_color="gray")
        directories_label.pack(anchor="w", padx=10, pady=(0, 10))

        def show_directories() -> None:
            directories = inspector.custom_pub_root_directories.value
            directories_label.configure(text="\n".join(directories) or "(none)")

        show_directories()
        self.add_auto_dispose_listener(inspector.custom_pub_root_directories, show_directories)

    def _setup_memory_tab(self) -> None:
        tab = self.tabview.tab("Memory")
        memory = self.preferences.memory

        self._add_switch(
            tab,
            "Android memory collection",
            memory.android_collection_enabled,
            memory.toggle_android_collection,
        )
        self._add_switch(tab, "Show chart", memory.show_chart, memory.toggle_show_chart)
        self._add_int_entry(tab, "Reference limit", memory.ref_limit, memory.set_ref_limit)

    def _setup_logging_tab(self) -> None:
        tab = self.tabview.tab("Logging")
        logging_prefs = self.preferences.logging

        self._add_int_entry(
            tab, "Retention limit", logging_prefs.retention_limit, logging_prefs.set_retention_limit
        )

    def _setup_performance_tab(self) -> None:
        tab = self.tabview.tab("Performance")
        performance = self.preferences.performance

        self._add_switch(
            tab,
            "Show frames chart",
            performance.show_flutter_frames_chart,
            performance.toggle_show_flutter_frames_chart,
        )
        self._add_switch(
            tab,
            "Include CPU samples in timeline",
            performance.include_cpu_samples_in_timeline,
            performance.toggle_include_cpu_samples,
        )

    def _setup_extensions_tab(self) -> None:
        tab = self.tabview.tab("Extensions")
        extensions = self.preferences.extensions

        self._add_switch(
            tab,
            "Show only enabled extensions",
            extensions.show_only_enabled_extensions,
            extensions.toggle_show_only_enabled_extensions,
        )

    def _add_switch(
        self,
        parent,
        text: str,
        observable: ObservableValue,
        toggle: Callable[[Optional[bool]], None],
    ) -> None:
        """Add a switch bound two-way to a boolean preference.

        Args:
            parent: Container widget
            text: Switch label
            observable: The preference value
            toggle: Controller method applying a new value
        """
        var = ctk.BooleanVar(value=observable.value)
        ctk.CTkSwitch(
            parent,
            text=text,
            variable=var,
            command=lambda: toggle(var.get()),
        ).pack(anchor="w", padx=10, pady=8)

        self.add_auto_dispose_listener(observable, lambda: var.set(observable.value))

    def _add_int_entry(
        self,
        parent,
        text: str,
        observable: ObservableValue,
        setter: Callable[[Optional[int]], None],
    ) -> None:
        """Add an entry bound to an integer preference, applied on Return.

        Args:
            parent: Container widget
            text: Entry label
            observable: The preference value
            setter: Controller method applying a new value
        """
        row = ctk.CTkFrame(parent, fg_color="transparent")
        row.pack(fill="x", padx=10, pady=8)
        ctk.CTkLabel(row, text=text, width=140, anchor="w").pack(side="left")

        var = ctk.StringVar(value=str(observable.value))
        entry = ctk.CTkEntry(row, width=120, textvariable=var)
        entry.pack(side="left", padx=5)

        def apply(_event=None) -> None:
            try:
                value = int(var.get())
            except ValueError:
                logger.warning(f"Ignoring non-integer value for {text}: {var.get()!r}")
                var.set(str(observable.value))
                return
            setter(value)

        entry.bind("<Return>", apply)
        entry.bind("<FocusOut>", apply)
        self.add_auto_dispose_listener(observable, lambda: var.set(str(observable.value)))

    def _edit_directories(self, edit: Callable[[list[str]], None]) -> None:
        directory = self.directory_entry.get().strip()
        if directory:
            edit([directory])
            self.directory_entry.delete(0, "end")

    def _apply_theme(self) -> None:
        ctk.set_appearance_mode(appearance_mode(self.preferences.dark_mode_enabled.value))

    def _bind_events(self) -> None:
        """Bind window events."""
        self.protocol("WM_DELETE_WINDOW", self._handle_close)

    def _handle_close(self) -> None:
        """Handle window close event."""
        self.cancel_listeners()

        if self._on_close:
            self._on_close()
        else:
            self.destroy()
