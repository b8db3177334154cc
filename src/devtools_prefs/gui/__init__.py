"""customtkinter user interface."""

from .preferences_window import PreferencesWindow

__all__ = ["PreferencesWindow"]
