"""Preference controllers."""

from .base import BasePreferencesController, bool_value_from_storage, int_value_from_storage
from .controller import PreferencesController
from .extensions import ExtensionsPreferencesController
from .inspector import InspectorPreferencesController
from .logging_preferences import LoggingPreferencesController
from .memory import MemoryPreferencesController
from .performance import PerformancePreferencesController

__all__ = [
    "BasePreferencesController",
    "PreferencesController",
    "InspectorPreferencesController",
    "MemoryPreferencesController",
    "LoggingPreferencesController",
    "PerformancePreferencesController",
    "ExtensionsPreferencesController",
    "bool_value_from_storage",
    "int_value_from_storage",
]
