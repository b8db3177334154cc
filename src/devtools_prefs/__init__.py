"""DevTools preferences: persisted user settings exposed as observable values."""

__version__ = "0.1.0"
