"""Storage and persistence layer."""

from .key_value import KeyValueStorage, JsonFileStorage, MemoryStorage, get_default_storage_dir

__all__ = ["KeyValueStorage", "JsonFileStorage", "MemoryStorage", "get_default_storage_dir"]
