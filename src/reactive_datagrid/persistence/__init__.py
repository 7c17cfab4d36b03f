from .store import (
    GridPreferences,
    JsonFilePreferenceStore,
    MemoryPreferenceStore,
    PreferenceStore,
    build_storage_key,
)

__all__ = [
    "GridPreferences",
    "JsonFilePreferenceStore",
    "MemoryPreferenceStore",
    "PreferenceStore",
    "build_storage_key",
]
