from .kv_store import (
    KeyValueStore,
    MemoryKeyValueStore,
    JsonFileKeyValueStore,
    make_kv_store,
)

__all__ = [
    "KeyValueStore",
    "MemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "make_kv_store",
]
