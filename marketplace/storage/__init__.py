"""Storage — абстрактное KV-хранилище и типизированные коллекции."""

from .records import RecordCollection, SequenceCounter
from .kv_store import InMemoryKeyValueStore, KeyValueStore, Record

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "Record",
    "RecordCollection",
    "SequenceCounter",
]
