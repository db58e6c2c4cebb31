"""
Типизированные коллекции записей поверх KeyValueStore

RecordCollection хранит Pydantic модели под ключами "<prefix>:<id>",
при необходимости проверяя каждую запись по JSON Schema контракту.
SequenceCounter выдаёт плотные последовательные идентификаторы.
"""

from typing import Generic, Iterator, Optional, Type, TypeVar

from pydantic import BaseModel

from marketplace.core.contracts import ContractValidator
from marketplace.storage.kv_store import KeyValueStore


ModelT = TypeVar("ModelT", bound=BaseModel)


class SequenceCounter:
    """
    Монотонный счётчик идентификаторов коллекции.

    Значение хранится в самом KV-хранилище, поэтому откат транзакции
    откатывает и выданный id — последовательность остаётся без пропусков.
    """

    def __init__(self, store: KeyValueStore, name: str):
        self._store = store
        self._key = f"seq:{name}"

    def peek(self) -> int:
        record = self._store.get(self._key)
        return int(record["value"]) if record is not None else 0

    def next(self) -> int:
        value = self.peek()
        self._store.put(self._key, {"value": value + 1})
        return value


class RecordCollection(Generic[ModelT]):
    """Коллекция однотипных записей."""

    def __init__(
        self,
        store: KeyValueStore,
        prefix: str,
        model_cls: Type[ModelT],
        validator: Optional[ContractValidator] = None,
    ):
        self._store = store
        self._prefix = f"{prefix}:"
        self._model_cls = model_cls
        self._validator = validator

    def _key(self, record_id) -> str:
        return f"{self._prefix}{record_id}"

    def get(self, record_id) -> Optional[ModelT]:
        data = self._store.get(self._key(record_id))
        if data is None:
            return None
        return self._model_cls.model_validate(data)

    def contains(self, record_id) -> bool:
        return self._store.contains(self._key(record_id))

    def put(self, record_id, record: ModelT) -> None:
        data = record.model_dump(mode="json")
        if self._validator is not None:
            self._validator.validate(data)
        self._store.put(self._key(record_id), data)

    def values(self) -> Iterator[ModelT]:
        for _, data in self._store.scan(self._prefix):
            yield self._model_cls.model_validate(data)
