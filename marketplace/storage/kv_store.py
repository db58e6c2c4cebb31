"""
Key-Value хранилище — абстрактный субстрат персистентности

Движок работает против абстрактного KV-хранилища, а не конкретной БД.
Значения — плоские JSON-совместимые dict.

Транзакции:
- transaction() буферизует записи и применяет их разом при успешном выходе
- при исключении буфер отбрасывается, хранилище не меняется
- вложенная transaction() присоединяется к внешней
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Tuple


Record = Dict[str, Any]


# =============================================================================
# ABSTRACT STORE
# =============================================================================


class KeyValueStore(ABC):
    """Абстрактное KV-хранилище с атомарными транзакциями."""

    @abstractmethod
    def get(self, key: str) -> Optional[Record]:
        """Значение по ключу или None."""

    @abstractmethod
    def put(self, key: str, value: Record) -> None:
        """Запись значения (внутри транзакции — в буфер)."""

    @abstractmethod
    def scan(self, prefix: str) -> Iterator[Tuple[str, Record]]:
        """Все пары (key, value) с ключом, начинающимся на prefix."""

    @abstractmethod
    def transaction(self):
        """Context manager атомарной группы записей."""

    def contains(self, key: str) -> bool:
        return self.get(key) is not None


# =============================================================================
# IN-MEMORY STORE
# =============================================================================


class InMemoryKeyValueStore(KeyValueStore):
    """
    In-memory реализация KeyValueStore.

    Чтения внутри транзакции видят собственные незакоммиченные записи.
    Наружу всегда отдаются копии, чтобы вызывающий не мог изменить
    хранимое значение в обход put().
    """

    def __init__(self):
        self._data: Dict[str, Record] = {}
        self._pending: Optional[Dict[str, Record]] = None

    def get(self, key: str) -> Optional[Record]:
        if self._pending is not None and key in self._pending:
            return dict(self._pending[key])
        value = self._data.get(key)
        return dict(value) if value is not None else None

    def put(self, key: str, value: Record) -> None:
        if self._pending is not None:
            self._pending[key] = dict(value)
        else:
            self._data[key] = dict(value)

    def scan(self, prefix: str) -> Iterator[Tuple[str, Record]]:
        merged = dict(self._data)
        if self._pending is not None:
            merged.update(self._pending)
        for key in sorted(merged):
            if key.startswith(prefix):
                yield key, dict(merged[key])

    @contextmanager
    def transaction(self):
        if self._pending is not None:
            # Вложенная транзакция входит во внешнюю
            yield self
            return

        self._pending = {}
        try:
            yield self
        except BaseException:
            self._pending = None
            raise
        pending, self._pending = self._pending, None
        self._data.update(pending)

    def __len__(self) -> int:
        return len(self._data)
