"""EventOutbox — исходящий канал доменных событий

События не связаны с записью в хранилище: компонент добавляет событие
в outbox после коммита, подписчики получают его синхронно в момент
публикации, а при включённой буферизации хост забирает накопленное
через drain().

Публикация никогда не завершается исключением подписчика: к этому
моменту изменение уже закоммичено. Ошибка подписчика логируется,
остальные подписчики вызываются.
"""

import logging
from typing import Callable, List

from pydantic import BaseModel


logger = logging.getLogger(__name__)

EventHandler = Callable[[BaseModel], None]


class EventOutbox:
    """Список подписчиков + буфер неразобранных событий.

    При buffer_events=True каждое событие остаётся в буфере до drain():
    хост, включивший буферизацию, обязан периодически его вызывать.
    Хосту, которому достаточно подписчиков, буфер не нужен.
    """

    def __init__(self, buffer_events: bool = True):
        self._buffer_events = buffer_events
        self._handlers: List[EventHandler] = []
        self._pending: List[BaseModel] = []

    @property
    def buffer_events(self) -> bool:
        return self._buffer_events

    def subscribe(self, handler: EventHandler) -> Callable[[], None]:
        """
        Регистрация подписчика.

        Returns:
            функция отписки
        """
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def publish(self, event: BaseModel) -> None:
        if self._buffer_events:
            self._pending.append(event)
        logger.debug("event published: %s %s", type(event).__name__, event.model_dump(mode="json"))

        for handler in list(self._handlers):
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "event handler %r failed on %s", handler, type(event).__name__
                )

    def drain(self) -> List[BaseModel]:
        """Забрать и очистить накопленные события."""
        events, self._pending = self._pending, []
        return events

    def __len__(self) -> int:
        return len(self._pending)
