"""Канал событий жизненного цикла последовательности."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from task_chain.logging import get_logger

Listener = Callable[[Any], Any]


class Event(str, Enum):
    """Имена событий, которые публикует TaskSequence.

    Attributes:
        STATUS_CHANGE: Изменился статус (данные: SequenceStatus)
        START: Выполнение запущено
        PROGRESS: Задача завершена (данные: ProgressStats)
        COMPLETE: Все задачи выполнены
        PAUSE: Запрошена пауза (данные: задача в голове цепочки)
        RESUME: Выполнение возобновлено (данные: задача в голове цепочки)
        CANCEL: Последовательность отменена
        ERROR: Задача завершилась с ошибкой (данные: TaskExecutionError)
    """

    STATUS_CHANGE = "status-change"
    START = "start"
    PROGRESS = "progress"
    COMPLETE = "complete"
    PAUSE = "pause"
    RESUME = "resume"
    CANCEL = "cancel"
    ERROR = "error"


class EventChannel:
    """Реестр подписчиков на события последовательности.

    Подписчики вызываются в порядке добавления, повторная подписка
    одного и того же callback допускается. Каждый подписчик получает
    ровно один позиционный аргумент с данными события (None, если
    у события нет данных).

    Пример использования:
        >>> channel = EventChannel()
        >>> channel.add_listener("progress", lambda stats: print(stats.percent_complete))
        >>> channel.emit(Event.START)

    Attributes:
        _listeners: Словарь подписчиков (событие -> список callback)
    """

    def __init__(self) -> None:
        """Инициализирует канал с пустыми списками для всех событий."""
        self._listeners: dict[Event, list[Listener]] = {}
        self.clear()

    def add_listener(self, event: Event | str, callback: Listener) -> None:
        """Подписывает callback на событие.

        Args:
            event: Событие или его имя ("progress", "error", ...)
            callback: Функция с одним аргументом (данные события)

        Raises:
            ValueError: Если имя события неизвестно
            TypeError: Если callback не вызываемый
        """
        if not callable(callback):
            raise TypeError(
                f"Listener must be callable, got {type(callback).__name__}"
            )
        self._listeners[Event(event)].append(callback)

    def remove_listener(self, event: Event | str, callback: Listener) -> None:
        """Удаляет первое вхождение callback из подписчиков события.

        Если callback не подписан, ничего не происходит.

        Args:
            event: Событие или его имя
            callback: Ранее подписанная функция

        Raises:
            ValueError: Если имя события неизвестно
        """
        listeners = self._listeners[Event(event)]
        if callback in listeners:
            listeners.remove(callback)

    def clear(self) -> None:
        """Удаляет всех подписчиков всех событий."""
        self._listeners = {event: [] for event in Event}

    def listeners(self, event: Event | str) -> list[Listener]:
        """Возвращает копию списка подписчиков события.

        Args:
            event: Событие или его имя

        Returns:
            Список подписчиков в порядке вызова
        """
        return list(self._listeners[Event(event)])

    def emit(self, event: Event, data: Any = None) -> None:
        """Вызывает подписчиков события.

        Исключение в подписчике записывается в лог и не прерывает
        вызов остальных подписчиков и выполнение последовательности.

        Args:
            event: Событие
            data: Данные события
        """
        # Снимок списка: подписчик может отписаться во время вызова
        for callback in list(self._listeners[event]):
            try:
                callback(data)
            except Exception as e:
                get_logger().error(
                    f"Listener for '{event.value}' event failed: {e}",
                    exc_info=True,
                )
