"""Фикстуры pytest для тестирования task-chain."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

import pytest

from task_chain import Event, SequenceConfig, TaskSequence
from task_chain.notifiers import MemoryNotifier


class EventRecorder:
    """Подписчик на все события последовательности.

    Attributes:
        events: Список полученных событий (имя события, данные)
    """

    def __init__(self, sequence: TaskSequence) -> None:
        self.events: list[tuple[str, Any]] = []
        for event in Event:
            sequence.add_event_listener(event, self._listener(event))

    def _listener(self, event: Event) -> Callable[[Any], None]:
        def record(data: Any) -> None:
            self.events.append((event.value, data))

        return record

    def names(self) -> list[str]:
        """Имена событий в порядке поступления."""
        return [name for name, _ in self.events]

    def of(self, name: str) -> list[Any]:
        """Данные всех событий с указанным именем."""
        return [data for event_name, data in self.events if event_name == name]


async def _settle(rounds: int = 10) -> None:
    """Отдает управление циклу событий несколько раз."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def settle() -> Callable[..., Any]:
    """Корутина, которая дает циклу событий выполнить ожидающие шаги."""
    return _settle


@pytest.fixture
def recorder_factory() -> Callable[[TaskSequence], EventRecorder]:
    """Фабрика подписчиков EventRecorder."""
    return EventRecorder


@pytest.fixture
def notifier() -> MemoryNotifier:
    """Создает MemoryNotifier для проверки уведомлений."""
    return MemoryNotifier()


@pytest.fixture
def make_sequence(notifier: MemoryNotifier) -> Callable[..., TaskSequence]:
    """Фабрика последовательностей с MemoryNotifier."""

    def factory(**options: Any) -> TaskSequence:
        return TaskSequence(SequenceConfig(**options), notifier=notifier)

    return factory


@pytest.fixture
def calls() -> list[Any]:
    """Список для записи вызовов задач."""
    return []


@pytest.fixture
def record(calls: list[Any]) -> Callable[[Any], Any]:
    """Синхронная задача, которая записывает свой аргумент и возвращает его."""

    def record(value: Any) -> Any:
        calls.append(value)
        return value

    return record


@pytest.fixture
def restore_logger():
    """Восстанавливает настройки логгера task_chain после теста."""
    logger = logging.getLogger("task_chain")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
