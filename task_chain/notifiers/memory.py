"""Приемник уведомлений, хранящий полученные уведомления в памяти."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from task_chain.interfaces import Notifier

if TYPE_CHECKING:
    from task_chain.exceptions import TaskExecutionError
    from task_chain.interfaces import Task
    from task_chain.progress import ProgressStats


class MemoryNotifier(Notifier):
    """Приемник, записывающий уведомления в список.

    Используется для тестирования и для инструментов, которым нужна
    история событий последовательности без подписки на EventChannel.

    Пример использования:
        >>> notifier = MemoryNotifier()
        >>> sequence = TaskSequence(notifier=notifier)
        >>> ...
        >>> notifier.names()
        ['on_start', 'on_progress', 'on_complete']

    Attributes:
        records: Список записей (имя метода, аргументы)
    """

    def __init__(self) -> None:
        """Инициализирует приемник с пустой историей."""
        self.records: list[tuple[str, tuple[Any, ...]]] = []

    def names(self) -> list[str]:
        """Возвращает имена полученных уведомлений в порядке поступления."""
        return [name for name, _ in self.records]

    def clear(self) -> None:
        """Очищает историю уведомлений."""
        self.records.clear()

    def on_start(self) -> None:
        self.records.append(("on_start", ()))

    def on_complete(self) -> None:
        self.records.append(("on_complete", ()))

    def on_progress(self, stats: ProgressStats, paused: bool) -> None:
        self.records.append(("on_progress", (stats, paused)))

    def on_pause(self) -> None:
        self.records.append(("on_pause", ()))

    def on_resume(self, stats: ProgressStats) -> None:
        self.records.append(("on_resume", (stats,)))

    def on_cancel(self) -> None:
        self.records.append(("on_cancel", ()))

    def on_error(self, error: TaskExecutionError, task: Task) -> None:
        self.records.append(("on_error", (error, task)))
