"""Приемник уведомлений, который пишет события в лог task-chain."""

from __future__ import annotations

from typing import TYPE_CHECKING

from task_chain.interfaces import Notifier
from task_chain.logging import get_logger

if TYPE_CHECKING:
    from task_chain.exceptions import TaskExecutionError
    from task_chain.interfaces import Task
    from task_chain.progress import ProgressStats


class LoggingNotifier(Notifier):
    """Стандартный приемник: одна читаемая строка на каждое событие.

    Используется TaskSequence, если не передан другой приемник
    и не включен режим silent. Сообщения пишутся через get_logger(),
    для вывода в консоль достаточно вызвать setup_logging().

    Пример вывода:
        [task-chain] core: Starting sequence
        [task-chain] core: --progress: 50%
        [task-chain] core: Sequence completed
    """

    def __init__(self) -> None:
        """Инициализирует приемник."""
        self._logger = get_logger()

    def on_start(self) -> None:
        self._logger.info("Starting sequence")

    def on_complete(self) -> None:
        self._logger.info("Sequence completed")

    def on_progress(self, stats: ProgressStats, paused: bool) -> None:
        self._logger.info(
            f"--progress: {stats.percent_complete}%",
            extra={"completed": stats.completed, "remaining": stats.remaining},
        )
        if paused:
            self._logger.info(
                f"Sequence paused | Completed: {stats.completed} "
                f":: Remaining: {stats.remaining}"
            )

    def on_pause(self) -> None:
        self._logger.info("Pausing after current operation completes")

    def on_resume(self, stats: ProgressStats) -> None:
        self._logger.info(
            f"Sequence resuming | Completed: {stats.completed} "
            f":: Remaining: {stats.remaining}"
        )

    def on_cancel(self) -> None:
        self._logger.info("Cancelling sequence...")

    def on_error(self, error: TaskExecutionError, task: Task) -> None:
        """Пишет ошибку задачи с уровнем ERROR."""
        get_logger(task.name).error(f"Error in sequence: {error.message}")
