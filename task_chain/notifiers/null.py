"""Приемник уведомлений, который ничего не делает."""

from __future__ import annotations

from typing import TYPE_CHECKING

from task_chain.interfaces import Notifier

if TYPE_CHECKING:
    from task_chain.exceptions import TaskExecutionError
    from task_chain.interfaces import Task
    from task_chain.progress import ProgressStats


class NullNotifier(Notifier):
    """Приемник для режима silent=True: все уведомления игнорируются."""

    def on_start(self) -> None:
        pass

    def on_complete(self) -> None:
        pass

    def on_progress(self, stats: ProgressStats, paused: bool) -> None:
        pass

    def on_pause(self) -> None:
        pass

    def on_resume(self, stats: ProgressStats) -> None:
        pass

    def on_cancel(self) -> None:
        pass

    def on_error(self, error: TaskExecutionError, task: Task) -> None:
        pass
