"""Модели данных для отслеживания состояния и прогресса последовательности."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class TaskStatus(Enum):
    """Статус выполнения отдельной задачи.

    Attributes:
        PENDING: Задача ожидает выполнения
        IN_PROGRESS: Задача выполняется в данный момент
        COMPLETED: Задача завершена успешно
        FAILED: Задача завершена с ошибкой
        CANCELLED: Задача отменена вместе с последовательностью
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class SequenceStatus(Enum):
    """Статус последовательности задач.

    Attributes:
        STOPPED: Цепочка пуста (или последовательность отменена)
        READY: В цепочке есть задачи, выполнение не запущено
        RUNNING: Задачи выполняются
        PAUSED: Выполнение приостановлено на границе задач
    """

    STOPPED = "STOPPED"
    READY = "READY"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"


def calc_percent(completed: int, length: int) -> int:
    """Вычисляет процент выполнения с округлением половины вверх.

    Args:
        completed: Количество завершенных задач
        length: Общее количество задач в последовательности

    Returns:
        Процент выполнения (0..100). Для пустой последовательности 0.
    """
    if length <= 0:
        return 0
    return int(math.floor(completed / length * 100 + 0.5))


@dataclass
class ProgressStats:
    """Снимок прогресса последовательности.

    Передается подписчикам события progress.

    Attributes:
        remaining: Количество задач, ожидающих выполнения
        completed: Количество завершенных задач (успешно или с ошибкой)
        length: Общее количество задач в текущей последовательности
        percent_complete: Процент выполнения (0..100)
    """

    remaining: int = 0
    completed: int = 0
    length: int = 0
    percent_complete: int = 0

    def __post_init__(self) -> None:
        """Валидация данных после инициализации."""
        if self.remaining < 0:
            raise ValueError("remaining cannot be negative")
        if self.completed < 0:
            raise ValueError("completed cannot be negative")
        if self.remaining + self.completed > self.length:
            raise ValueError("remaining + completed cannot be greater than length")

    @classmethod
    def from_counters(
        cls, remaining: int, completed: int, length: int
    ) -> ProgressStats:
        """Создает снимок прогресса по счетчикам последовательности.

        Args:
            remaining: Количество оставшихся задач
            completed: Количество завершенных задач
            length: Общее количество задач

        Returns:
            ProgressStats с вычисленным процентом выполнения
        """
        return cls(
            remaining=remaining,
            completed=completed,
            length=length,
            percent_complete=calc_percent(completed, length),
        )
