"""Исключения для task-chain."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from task_chain.interfaces import Task
    from task_chain.progress import SequenceStatus


class SequenceError(Exception):
    """Базовое исключение для всех ошибок task-chain.

    Все исключения компонента наследуются от этого класса.
    """

    def __init__(self, message: str) -> None:
        """Инициализирует исключение.

        Args:
            message: Сообщение об ошибке
        """
        super().__init__(message)
        self.message = message


class ConfigurationError(SequenceError):
    """Исключение, возникающее при некорректной конфигурации.

    Выбрасывается когда:
    - Задача добавлена без вызываемого объекта
    - Аргументы задачи переданы не списком
    - Конфигурация последовательности содержит неизвестные ключи
    """


class EmptyChainError(SequenceError):
    """Исключение, возникающее при вызове start() на пустой цепочке."""


class OperationOutOfState(SequenceError):
    """Операция вызвана в неподходящем состоянии последовательности.

    По умолчанию не выбрасывается: последовательность пишет предупреждение
    в лог и игнорирует вызов. Выбрасывается только при strict=True.
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        status: SequenceStatus | None = None,
    ) -> None:
        """Инициализирует исключение.

        Args:
            message: Описание проблемы
            operation: Имя вызванной операции (pause, resume, start)
            status: Статус последовательности в момент вызова
        """
        super().__init__(message)
        self.operation = operation
        self.status = status


class TaskExecutionError(SequenceError):
    """Исключение, описывающее ошибку выполнения задачи.

    Передается подписчикам события error и в Notifier.on_error.
    Handle самой задачи отклоняется исходным исключением (original_error).
    """

    def __init__(
        self,
        message: str,
        task: Task | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        """Инициализирует исключение.

        Args:
            message: Описание ошибки выполнения
            task: Задача, при выполнении которой произошла ошибка
            original_error: Исключение, выброшенное вызываемым объектом задачи
        """
        super().__init__(message)
        self.task = task
        self.original_error = original_error
        self.__cause__ = original_error

    @property
    def task_name(self) -> str | None:
        """Имя задачи, при выполнении которой произошла ошибка."""
        return self.task.name if self.task is not None else None
