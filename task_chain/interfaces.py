"""Задача последовательности и интерфейс приемника уведомлений."""

from __future__ import annotations

import asyncio
import inspect
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Mapping, Sequence, Union

from task_chain.exceptions import ConfigurationError
from task_chain.logging import get_logger
from task_chain.progress import TaskStatus

if TYPE_CHECKING:
    from task_chain.exceptions import TaskExecutionError
    from task_chain.progress import ProgressStats

# Допустимые формы описания задачи при добавлении в последовательность
TaskSpec = Union[
    "Task",
    Mapping[str, Any],
    Sequence[Any],
    Callable[..., Any],
]

_USAGE_HINT = (
    "To add a task: sequence.add({'func': func, 'args': [...]}) "
    "or sequence.add((func, [...]))"
)


class Task:
    """Отложенная единица работы: вызываемый объект и список аргументов.

    Задача не управляет порядком выполнения, порядок определяется
    позицией в цепочке TaskSequence. Handle задачи (asyncio.Future)
    привязывается при добавлении в последовательность и разрешается
    ровно один раз.

    Пример использования:
        >>> from task_chain import Task
        >>>
        >>> task = Task(pow, [2])
        >>> task.add_arg(10)
        >>> task.args
        [2, 10]

    Attributes:
        func: Вызываемый объект (синхронный или асинхронный)
        args: Список аргументов, может дополняться до выполнения
        name: Имя задачи для логов
        status: Текущий статус задачи
    """

    def __init__(
        self,
        func: Callable[..., Any] | None,
        args: Sequence[Any] | None = None,
        name: str | None = None,
    ) -> None:
        """Инициализирует задачу.

        Args:
            func: Вызываемый объект
            args: Начальный список аргументов (по умолчанию пустой)
            name: Имя задачи (по умолчанию __qualname__ вызываемого объекта)

        Raises:
            ConfigurationError: Если func отсутствует или не вызываемый,
                либо args не является списком или кортежем
        """
        if func is None:
            raise ConfigurationError(f"No callable found. {_USAGE_HINT}")
        if not callable(func):
            raise ConfigurationError(
                f"Task callable must be callable, got {type(func).__name__}"
            )
        if args is not None and not isinstance(args, (list, tuple)):
            raise ConfigurationError(
                f"Task args must be a list or tuple, got {type(args).__name__}"
            )

        self.func = func
        self.args: list[Any] = list(args) if args is not None else []
        self.name = name or getattr(func, "__qualname__", None) or repr(func)
        self.status = TaskStatus.PENDING
        self._handle: asyncio.Future[Any] | None = None

    @classmethod
    def from_config(cls, config: TaskSpec) -> Task:
        """Создает задачу из описания.

        Поддерживаемые формы:
            - Task: возвращается без изменений (если еще не была в очереди)
            - словарь {"func": callable, "args": [...], "name": "..."}
            - пара (callable, args) или (callable,)
            - вызываемый объект без аргументов

        Args:
            config: Описание задачи

        Returns:
            Новая задача

        Raises:
            ConfigurationError: Если описание не соответствует ни одной форме
        """
        if isinstance(config, Task):
            if config.handle is not None or config.status is not TaskStatus.PENDING:
                raise ConfigurationError(
                    f"Task '{config.name}' has already been queued"
                )
            return config

        if isinstance(config, Mapping):
            unknown = set(config) - {"func", "args", "name"}
            if unknown:
                raise ConfigurationError(
                    f"Unknown task option(s): {', '.join(sorted(unknown))}"
                )
            return cls(config.get("func"), config.get("args"), config.get("name"))

        if isinstance(config, (tuple, list)):
            if not 1 <= len(config) <= 2:
                raise ConfigurationError(
                    f"Task pair must be (func, args), got {len(config)} items"
                )
            func = config[0]
            args = config[1] if len(config) == 2 else None
            return cls(func, args)

        if callable(config):
            return cls(config)

        raise ConfigurationError(
            f"Unsupported task description: {type(config).__name__}. "
            f"{_USAGE_HINT}"
        )

    @property
    def handle(self) -> asyncio.Future[Any] | None:
        """Handle задачи, который разрешается результатом выполнения."""
        return self._handle

    def bind(self, handle: asyncio.Future[Any]) -> None:
        """Привязывает handle задачи.

        Args:
            handle: Future, который будет разрешен результатом задачи
        """
        self._handle = handle

    def add_arg(self, value: Any) -> None:
        """Добавляет аргумент в конец списка аргументов.

        Args:
            value: Значение аргумента
        """
        self.args.append(value)

    async def execute(self) -> Any:
        """Вызывает функцию задачи с текущим списком аргументов.

        Если вызов вернул awaitable, он ожидается. Исключение,
        выброшенное синхронной функцией, становится ошибкой корутины,
        поэтому у выполнения всегда ровно один исход.

        Returns:
            Результат вызова

        Raises:
            Exception: Любое исключение, выброшенное функцией задачи
        """
        self.status = TaskStatus.IN_PROGRESS
        result = self.func(*self.args)
        if inspect.isawaitable(result):
            result = await result
        return result

    def resolve(self, value: Any) -> None:
        """Разрешает handle задачи значением.

        Args:
            value: Результат выполнения задачи
        """
        if self._settle():
            self.status = TaskStatus.COMPLETED
            if self._handle is not None and not self._handle.done():
                self._handle.set_result(value)

    def reject(self, error: BaseException) -> None:
        """Отклоняет handle задачи исключением.

        Если функция задачи была отменена (asyncio.CancelledError),
        handle отменяется.

        Args:
            error: Исключение, выброшенное функцией задачи
        """
        if self._settle():
            self.status = TaskStatus.FAILED
            if self._handle is None or self._handle.done():
                return
            if isinstance(error, asyncio.CancelledError):
                self._handle.cancel()
            else:
                self._handle.set_exception(error)

    def discard(self) -> None:
        """Отменяет неразрешенный handle задачи."""
        if self._handle is not None and not self._handle.done():
            self._handle.cancel()
        if self.status in (TaskStatus.PENDING, TaskStatus.IN_PROGRESS):
            self.status = TaskStatus.CANCELLED

    def _settle(self) -> bool:
        """Проверяет, что задача еще не разрешена.

        Returns:
            True, если handle можно разрешить
        """
        settled = self.status in (
            TaskStatus.COMPLETED,
            TaskStatus.FAILED,
            TaskStatus.CANCELLED,
        )
        if settled:
            get_logger(self.name).debug(
                "Ignoring repeated settlement of task handle"
            )
        return not settled

    def __repr__(self) -> str:
        return f"Task(name={self.name!r}, args={self.args!r}, status={self.status.value})"


class Notifier(ABC):
    """Абстрактный приемник уведомлений о жизненном цикле последовательности.

    TaskSequence вызывает методы приемника на каждом переходе состояния.
    Реализации находятся в task_chain.notifiers.

    Пример использования:
        >>> from task_chain.interfaces import Notifier
        >>>
        >>> class PrintNotifier(Notifier):
        ...     def on_start(self) -> None:
        ...         print("started")
        ...     def on_complete(self) -> None:
        ...         print("done")
        ...     def on_progress(self, stats, paused) -> None:
        ...         print(f"{stats.percent_complete}%")
        ...     def on_pause(self) -> None: ...
        ...     def on_resume(self, stats) -> None: ...
        ...     def on_cancel(self) -> None: ...
        ...     def on_error(self, error, task) -> None:
        ...         print(f"{task.name} failed: {error.original_error}")
    """

    @abstractmethod
    def on_start(self) -> None:
        """Последовательность запущена."""
        ...

    @abstractmethod
    def on_complete(self) -> None:
        """Все задачи последовательности выполнены."""
        ...

    @abstractmethod
    def on_progress(self, stats: ProgressStats, paused: bool) -> None:
        """Задача завершена, прогресс обновлен.

        Args:
            stats: Снимок прогресса
            paused: Последовательность приостановлена
        """
        ...

    @abstractmethod
    def on_pause(self) -> None:
        """Запрошена пауза после текущей задачи."""
        ...

    @abstractmethod
    def on_resume(self, stats: ProgressStats) -> None:
        """Выполнение возобновлено.

        Args:
            stats: Снимок прогресса на момент возобновления
        """
        ...

    @abstractmethod
    def on_cancel(self) -> None:
        """Последовательность отменена."""
        ...

    @abstractmethod
    def on_error(self, error: TaskExecutionError, task: Task) -> None:
        """Задача завершилась с ошибкой.

        Args:
            error: Описание ошибки
            task: Задача, завершившаяся с ошибкой
        """
        ...
