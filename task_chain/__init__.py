"""
Task Chain - in-process sequential task runner with pause, resume and cancel.

Выполняет цепочку отложенных операций (вызываемый объект + аргументы)
строго по одной в порядке добавления, публикует события жизненного
цикла и поддерживает две политики выполнения: передачу результата
предыдущей задачи в следующую и отмену последовательности при ошибке.

Основные компоненты:
    - TaskSequence: Последовательность задач и цикл их выполнения
    - TaskChain: Упорядоченная цепочка ожидающих задач
    - Task: Отложенная единица работы
    - SequenceConfig: Конфигурация последовательности
    - EventChannel, Event: Подписка на события
    - Notifier: Интерфейс приемника уведомлений (реализации в task_chain.notifiers)

Пример использования:
    >>> import asyncio
    >>> from task_chain import TaskSequence
    >>>
    >>> async def main():
    ...     sequence = TaskSequence({"silent": True})
    ...     sequence.add_event_listener("progress", lambda s: print(s.percent_complete))
    ...     handles = sequence.add([(print, ["one"]), (print, ["two"])])
    ...     await asyncio.gather(*handles)
    >>>
    >>> asyncio.run(main())
"""

__version__ = "0.1.0"
from task_chain.config import SequenceConfig
from task_chain.core import TaskChain, TaskSequence
from task_chain.events import Event, EventChannel
from task_chain.exceptions import (
    ConfigurationError,
    EmptyChainError,
    OperationOutOfState,
    SequenceError,
    TaskExecutionError,
)
from task_chain.interfaces import Notifier, Task, TaskSpec
from task_chain.logging import get_logger, setup_logging
from task_chain.progress import ProgressStats, SequenceStatus, TaskStatus

__all__ = [
    "TaskSequence",
    "TaskChain",
    "Task",
    "TaskSpec",
    "SequenceConfig",
    "Event",
    "EventChannel",
    "Notifier",
    "ProgressStats",
    "SequenceStatus",
    "TaskStatus",
    "SequenceError",
    "ConfigurationError",
    "EmptyChainError",
    "OperationOutOfState",
    "TaskExecutionError",
    "get_logger",
    "setup_logging",
]

# Приемники уведомлений импортируются напрямую из task_chain.notifiers
# Например: from task_chain.notifiers import MemoryNotifier
