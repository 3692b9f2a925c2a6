"""Ядро task_chain: TaskChain и TaskSequence."""

from __future__ import annotations

import asyncio
from collections import deque
from typing import Any, Iterator, Mapping, overload

from task_chain.config import SequenceConfig
from task_chain.events import Event, EventChannel, Listener
from task_chain.exceptions import (
    ConfigurationError,
    EmptyChainError,
    OperationOutOfState,
    TaskExecutionError,
)
from task_chain.interfaces import Notifier, Task, TaskSpec
from task_chain.logging import get_logger
from task_chain.notifiers import LoggingNotifier, NullNotifier
from task_chain.progress import ProgressStats, SequenceStatus

# Маркер "предыдущей задачи еще не было" для pass_previous_result
_NOTHING = object()


class TaskChain:
    """Упорядоченная цепочка ожидающих задач.

    Задачи добавляются только в хвост, голова цепочки - задача,
    которая выполняется сейчас или будет выполнена следующей.
    Выполненные задачи удаляются из цепочки при продвижении головы.

    Пример использования:
        >>> chain = TaskChain()
        >>> chain.append(Task(print, ["a"]))
        >>> chain.append(Task(print, ["b"]))
        >>> chain.head.args
        ['a']
        >>> chain.advance().args
        ['b']
    """

    def __init__(self) -> None:
        self._tasks: deque[Task] = deque()

    @property
    def head(self) -> Task | None:
        """Задача в голове цепочки."""
        return self._tasks[0] if self._tasks else None

    @property
    def tail(self) -> Task | None:
        """Последняя добавленная задача."""
        return self._tasks[-1] if self._tasks else None

    def append(self, task: Task) -> None:
        """Связывает задачу с хвостом цепочки.

        Args:
            task: Новая задача
        """
        self._tasks.append(task)

    def advance(self) -> Task | None:
        """Удаляет голову цепочки.

        Returns:
            Следующая задача (новая голова) или None, если цепочка закончилась
        """
        if self._tasks:
            self._tasks.popleft()
        return self.head

    def drain(self) -> list[Task]:
        """Удаляет все задачи из цепочки.

        Returns:
            Удаленные задачи в порядке цепочки
        """
        tasks = list(self._tasks)
        self._tasks.clear()
        return tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))


class TaskSequence:
    """Последовательное выполнение цепочки отложенных задач.

    Задачи выполняются строго по одной в порядке добавления. Выполнение
    происходит в запущенном цикле событий asyncio: каждая задача ожидается
    в одной точке приостановки, поэтому в полете всегда не более одной
    задачи. Пауза и отмена действуют на границах задач: текущая задача
    всегда выполняется до конца.

    Пример использования:
        >>> import asyncio
        >>> from task_chain import TaskSequence, SequenceConfig
        >>>
        >>> async def main():
        ...     sequence = TaskSequence(SequenceConfig(pass_previous_result=True))
        ...     first = sequence.add((pow, [2, 3]))
        ...     second = sequence.add((lambda x, prev: x + prev, [1]))
        ...     print(await first, await second)  # 8 9
        ...     await sequence.join()
        >>>
        >>> asyncio.run(main())

    Attributes:
        config: Конфигурация последовательности
        events: Канал событий
        notifier: Приемник уведомлений
    """

    def __init__(
        self,
        config: SequenceConfig | Mapping[str, Any] | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        """Инициализирует последовательность.

        Args:
            config: Конфигурация или словарь опций (по умолчанию
                SequenceConfig())
            notifier: Приемник уведомлений. По умолчанию LoggingNotifier,
                при silent=True - NullNotifier

        Raises:
            ConfigurationError: Если словарь опций некорректен
        """
        if config is None:
            config = SequenceConfig()
        elif not isinstance(config, SequenceConfig):
            config = SequenceConfig.from_mapping(config)

        if notifier is None:
            notifier = NullNotifier() if config.silent else LoggingNotifier()

        self.config = config
        self.notifier = notifier
        self.events = EventChannel()

        self._chain = TaskChain()
        self._generation = 0
        self._runner: asyncio.Task[None] | None = None
        self._runner_generation = -1
        self._stopped = asyncio.Event()
        self._logger = get_logger()
        self._set_defaults()

    def _set_defaults(self) -> None:
        """Сбрасывает счетчики и флаги в начальное состояние."""
        self._length = 0
        self._remaining = 0
        self._completed = 0
        self._paused = False
        self._running = False
        self._carried: Any = _NOTHING
        self._stopped.set()

    # Состояние

    @property
    def status(self) -> SequenceStatus:
        """Текущий статус последовательности."""
        if self._paused:
            return SequenceStatus.PAUSED
        if self._running:
            return SequenceStatus.RUNNING
        if self._chain:
            return SequenceStatus.READY
        return SequenceStatus.STOPPED

    @property
    def length(self) -> int:
        """Общее количество задач в текущей последовательности."""
        return self._length

    @property
    def remaining(self) -> int:
        """Количество задач, ожидающих выполнения."""
        return self._remaining

    @property
    def completed(self) -> int:
        """Количество завершенных задач."""
        return self._completed

    @property
    def stats(self) -> ProgressStats:
        """Снимок текущего прогресса."""
        return ProgressStats.from_counters(
            self._remaining, self._completed, self._length
        )

    # Подписка на события

    def add_event_listener(self, event: Event | str, callback: Listener) -> None:
        """Подписывает callback на событие (см. EventChannel.add_listener)."""
        self.events.add_listener(event, callback)

    def remove_event_listener(
        self, event: Event | str, callback: Listener
    ) -> None:
        """Отписывает callback от события (см. EventChannel.remove_listener)."""
        self.events.remove_listener(event, callback)

    def clear_event_listeners(self) -> None:
        """Удаляет всех подписчиков."""
        self.events.clear()

    # Управление

    @overload
    def add(self, task: list[TaskSpec]) -> list[asyncio.Future[Any]]: ...

    @overload
    def add(self, task: TaskSpec) -> asyncio.Future[Any]: ...

    def add(
        self, task: TaskSpec | list[TaskSpec]
    ) -> asyncio.Future[Any] | list[asyncio.Future[Any]]:
        """Добавляет задачу или список задач в хвост цепочки.

        Задача описывается словарем {"func": ..., "args": [...]},
        кортежем (func, args), вызываемым объектом или экземпляром Task.
        Список на верхнем уровне всегда считается списком задач.

        Args:
            task: Описание задачи или список описаний

        Returns:
            Future для каждой задачи, который разрешается результатом
            задачи или отклоняется ее исключением. При отмене
            последовательности неразрешенные Future отменяются.

        Raises:
            ConfigurationError: Если описание задачи некорректно или один
                экземпляр Task встречается в списке дважды
            RuntimeError: Если нет запущенного цикла событий
        """
        if isinstance(task, list):
            tasks = [Task.from_config(item) for item in task]
        else:
            tasks = [Task.from_config(task)]

        seen: set[int] = set()
        for new_task in tasks:
            if id(new_task) in seen:
                raise ConfigurationError(
                    f"Task '{new_task.name}' appears more than once in the batch"
                )
            seen.add(id(new_task))

        loop = asyncio.get_running_loop()
        if not tasks:
            return []

        if self.status is SequenceStatus.STOPPED:
            self.events.emit(Event.STATUS_CHANGE, SequenceStatus.READY)

        handles = [self._link(new_task, loop) for new_task in tasks]
        return handles if isinstance(task, list) else handles[0]

    def _link(self, task: Task, loop: asyncio.AbstractEventLoop) -> asyncio.Future[Any]:
        """Привязывает handle к задаче и добавляет ее в хвост цепочки."""
        handle: asyncio.Future[Any] = loop.create_future()
        task.bind(handle)

        self._remaining += 1
        self._length += 1
        self._stopped.clear()

        was_empty = not self._chain
        self._chain.append(task)
        self._logger.debug(
            f"Task '{task.name}' added to sequence",
            extra={"length": self._length},
        )

        # Если цикл выполнения уже идет, он сам дойдет до новой задачи
        if (
            was_empty
            and self.config.auto_start
            and self.status is SequenceStatus.READY
        ):
            self.start()
        return handle

    def start(self) -> None:
        """Запускает выполнение с головы цепочки.

        Raises:
            EmptyChainError: Если цепочка пуста
            OperationOutOfState: Если последовательность уже выполняется
                или приостановлена (только при strict=True)
        """
        if not self._chain:
            raise EmptyChainError("start() called on empty sequence")

        status = self.status
        if status in (SequenceStatus.RUNNING, SequenceStatus.PAUSED):
            self._out_of_state(
                "start",
                f"Called start when sequence was {status.value.lower()}",
            )
            return

        loop = asyncio.get_running_loop()
        self._running = True
        if not self._runner_active():
            previous = self._runner
            if previous is not None and previous.done():
                previous = None
            self._runner = loop.create_task(
                self._run(self._generation, previous)
            )
            self._runner_generation = self._generation

        self._notify("on_start")
        self.events.emit(Event.START)
        self.events.emit(Event.STATUS_CHANGE, SequenceStatus.RUNNING)

    def pause(self) -> None:
        """Приостанавливает выполнение после текущей задачи.

        Raises:
            OperationOutOfState: Если последовательность не выполняется
                (только при strict=True)
        """
        if self.status is not SequenceStatus.RUNNING:
            self._out_of_state("pause", "Called pause when sequence wasn't running")
            return

        self._paused = True
        self._running = False
        self.events.emit(Event.PAUSE, self._chain.head)
        self.events.emit(Event.STATUS_CHANGE, SequenceStatus.PAUSED)
        self._notify("on_pause")

    def resume(self) -> None:
        """Возобновляет выполнение с головы цепочки.

        Raises:
            OperationOutOfState: Если последовательность не приостановлена
                (только при strict=True)
        """
        if self.status is not SequenceStatus.PAUSED:
            self._out_of_state("resume", "Called resume when sequence wasn't paused")
            return

        self._paused = False
        self.events.emit(Event.RESUME, self._chain.head)
        self._notify("on_resume", self.stats)
        self.start()

    def cancel(self) -> None:
        """Отменяет последовательность.

        Выполняемая задача не прерывается, но ее результат будет
        отброшен. Неразрешенные Future задач отменяются, цепочка
        и счетчики сбрасываются.
        """
        self.events.emit(Event.CANCEL)
        self.events.emit(Event.STATUS_CHANGE, SequenceStatus.STOPPED)
        self._notify("on_cancel")
        self._reset()

    def clear(self) -> None:
        """Сбрасывает последовательность и удаляет всех подписчиков."""
        self._reset()
        self.events.clear()

    async def join(self) -> None:
        """Ожидает возврата последовательности в состояние STOPPED.

        Завершается после выполнения последней задачи, отмены или clear().
        Приостановленная последовательность не считается остановленной.
        """
        await self._stopped.wait()

    # Выполнение

    def _runner_active(self) -> bool:
        """Проверяет, работает ли цикл выполнения текущего поколения."""
        return (
            self._runner is not None
            and not self._runner.done()
            and self._runner_generation == self._generation
        )

    def _reset(self) -> None:
        """Очищает цепочку, отменяет неразрешенные задачи и сбрасывает счетчики.

        Увеличивает номер поколения: цикл выполнения предыдущего
        поколения отбросит результат задачи, которую он ожидает.
        """
        self._generation += 1
        for task in self._chain.drain():
            task.discard()
        self._set_defaults()

    def _stale(self, generation: int) -> bool:
        """Проверяет, была ли последовательность отменена или сброшена."""
        return generation != self._generation

    async def _run(
        self, generation: int, previous: asyncio.Task[None] | None = None
    ) -> None:
        """Цикл выполнения задач одного поколения.

        Args:
            generation: Номер поколения, для которого запущен цикл
            previous: Цикл предыдущего поколения, который еще ожидает
                свою задачу. Новый цикл дожидается его завершения
        """
        try:
            if previous is not None:
                await asyncio.wait([previous])
            await self._drive(generation)
        except BaseException:
            # Цикл прерван снаружи: состояние текущего поколения сбрасывается
            if not self._stale(generation):
                self._logger.error(
                    "Execution loop stopped unexpectedly, resetting sequence"
                )
                self._reset()
            raise

    async def _drive(self, generation: int) -> None:
        """Выполняет задачи с головы цепочки, пока поколение актуально."""
        loop = asyncio.get_running_loop()
        while not self._stale(generation):
            task = self._chain.head
            if task is None:
                return

            if self.config.pass_previous_result and self._carried is not _NOTHING:
                task.add_arg(self._carried)

            logger = get_logger(task.name)
            logger.debug("Executing task", extra={"args": task.args})

            # Отдельная asyncio-задача: CancelledError из функции задачи
            # не отменяет сам цикл выполнения
            inner = loop.create_task(task.execute())
            try:
                await asyncio.wait([inner])
            except asyncio.CancelledError:
                inner.cancel()
                raise

            error: BaseException | None = None
            value: Any = None
            if inner.cancelled():
                error = asyncio.CancelledError(f"Task '{task.name}' was cancelled")
            elif inner.exception() is not None:
                error = inner.exception()
            else:
                value = inner.result()

            if self._stale(generation):
                logger.debug("Sequence was cancelled, discarding task result")
                return

            if error is not None:
                self._report_failure(task, error)
                if self._stale(generation):
                    return
                if self.config.cancel_on_error:
                    task.reject(error)
                    self.cancel()
                    return

            if not self._advance(task, value, error, generation):
                return

    def _report_failure(self, task: Task, error: BaseException) -> None:
        """Передает ошибку задачи в лог, событие error и приемник."""
        get_logger(task.name).error(
            f"Task execution failed: {error}", exc_info=error
        )
        execution_error = TaskExecutionError(
            f"Error executing task '{task.name}': {error}",
            task=task,
            original_error=error,
        )
        self.events.emit(Event.ERROR, execution_error)
        self._notify("on_error", execution_error, task)

    def _advance(
        self,
        task: Task,
        value: Any,
        error: BaseException | None,
        generation: int,
    ) -> bool:
        """Разрешает задачу, обновляет прогресс и переходит к следующей.

        Returns:
            True, если цикл должен выполнить следующую задачу
        """
        if error is not None:
            task.reject(error)
        else:
            task.resolve(value)

        self._remaining -= 1
        self._completed += 1
        self._chain.advance()

        stats = self.stats
        self.events.emit(Event.PROGRESS, stats)
        self._notify("on_progress", stats, self._paused)
        if self._stale(generation):
            return False

        # Подписчики progress могли добавить задачи в хвост цепочки
        if self._chain.head is None:
            self._reset()
            self.events.emit(Event.COMPLETE)
            self.events.emit(Event.STATUS_CHANGE, SequenceStatus.STOPPED)
            self._notify("on_complete")
            return False

        self._carried = value
        return not self._paused

    def _out_of_state(self, operation: str, message: str) -> None:
        """Обрабатывает вызов операции в неподходящем состоянии."""
        if self.config.strict:
            raise OperationOutOfState(
                message, operation=operation, status=self.status
            )
        self._logger.warning(
            f"Warning: {message}",
            extra={"operation": operation, "status": self.status.value},
        )

    def _notify(self, method: str, *args: Any) -> None:
        """Вызывает метод приемника уведомлений."""
        try:
            getattr(self.notifier, method)(*args)
        except Exception as e:
            self._logger.error(
                f"Notifier {method} failed: {e}", exc_info=True
            )
