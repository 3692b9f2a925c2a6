"""
Пример создания кастомного Notifier.

Демонстрирует приемник уведомлений, который пишет историю
последовательности в файл JSON Lines.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from task_chain import Notifier, ProgressStats, Task, TaskExecutionError, TaskSequence


class JsonLinesNotifier(Notifier):
    """Кастомный приемник, записывающий уведомления в файл.

    Все приемники должны реализовать следующие методы:
    - on_start() -> None
    - on_complete() -> None
    - on_progress(stats: ProgressStats, paused: bool) -> None
    - on_pause() -> None
    - on_resume(stats: ProgressStats) -> None
    - on_cancel() -> None
    - on_error(error: TaskExecutionError, task: Task) -> None
    """

    def __init__(self, file_path: str = "sequence_events.jsonl") -> None:
        """Инициализирует приемник.

        Args:
            file_path: Путь к файлу истории
        """
        self.file_path = Path(file_path)

    def _write(self, event: str, **data: Any) -> None:
        with self.file_path.open("a", encoding="utf-8") as f:
            f.write(json.dumps({"event": event, **data}, ensure_ascii=False) + "\n")

    def on_start(self) -> None:
        self._write("start")

    def on_complete(self) -> None:
        self._write("complete")

    def on_progress(self, stats: ProgressStats, paused: bool) -> None:
        self._write("progress", percent=stats.percent_complete, paused=paused)

    def on_pause(self) -> None:
        self._write("pause")

    def on_resume(self, stats: ProgressStats) -> None:
        self._write("resume", completed=stats.completed)

    def on_cancel(self) -> None:
        self._write("cancel")

    def on_error(self, error: TaskExecutionError, task: Task) -> None:
        self._write("error", task=task.name, message=error.message)


def divide(a: float, b: float) -> float:
    return a / b


async def main() -> None:
    """Основная функция для запуска примера."""
    print("=== Пример кастомного Notifier ===\n")

    notifier = JsonLinesNotifier("example_events.jsonl")
    notifier.file_path.unlink(missing_ok=True)

    sequence = TaskSequence(notifier=notifier)
    handles = sequence.add([(divide, [1, 2]), (divide, [1, 0]), (divide, [3, 4])])
    await asyncio.gather(*handles, return_exceptions=True)
    await sequence.join()

    print(notifier.file_path.read_text(encoding="utf-8"))
    notifier.file_path.unlink()


if __name__ == "__main__":
    asyncio.run(main())
