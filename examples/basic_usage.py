"""
Базовый пример использования task-chain.

Демонстрирует простейший сценарий: несколько задач выполняются
строго по очереди, а подписчик события progress выводит прогресс.
"""

from __future__ import annotations

import asyncio

from task_chain import ProgressStats, TaskSequence, setup_logging


def greet(name: str) -> str:
    """Синхронная задача: формирует приветствие."""
    message = f"Hello, {name}!"
    print(message)
    return message


async def fetch(url: str) -> int:
    """Асинхронная задача: имитирует загрузку страницы."""
    await asyncio.sleep(0.1)
    print(f"Fetched {url}")
    return len(url)


async def main() -> None:
    """Основная функция для запуска примера."""
    print("=== Базовый пример использования task-chain ===\n")

    # Включаем вывод строк LoggingNotifier в консоль
    setup_logging()

    sequence = TaskSequence()

    def on_progress(stats: ProgressStats) -> None:
        print(f"  Выполнено {stats.completed} из {stats.length}")

    sequence.add_event_listener("progress", on_progress)

    # Задачи можно описывать кортежем, словарем или вызываемым объектом
    handles = sequence.add(
        [
            (greet, ["World"]),
            {"func": fetch, "args": ["https://example.com"]},
            (greet, ["task-chain"]),
        ]
    )

    results = await asyncio.gather(*handles)
    await sequence.join()

    print(f"\nРезультаты: {results}")
    print(f"Статус последовательности: {sequence.status.value}")


if __name__ == "__main__":
    asyncio.run(main())
