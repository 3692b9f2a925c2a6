"""
Пример конвейера с передачей результата и отменой при ошибке.

С pass_previous_result=True результат каждой задачи добавляется
последним аргументом следующей задачи. С cancel_on_error=True
первая ошибка отменяет оставшиеся задачи.
"""

from __future__ import annotations

import asyncio

from task_chain import SequenceConfig, TaskExecutionError, TaskSequence, setup_logging


def extract(source: str) -> list[str]:
    """Извлекает строки из источника."""
    return [line.strip() for line in source.splitlines() if line.strip()]


def transform(lines: list[str]) -> list[int]:
    """Преобразует строки в числа."""
    return [int(line) for line in lines]


async def load(numbers: list[int]) -> int:
    """Сохраняет числа и возвращает их сумму."""
    await asyncio.sleep(0.05)
    return sum(numbers)


async def run(source: str) -> None:
    sequence = TaskSequence(
        SequenceConfig(pass_previous_result=True, cancel_on_error=True)
    )

    def on_error(error: TaskExecutionError) -> None:
        print(f"  Ошибка в задаче '{error.task_name}': {error.original_error}")

    sequence.add_event_listener("error", on_error)

    handles = sequence.add([(extract, [source]), transform, load])
    await sequence.join()

    if handles[-1].cancelled():
        print("  Загрузка отменена")
    else:
        print(f"  Сумма: {handles[-1].result()}")


async def main() -> None:
    """Основная функция для запуска примера."""
    print("=== Пример конвейера ETL ===\n")
    setup_logging()

    print("Корректные данные:")
    await run("1\n2\n3\n")

    print("\nДанные с ошибкой:")
    await run("1\ntwo\n3\n")


if __name__ == "__main__":
    asyncio.run(main())
