"""
Пример паузы, возобновления и отмены последовательности.

Пауза действует на границе задач: текущая задача выполняется
до конца, следующая ждет вызова resume(). Отмена сбрасывает
цепочку, а Future невыполненных задач отменяются.
"""

from __future__ import annotations

import asyncio

from task_chain import SequenceStatus, TaskSequence, setup_logging


async def step(number: int) -> int:
    """Задача, которая выполняется 0.2 секунды."""
    await asyncio.sleep(0.2)
    print(f"  Шаг {number} выполнен")
    return number


async def main() -> None:
    """Основная функция для запуска примера."""
    print("=== Пример паузы и возобновления ===\n")
    setup_logging()

    sequence = TaskSequence()
    sequence.add_event_listener(
        "status-change", lambda status: print(f"  Статус: {status.value}")
    )

    handles = sequence.add([(step, [i]) for i in range(1, 6)])

    # Ставим на паузу во время выполнения первого шага
    await asyncio.sleep(0.1)
    sequence.pause()

    await handles[0]
    print(f"\nПосле паузы выполнено: {sequence.completed}, осталось: {sequence.remaining}")
    await asyncio.sleep(0.5)
    assert sequence.status is SequenceStatus.PAUSED

    sequence.resume()
    await handles[2]

    # Отменяем оставшиеся шаги
    sequence.cancel()
    await sequence.join()

    cancelled = [handle for handle in handles if handle.cancelled()]
    print(f"\nОтменено задач: {len(cancelled)}")


if __name__ == "__main__":
    asyncio.run(main())
