"""Тесты для моделей состояния и прогресса."""

from __future__ import annotations

import pytest

from task_chain.progress import (
    ProgressStats,
    SequenceStatus,
    TaskStatus,
    calc_percent,
)


class TestTaskStatus:
    """Тесты для TaskStatus enum."""

    def test_task_status_values(self) -> None:
        """Тест проверяет, что все значения TaskStatus определены."""
        assert TaskStatus.PENDING.value == "pending"
        assert TaskStatus.IN_PROGRESS.value == "in_progress"
        assert TaskStatus.COMPLETED.value == "completed"
        assert TaskStatus.FAILED.value == "failed"
        assert TaskStatus.CANCELLED.value == "cancelled"


class TestSequenceStatus:
    """Тесты для SequenceStatus enum."""

    def test_sequence_status_values(self) -> None:
        """Тест проверяет строковые значения статусов."""
        assert {status.value for status in SequenceStatus} == {
            "STOPPED",
            "READY",
            "RUNNING",
            "PAUSED",
        }


class TestCalcPercent:
    """Тесты для calc_percent."""

    @pytest.mark.parametrize(
        ("completed", "length", "expected"),
        [
            (1, 3, 33),
            (2, 3, 67),
            (3, 3, 100),
            (1, 8, 13),
            (0, 5, 0),
        ],
    )
    def test_rounding(self, completed: int, length: int, expected: int) -> None:
        """Тест округления половины вверх."""
        assert calc_percent(completed, length) == expected

    def test_empty_sequence(self) -> None:
        """Тест процента для пустой последовательности."""
        assert calc_percent(0, 0) == 0


class TestProgressStats:
    """Тесты для ProgressStats dataclass."""

    def test_defaults(self) -> None:
        """Тест значений по умолчанию."""
        stats = ProgressStats()
        assert stats.remaining == 0
        assert stats.completed == 0
        assert stats.length == 0
        assert stats.percent_complete == 0

    def test_from_counters(self) -> None:
        """Тест создания снимка по счетчикам."""
        stats = ProgressStats.from_counters(remaining=1, completed=2, length=3)
        assert stats == ProgressStats(
            remaining=1, completed=2, length=3, percent_complete=67
        )

    def test_negative_remaining(self) -> None:
        """Тест валидации: remaining не может быть отрицательным."""
        with pytest.raises(ValueError, match="remaining cannot be negative"):
            ProgressStats(remaining=-1)

    def test_negative_completed(self) -> None:
        """Тест валидации: completed не может быть отрицательным."""
        with pytest.raises(ValueError, match="completed cannot be negative"):
            ProgressStats(completed=-1)

    def test_counters_exceed_length(self) -> None:
        """Тест валидации: remaining + completed не больше length."""
        with pytest.raises(ValueError, match="cannot be greater than length"):
            ProgressStats(remaining=2, completed=2, length=3)
