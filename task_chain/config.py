"""Конфигурация последовательности задач."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from task_chain.exceptions import ConfigurationError


@dataclass(frozen=True)
class SequenceConfig:
    """Конфигурация TaskSequence, фиксируется при создании.

    Attributes:
        auto_start: Запускать выполнение при добавлении первой задачи.
            Если False, выполнение начинается только после вызова start()
        cancel_on_error: Ошибка задачи отменяет оставшуюся часть
            последовательности. Если False, ошибка передается в событие
            error, а выполнение продолжается со следующей задачи
        pass_previous_result: Результат предыдущей задачи добавляется
            последним аргументом следующей задачи
        silent: Отключает стандартные сообщения о событиях
            (LoggingNotifier заменяется на NullNotifier)
        strict: pause/resume/start в неподходящем состоянии выбрасывают
            OperationOutOfState вместо предупреждения в лог
    """

    auto_start: bool = True
    cancel_on_error: bool = False
    pass_previous_result: bool = False
    silent: bool = False
    strict: bool = False

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> SequenceConfig:
        """Создает конфигурацию из словаря опций.

        Отсутствующие ключи получают значения по умолчанию.

        Args:
            options: Словарь опций (имя поля -> значение)

        Returns:
            SequenceConfig с указанными опциями

        Raises:
            ConfigurationError: Если словарь содержит неизвестные ключи
                или значения не являются bool

        Пример:
            >>> config = SequenceConfig.from_mapping({"auto_start": False})
            >>> config.auto_start
            False
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration option(s): {', '.join(unknown)}"
            )

        for key, value in options.items():
            if not isinstance(value, bool):
                raise ConfigurationError(
                    f"Configuration option '{key}' must be bool, "
                    f"got {type(value).__name__}"
                )

        return cls(**options)
