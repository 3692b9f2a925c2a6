"""Логирование для task-chain."""

from __future__ import annotations

import logging
from logging import LoggerAdapter

# Логгер для task-chain
_logger = logging.getLogger("task_chain")
_handler: logging.Handler | None = None


def get_logger(task_name: str | None = None) -> LoggerAdapter:
    """Создает логгер с префиксом для task-chain.

    Args:
        task_name: Имя задачи (опционально)

    Returns:
        LoggerAdapter с префиксом [task-chain] и именем задачи

    Пример использования:
        >>> logger = get_logger("fetch_page")
        >>> logger.info("Task started")
        # Выведет: [task-chain] fetch_page: Task started
    """
    return logging.LoggerAdapter(_logger, {"task": task_name or "core"})


def setup_logging(level: int = logging.INFO) -> None:
    """Настраивает логирование для task-chain.

    Args:
        level: Уровень логирования (по умолчанию INFO)

    Пример использования:
        >>> from task_chain.logging import setup_logging
        >>> import logging
        >>> setup_logging(logging.DEBUG)
    """
    global _handler

    # Повторный вызов только меняет уровень, второй handler не добавляется
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(
            logging.Formatter("[task-chain] %(task)s: %(message)s", style="%")
        )
        _logger.addHandler(_handler)
    _logger.setLevel(level)
    _logger.propagate = False
