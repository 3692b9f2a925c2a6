"""Приемники уведомлений о жизненном цикле последовательности."""

from __future__ import annotations

from task_chain.notifiers.log import LoggingNotifier
from task_chain.notifiers.memory import MemoryNotifier
from task_chain.notifiers.null import NullNotifier

__all__ = ["LoggingNotifier", "MemoryNotifier", "NullNotifier"]
