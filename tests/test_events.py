"""Тесты для EventChannel."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from task_chain.events import Event, EventChannel


class TestEvent:
    """Тесты для Event enum."""

    def test_event_names(self) -> None:
        """Тест проверяет имена всех восьми событий."""
        assert [event.value for event in Event] == [
            "status-change",
            "start",
            "progress",
            "complete",
            "pause",
            "resume",
            "cancel",
            "error",
        ]


class TestEventChannel:
    """Тесты для EventChannel."""

    def test_all_events_registered(self) -> None:
        """Тест: у каждого события есть пустой список подписчиков."""
        channel = EventChannel()
        for event in Event:
            assert channel.listeners(event) == []

    def test_emit_in_insertion_order(self) -> None:
        """Тест вызова подписчиков в порядке добавления."""
        channel = EventChannel()
        received: list[tuple[str, Any]] = []
        channel.add_listener("progress", lambda data: received.append(("first", data)))
        channel.add_listener(Event.PROGRESS, lambda data: received.append(("second", data)))

        channel.emit(Event.PROGRESS, 42)

        assert received == [("first", 42), ("second", 42)]

    def test_emit_without_data(self) -> None:
        """Тест: подписчик получает None для события без данных."""
        channel = EventChannel()
        received: list[Any] = []
        channel.add_listener("start", received.append)

        channel.emit(Event.START)

        assert received == [None]

    def test_duplicates_allowed(self) -> None:
        """Тест повторной подписки одного callback."""
        channel = EventChannel()
        received: list[Any] = []
        channel.add_listener("complete", received.append)
        channel.add_listener("complete", received.append)

        channel.emit(Event.COMPLETE)

        assert received == [None, None]

    def test_remove_first_occurrence(self) -> None:
        """Тест удаления только первого вхождения callback."""
        channel = EventChannel()
        received: list[Any] = []
        channel.add_listener("cancel", received.append)
        channel.add_listener("cancel", received.append)

        channel.remove_listener("cancel", received.append)
        channel.emit(Event.CANCEL)

        assert received == [None]

    def test_remove_missing_listener(self) -> None:
        """Тест: удаление неподписанного callback ничего не делает."""
        channel = EventChannel()
        channel.remove_listener("error", print)
        assert channel.listeners("error") == []

    def test_clear(self) -> None:
        """Тест удаления всех подписчиков."""
        channel = EventChannel()
        for event in Event:
            channel.add_listener(event, print)

        channel.clear()

        for event in Event:
            assert channel.listeners(event) == []

    def test_unknown_event(self) -> None:
        """Тест ошибки при неизвестном имени события."""
        channel = EventChannel()
        with pytest.raises(ValueError):
            channel.add_listener("finished", print)

    def test_not_callable_listener(self) -> None:
        """Тест ошибки при невызываемом подписчике."""
        channel = EventChannel()
        with pytest.raises(TypeError, match="must be callable"):
            channel.add_listener("start", None)  # type: ignore[arg-type]

    def test_listeners_returns_copy(self) -> None:
        """Тест: listeners() возвращает копию списка."""
        channel = EventChannel()
        channel.listeners("start").append(print)
        assert channel.listeners("start") == []

    def test_failing_listener_does_not_stop_others(self, caplog) -> None:
        """Тест: исключение подписчика логируется, остальные вызываются."""
        channel = EventChannel()
        received: list[Any] = []

        def broken(data: Any) -> None:
            raise RuntimeError("listener failed")

        channel.add_listener("progress", broken)
        channel.add_listener("progress", received.append)

        with caplog.at_level(logging.ERROR, logger="task_chain"):
            channel.emit(Event.PROGRESS, 1)

        assert received == [1]
        assert "Listener for 'progress' event failed" in caplog.text

    def test_listener_removed_during_emit(self) -> None:
        """Тест отписки подписчика во время вызова."""
        channel = EventChannel()
        received: list[str] = []

        def once(data: Any) -> None:
            received.append("once")
            channel.remove_listener("start", once)

        channel.add_listener("start", once)
        channel.add_listener("start", lambda data: received.append("always"))

        channel.emit(Event.START)
        channel.emit(Event.START)

        assert received == ["once", "always", "always"]
