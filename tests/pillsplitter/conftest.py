from __future__ import annotations

import random
from typing import Any

import pytest

from pillsplitter.core.ids import SequentialIds
from pillsplitter.infra.config import SplitterConfig


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000.0


class FakeCanvas:
    def __init__(self) -> None:
        self.handlers: dict[str, list] = {}

    def add_event_handler(self, handler, *types: str) -> None:
        for event_type in types:
            self.handlers.setdefault(event_type, []).append(handler)

    def remove_event_handler(self, handler, *types: str) -> None:
        for event_type in types:
            if handler in self.handlers.get(event_type, []):
                self.handlers[event_type].remove(handler)

    def emit(self, event_type: str, **payload: Any) -> None:
        event = {"event_type": event_type, **payload}
        for handler in list(self.handlers.get(event_type, [])):
            handler(event)

    def handler_count(self, event_type: str) -> int:
        return len(self.handlers.get(event_type, []))


@pytest.fixture
def config() -> SplitterConfig:
    return SplitterConfig(
        min_size_to_draw=20,
        min_size_to_split=30,
        adjust_gap=2,
        palette=("#ff0000", "#00ff00", "#0000ff"),
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def fake_canvas() -> FakeCanvas:
    return FakeCanvas()


@pytest.fixture
def fake_window() -> FakeCanvas:
    return FakeCanvas()
