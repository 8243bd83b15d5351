"""Shared test fixtures."""

from __future__ import annotations

import pytest

from playstream.core.models import NarrationRequest, Voice
from playstream.engine.base import (
    FinishedCallback,
    NarrationEngine,
    NarrationHandle,
    ProgressCallback,
)

SAMPLE_TEXT = "Hello world. This is a test!"


class FakeEngine(NarrationEngine):
    """Records every request and lets tests fire engine signals by hand."""

    def __init__(self, completion_signal_reliable: bool = True, supports_pause: bool = True):
        self.completion_signal_reliable = completion_signal_reliable
        self.supports_pause = supports_pause
        self.handles: list[NarrationHandle] = []
        self.calls: list[tuple[str, int]] = []
        self._callbacks: dict[int, tuple[ProgressCallback, FinishedCallback]] = {}

    @property
    def requests(self) -> list[NarrationRequest]:
        return [h.request for h in self.handles]

    @property
    def last_handle(self) -> NarrationHandle:
        return self.handles[-1]

    def speak(self, request, on_progress, on_finished) -> NarrationHandle:
        handle = NarrationHandle(id=len(self.handles) + 1, request=request)
        self.handles.append(handle)
        self._callbacks[handle.id] = (on_progress, on_finished)
        self.calls.append(("speak", handle.id))
        return handle

    def cancel(self, handle: NarrationHandle) -> None:
        self.calls.append(("cancel", handle.id))

    def pause(self, handle: NarrationHandle) -> None:
        self.calls.append(("pause", handle.id))

    def resume(self, handle: NarrationHandle) -> None:
        self.calls.append(("resume", handle.id))

    def voices(self) -> list[Voice]:
        return [Voice(id="fake", name="Fake Voice", language="en-US")]

    def progress(self, offset: int, handle: NarrationHandle | None = None) -> None:
        """Fire a progress signal for a request (the latest by default)."""
        handle = handle or self.last_handle
        self._callbacks[handle.id][0](offset)

    def finish(self, handle: NarrationHandle | None = None) -> None:
        """Fire a finished signal for a request (the latest by default)."""
        handle = handle or self.last_handle
        self._callbacks[handle.id][1]()


class FakeClock:
    """Manually advanced replacement for time.monotonic."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_TEXT


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def flaky_engine() -> FakeEngine:
    """Engine that also signals "finished" when a request is canceled."""
    return FakeEngine(completion_signal_reliable=False)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
