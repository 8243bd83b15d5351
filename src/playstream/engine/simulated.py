"""Deterministic narration engine driven by a clock.

Emits one progress signal per word of the slice at a fixed interval derived
from the speaking speed and rate, then a finished signal. Nothing is audible;
it stands in for a speech engine in tests and dry runs, and can reproduce
engines that signal "finished" for every canceled request.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from typing import Callable

from playstream.core.models import NarrationRequest, Voice
from playstream.engine.base import (
    FinishedCallback,
    NarrationEngine,
    NarrationHandle,
    ProgressCallback,
)

_WORD_RE = re.compile(r"\S+")

DEFAULT_VOICES = [
    Voice(id="sim-en-us", name="Simulated Narrator (US)", language="en-US", local=True),
    Voice(id="sim-en-gb", name="Simulated Narrator (UK)", language="en-GB", local=True),
    Voice(id="sim-en-us-cloud", name="Simulated Cloud (US)", language="en-US", local=False),
]


@dataclass
class _Utterance:
    handle: NarrationHandle
    on_progress: ProgressCallback
    on_finished: FinishedCallback
    offsets: list[int]
    interval: float
    started_at: float
    emitted: int = 0
    paused_at: float | None = None

    @property
    def duration(self) -> float:
        return len(self.offsets) * self.interval


class SimulatedEngine(NarrationEngine):
    supports_pause = True

    def __init__(
        self,
        words_per_minute: int = 180,
        spurious_finish_on_cancel: bool = False,
        clock: Callable[[], float] = time.monotonic,
        voices: list[Voice] | None = None,
    ) -> None:
        if words_per_minute <= 0:
            raise ValueError(f"words_per_minute must be positive, got {words_per_minute}")
        self.words_per_minute = words_per_minute
        self.spurious_finish_on_cancel = spurious_finish_on_cancel
        self.completion_signal_reliable = not spurious_finish_on_cancel
        self._clock = clock
        self._voices = list(DEFAULT_VOICES if voices is None else voices)
        self._utterances: dict[int, _Utterance] = {}
        self._pending_finished: list[FinishedCallback] = []
        self._next_id = 1

    @property
    def busy(self) -> bool:
        """True while any request or queued signal is outstanding."""
        return bool(self._utterances or self._pending_finished)

    def speak(
        self,
        request: NarrationRequest,
        on_progress: ProgressCallback,
        on_finished: FinishedCallback,
    ) -> NarrationHandle:
        handle = NarrationHandle(id=self._next_id, request=request)
        self._next_id += 1
        self._utterances[handle.id] = _Utterance(
            handle=handle,
            on_progress=on_progress,
            on_finished=on_finished,
            offsets=[m.start() for m in _WORD_RE.finditer(request.text)],
            interval=60.0 / (self.words_per_minute * request.rate),
            started_at=self._clock(),
        )
        return handle

    def cancel(self, handle: NarrationHandle) -> None:
        utterance = self._utterances.pop(handle.id, None)
        if utterance is not None and self.spurious_finish_on_cancel:
            self._pending_finished.append(utterance.on_finished)

    def pause(self, handle: NarrationHandle) -> None:
        utterance = self._utterances.get(handle.id)
        if utterance is not None and utterance.paused_at is None:
            utterance.paused_at = self._clock()

    def resume(self, handle: NarrationHandle) -> None:
        utterance = self._utterances.get(handle.id)
        if utterance is not None and utterance.paused_at is not None:
            utterance.started_at += self._clock() - utterance.paused_at
            utterance.paused_at = None

    def voices(self) -> list[Voice]:
        return list(self._voices)

    def tick(self) -> None:
        now = self._clock()

        pending, self._pending_finished = self._pending_finished, []
        for on_finished in pending:
            on_finished()

        for utterance in list(self._utterances.values()):
            elapsed = now - utterance.started_at
            due = min(int(elapsed / utterance.interval) + 1, len(utterance.offsets))
            while utterance.emitted < due and self._running(utterance):
                offset = utterance.offsets[utterance.emitted]
                utterance.emitted += 1
                utterance.on_progress(offset)

            if (
                self._running(utterance)
                and utterance.emitted == len(utterance.offsets)
                and elapsed >= utterance.duration
            ):
                del self._utterances[utterance.handle.id]
                utterance.on_finished()

    def _running(self, utterance: _Utterance) -> bool:
        # Callbacks may cancel or pause the utterance mid-tick.
        current = self._utterances.get(utterance.handle.id)
        return current is utterance and utterance.paused_at is None
