"""Narration engine interface.

An engine speaks a text slice and reports back asynchronously: zero or more
progress callbacks with a character offset into the slice, then a finished
callback. Control calls are requests; their effects show up in later
callbacks, never synchronously.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable

from playstream.core.models import NarrationRequest, Voice

ProgressCallback = Callable[[int], None]
FinishedCallback = Callable[[], None]


@dataclass(frozen=True)
class NarrationHandle:
    """Identifies one narration request issued to an engine."""

    id: int
    request: NarrationRequest


class NarrationEngine(ABC):
    # False when the engine also signals "finished" for canceled requests.
    completion_signal_reliable: bool = True
    supports_pause: bool = True

    @abstractmethod
    def speak(
        self,
        request: NarrationRequest,
        on_progress: ProgressCallback,
        on_finished: FinishedCallback,
    ) -> NarrationHandle:
        """Queue a narration request and return its handle."""

    @abstractmethod
    def cancel(self, handle: NarrationHandle) -> None:
        """Ask the engine to abandon a request."""

    def pause(self, handle: NarrationHandle) -> None:
        """Ask the engine to suspend output of a request."""
        raise NotImplementedError(f"{type(self).__name__} does not support pause")

    def resume(self, handle: NarrationHandle) -> None:
        """Ask the engine to continue a suspended request."""
        raise NotImplementedError(f"{type(self).__name__} does not support resume")

    @abstractmethod
    def voices(self) -> list[Voice]:
        """Return the engine's voice catalog."""

    def tick(self) -> None:
        """Deliver pending callbacks. Hosts call this from their event loop."""

    def close(self) -> None:
        """Release engine resources."""
