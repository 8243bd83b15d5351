"""Playback event system for streaming state changes to external consumers.

Provides a lightweight callback mechanism the playback controller emits
events through. Consumers (terminal views, loggers, tests) register a
callback to follow transitions without polling the controller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from playstream.core.models import PlaybackState


@dataclass
class PlaybackEvent:
    """An event emitted by the playback controller.

    Attributes:
        kind: Transition name (start, progress, pause, resume, restart, stop, finish, ignored).
        state: Playback state after the transition.
        word_index: Highlighted word index after the transition, -1 if none.
        message: Human-readable status message.
        data: Optional payload (e.g. rate and voice of a new narration request).
    """

    kind: str
    state: PlaybackState
    word_index: int
    message: str = ""
    data: dict | None = field(default=None)


EventCallback = Callable[[PlaybackEvent], None]
