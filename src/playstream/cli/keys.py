"""Single-key playback controls for the read command."""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, TextIO

from playstream.core.config import ReaderConfig
from playstream.core.controller import PlaybackController
from playstream.core.models import PlaybackState, Voice

KEY_HELP = "space pause/resume, +/- rate, v next voice, q stop"

KeySource = Callable[[], Optional[str]]


class KeyControls:
    """Maps key presses to controller actions.

    Rate steps by ``reader.rate_step`` and stays within the configured
    bounds. The voice key cycles through ``voices`` in catalog order.
    """

    def __init__(
        self,
        controller: PlaybackController,
        reader: ReaderConfig,
        voices: list[Voice],
    ) -> None:
        self._controller = controller
        self._reader = reader
        self._voices = voices
        self.quit_requested = False

    def handle(self, key: str) -> str | None:
        """Apply one key press. Returns a status message, None for unbound keys."""
        if key == " ":
            return self._toggle_pause()
        if key in ("+", "="):
            return self._step_rate(1)
        if key in ("-", "_"):
            return self._step_rate(-1)
        if key in ("v", "V"):
            return self._next_voice()
        if key in ("q", "Q"):
            self.quit_requested = True
            self._controller.stop()
            return "Stopped"
        return None

    def _toggle_pause(self) -> str | None:
        if self._controller.state is PlaybackState.PLAYING:
            self._controller.pause()
            return "Paused"
        if self._controller.resume():
            return "Resumed"
        return None

    def _step_rate(self, direction: int) -> str:
        current = self._controller.requested.rate
        rate = round(current + direction * self._reader.rate_step, 2)
        if not self._reader.in_range(rate):
            return (
                f"Rate stays at {current}x"
                f" (limits {self._reader.min_rate}..{self._reader.max_rate})"
            )
        self._controller.set_rate(rate)
        return f"Rate {rate}x"

    def _next_voice(self) -> str:
        if not self._voices:
            return "No voices to switch between"
        ids = [voice.id for voice in self._voices]
        current = self._controller.requested.voice
        index = (ids.index(current) + 1) % len(ids) if current in ids else 0
        voice = self._voices[index]
        self._controller.set_voice(voice.id)
        return f"Voice {voice.name}"


@contextmanager
def key_reader(stream: TextIO | None = None) -> Iterator[KeySource]:
    """Yield a non-blocking reader of single key presses from a terminal.

    The terminal is put in cbreak mode for the duration and restored on exit.
    When the stream is not a terminal (pipes, test runners, Windows), the
    reader always returns None.
    """
    stream = stream or sys.stdin
    if sys.platform == "win32" or not stream.isatty():
        yield lambda: None
        return

    import select
    import termios
    import tty

    fd = stream.fileno()
    saved = termios.tcgetattr(fd)
    tty.setcbreak(fd)

    def read_key() -> str | None:
        ready, _, _ = select.select([fd], [], [], 0)
        if not ready:
            return None
        return os.read(fd, 1).decode(errors="ignore") or None

    try:
        yield read_key
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
