"""Playback controller, the read-along state machine.

Owns the playback state, the highlighted position and the rate/voice
parameters, and mediates every transition between idle, playing and paused.
Engine callbacks and user actions all arrive on the host's single event
thread, so no locking is needed; the highlighted word and its sentence are
kept in one immutable record and swapped in a single assignment.
"""

from __future__ import annotations

from dataclasses import replace

from playstream.core.events import EventCallback, PlaybackEvent
from playstream.core.models import (
    NarrationRequest,
    PlaybackParameters,
    PlaybackSnapshot,
    PlaybackState,
    Position,
    Segmentation,
    SentenceRange,
    Session,
)
from playstream.core.segmenter import segment, sentence_range_of
from playstream.core.termination import CompletionVerdict, TerminationPolicy, make_policy
from playstream.core.tracker import advance
from playstream.engine.base import NarrationEngine, NarrationHandle
from playstream.utils.console import console


class PlaybackController:
    """Synchronizes word/sentence highlighting with an external narration engine.

    Args:
        engine: Narration engine the controller drives.
        parameters: Initial requested rate and voice.
        completion_signal_reliable: Override the engine's own capability flag
            when choosing the termination policy.
        on_event: Optional callback receiving a PlaybackEvent per transition.
        verbose: Print controller decisions to the console.
    """

    def __init__(
        self,
        engine: NarrationEngine,
        parameters: PlaybackParameters | None = None,
        *,
        completion_signal_reliable: bool | None = None,
        on_event: EventCallback | None = None,
        verbose: bool = False,
    ) -> None:
        self._engine = engine
        self._requested = parameters or PlaybackParameters()
        self._active: PlaybackParameters | None = None

        if completion_signal_reliable is None:
            completion_signal_reliable = engine.completion_signal_reliable
        self._policy: TerminationPolicy = make_policy(completion_signal_reliable)

        self._on_event = on_event
        self._verbose = verbose

        self._state = PlaybackState.IDLE
        self._session: Session | None = None
        self._position = Position()
        self._handle: NarrationHandle | None = None
        self._request_id = 0  # 0 while no request is in flight
        self._next_request_id = 1
        self._slice_start = 0

    # -- read-only surface ------------------------------------------------

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def current_word_index(self) -> int:
        return self._position.word_index

    @property
    def current_sentence_range(self) -> SentenceRange | None:
        return self._position.sentence

    @property
    def segmentation(self) -> Segmentation:
        """Segmentation of the running session, empty when idle."""
        return self._session.segmentation if self._session else Segmentation()

    @property
    def text(self) -> str:
        """Text snapshot taken when the session started."""
        return self._session.text if self._session else ""

    @property
    def requested(self) -> PlaybackParameters:
        return self._requested

    @property
    def active(self) -> PlaybackParameters | None:
        """Parameters the in-flight narration request was issued with."""
        return self._active

    @property
    def policy(self) -> TerminationPolicy:
        return self._policy

    def snapshot(self) -> PlaybackSnapshot:
        """Capture state, position and segmentation for rendering."""
        position = self._position
        return PlaybackSnapshot(
            state=self._state,
            word_index=position.word_index,
            sentence=position.sentence,
            segmentation=self.segmentation,
            text=self.text,
        )

    # -- user actions -----------------------------------------------------

    def start(self, text: str, from_word_index: int = 0) -> bool:
        """Start a fresh session reading ``text`` from ``from_word_index``.

        Returns False without changing anything when a session is already
        running or the text holds no words.

        Raises:
            IndexError: If from_word_index is outside the text's words.
        """
        if self._state is not PlaybackState.IDLE:
            self._log("Start ignored, a session is already running")
            return False

        segmentation = segment(text)
        if not segmentation:
            self._log("Start ignored, no words to read")
            return False
        if not 0 <= from_word_index < len(segmentation):
            raise IndexError(
                f"Start index {from_word_index} out of range for {len(segmentation)} words"
            )

        self._policy.reset()
        self._session = Session(text=text, segmentation=segmentation)
        self._issue(from_word_index)
        self._log(f"Session started: {len(segmentation)} words, from word {from_word_index}")
        self._emit("start", f"Reading from word {from_word_index}", self._request_data())
        return True

    def pause(self) -> bool:
        """Suspend narration. No-op unless playing."""
        if self._state is not PlaybackState.PLAYING:
            return False

        if self._engine.supports_pause:
            self._engine.pause(self._handle)
        else:
            # Resume will restart from the current word.
            self._cancel_active()
        self._state = PlaybackState.PAUSED
        self._emit("pause", "Paused")
        return True

    def resume(self) -> bool:
        """Continue narration, restarting it if rate or voice changed while paused.

        No-op unless paused.
        """
        if self._state is not PlaybackState.PAUSED:
            return False

        if self._handle is not None and self._active == self._requested:
            self._engine.resume(self._handle)
            self._state = PlaybackState.PLAYING
            self._emit("resume", "Resumed")
        else:
            self._restart("Resumed from the current word")
        return True

    def stop(self) -> bool:
        """End the session and clear the highlight. No-op when idle."""
        if self._state is PlaybackState.IDLE:
            return False

        if self._handle is not None:
            self._engine.cancel(self._handle)
            self._policy.arm_stop()
        self._clear()
        self._log("Stopped")
        self._emit("stop", "Stopped")
        return True

    def set_parameters(self, rate: float | None = None, voice: str | None = None) -> bool:
        """Change the requested rate and/or voice.

        While playing, one restart from the current word carries every changed
        parameter. While paused the change is applied on resume; while idle it
        applies to the next start. Returns True if anything changed.

        Raises:
            ValueError: If rate is not positive.
        """
        updated = replace(
            self._requested,
            rate=self._requested.rate if rate is None else rate,
            voice=self._requested.voice if voice is None else voice,
        )
        if updated == self._requested:
            return False

        self._requested = updated
        if self._state is PlaybackState.PLAYING and self._active != updated:
            self._restart("Parameters changed")
        return True

    def set_rate(self, rate: float) -> bool:
        return self.set_parameters(rate=rate)

    def set_voice(self, voice: str) -> bool:
        return self.set_parameters(voice=voice)

    # -- engine callbacks -------------------------------------------------

    def _on_progress(self, request_id: int, offset: int) -> None:
        if request_id != self._request_id or self._session is None:
            return
        segmentation = self._session.segmentation
        index = advance(offset, segmentation, self._slice_start)
        self._position = Position(index, sentence_range_of(index, segmentation))
        self._emit("progress", segmentation[index].word)

    def _on_finished(self, request_id: int) -> None:
        if request_id != self._request_id:
            if self._policy.stop_pending:
                # The stopped request reporting in; consume the stop flag.
                verdict = self._policy.classify(-1, Segmentation())
                self._log(f"Completion of stopped request {request_id} ({verdict.value})")
            else:
                self._log(f"Ignored spurious completion of canceled request {request_id}")
                if self._session is not None:
                    self._emit("ignored", "Spurious completion ignored")
            return

        verdict = self._policy.classify(self._position.word_index, self._session.segmentation)
        if verdict is CompletionVerdict.SPURIOUS:
            self._log(
                f"Ignored spurious completion at word {self._position.word_index}"
                f" of {self._session.segmentation.last_index}"
            )
            self._emit("ignored", "Spurious completion ignored")
            return

        self._handle = None
        self._clear()
        if verdict is CompletionVerdict.COMPLETED:
            self._log("Finished reading")
            self._emit("finish", "Finished")
        else:
            self._emit("stop", "Stopped")

    # -- internals --------------------------------------------------------

    def _issue(self, from_index: int) -> None:
        """Cancel any in-flight request and narrate from ``from_index``."""
        self._cancel_active()

        segmentation = self._session.segmentation
        token = segmentation[from_index]
        request = NarrationRequest(
            text=self._session.text[token.start :],
            rate=self._requested.rate,
            voice=self._requested.voice,
        )
        self._slice_start = from_index
        self._position = Position(from_index, sentence_range_of(from_index, segmentation))
        self._active = self._requested
        self._state = PlaybackState.PLAYING
        request_id = self._next_request_id
        self._next_request_id += 1
        self._request_id = request_id
        self._handle = self._engine.speak(
            request,
            lambda offset: self._on_progress(request_id, offset),
            lambda: self._on_finished(request_id),
        )

    def _restart(self, message: str) -> None:
        index = self._position.word_index
        self._issue(index)
        self._log(
            f"Restarted at word {index} (rate {self._active.rate}, voice {self._active.voice})"
        )
        self._emit("restart", message, self._request_data())

    def _cancel_active(self) -> None:
        if self._handle is not None:
            self._engine.cancel(self._handle)
            self._handle = None
        self._request_id = 0

    def _clear(self) -> None:
        self._state = PlaybackState.IDLE
        self._position = Position()
        self._session = None
        self._handle = None
        self._request_id = 0
        self._active = None
        self._slice_start = 0

    def _request_data(self) -> dict:
        return {
            "rate": self._active.rate,
            "voice": self._active.voice,
            "offset": self.segmentation[self._slice_start].start,
        }

    def _emit(self, kind: str, message: str, data: dict | None = None) -> None:
        if self._on_event:
            self._on_event(
                PlaybackEvent(
                    kind=kind,
                    state=self._state,
                    word_index=self._position.word_index,
                    message=message,
                    data=data,
                )
            )

    def _log(self, message: str) -> None:
        if self._verbose:
            console.print(f"[dim]{message}[/dim]")
