"""System speech narration through pyttsx3.

Runs pyttsx3 with an external loop: the host calls ``tick()`` regularly,
which pumps the driver and delivers word and end-of-utterance callbacks on
the host's thread.
"""

from __future__ import annotations

from playstream.core.models import NarrationRequest, Voice
from playstream.engine.base import (
    FinishedCallback,
    NarrationEngine,
    NarrationHandle,
    ProgressCallback,
)


def _language_of(voice: object) -> str:
    """Best-effort language tag of a pyttsx3 voice (drivers disagree on the format)."""
    languages = getattr(voice, "languages", None) or []
    if not languages:
        return ""
    language = languages[0]
    if isinstance(language, bytes):
        # espeak prefixes the tag with a priority byte
        language = language.decode("utf-8", errors="ignore")
    return "".join(ch for ch in str(language) if ch.isprintable()).strip()


class Pyttsx3Engine(NarrationEngine):
    # Canceled utterances end with completed=False and are dropped, so
    # "finished" only reaches the controller at a real end of text.
    completion_signal_reliable = True
    supports_pause = False

    def __init__(self, words_per_minute: int = 180) -> None:
        try:
            import pyttsx3
        except ImportError:
            raise ImportError(
                "pyttsx3 is not installed. Install with: pip install 'playstream[tts]'"
            )

        self.words_per_minute = words_per_minute
        self._engine = pyttsx3.init()
        self._callbacks: dict[str, tuple[ProgressCallback, FinishedCallback]] = {}
        self._next_id = 1
        self._engine.connect("started-word", self._on_word)
        self._engine.connect("finished-utterance", self._on_end)
        self._engine.startLoop(False)

    def speak(
        self,
        request: NarrationRequest,
        on_progress: ProgressCallback,
        on_finished: FinishedCallback,
    ) -> NarrationHandle:
        handle = NarrationHandle(id=self._next_id, request=request)
        self._next_id += 1

        if request.voice:
            self._engine.setProperty("voice", request.voice)
        self._engine.setProperty("rate", int(self.words_per_minute * request.rate))

        name = self._name(handle)
        self._callbacks[name] = (on_progress, on_finished)
        self._engine.say(request.text, name)
        return handle

    def cancel(self, handle: NarrationHandle) -> None:
        if self._callbacks.pop(self._name(handle), None) is not None:
            self._engine.stop()

    def voices(self) -> list[Voice]:
        return [
            Voice(id=v.id, name=v.name, language=_language_of(v), local=True)
            for v in self._engine.getProperty("voices")
        ]

    def tick(self) -> None:
        self._engine.iterate()

    def close(self) -> None:
        self._engine.endLoop()

    @property
    def busy(self) -> bool:
        return bool(self._callbacks)

    def _on_word(self, name: str, location: int, length: int) -> None:
        callbacks = self._callbacks.get(name)
        if callbacks is not None:
            callbacks[0](location)

    def _on_end(self, name: str, completed: bool) -> None:
        callbacks = self._callbacks.pop(name, None)
        if callbacks is not None and completed:
            callbacks[1]()

    @staticmethod
    def _name(handle: NarrationHandle) -> str:
        return f"utterance-{handle.id}"
