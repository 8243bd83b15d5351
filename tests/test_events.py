"""Tests for the playback event system."""

from playstream.core.events import EventCallback, PlaybackEvent
from playstream.core.models import PlaybackState


def test_playback_event_creation():
    """PlaybackEvent stores kind, state, word index and message."""
    event = PlaybackEvent(
        kind="progress", state=PlaybackState.PLAYING, word_index=3, message="is"
    )
    assert event.kind == "progress"
    assert event.state is PlaybackState.PLAYING
    assert event.word_index == 3
    assert event.message == "is"
    assert event.data is None


def test_playback_event_with_data():
    """PlaybackEvent accepts optional data payload."""
    event = PlaybackEvent(
        kind="restart",
        state=PlaybackState.PLAYING,
        word_index=3,
        data={"rate": 1.5, "voice": None, "offset": 18},
    )
    assert event.data["offset"] == 18


def test_event_callback_type():
    """EventCallback is a callable type alias accepting PlaybackEvent."""
    collected: list[PlaybackEvent] = []

    def handler(event: PlaybackEvent) -> None:
        collected.append(event)

    cb: EventCallback = handler
    cb(PlaybackEvent(kind="stop", state=PlaybackState.IDLE, word_index=-1))
    assert len(collected) == 1
    assert collected[0].kind == "stop"
