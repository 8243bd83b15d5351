"""Shared data models for PlayStream."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Iterator

SENTENCE_TERMINATORS = (".", "!", "?")


@dataclass(frozen=True)
class Token:
    """A segmented word with its offset into the source text."""

    word: str
    start: int

    @property
    def end(self) -> int:
        """Offset one past the token's last character."""
        return self.start + len(self.word)

    @property
    def ends_sentence(self) -> bool:
        return self.word.endswith(SENTENCE_TERMINATORS)


@dataclass(frozen=True)
class Segmentation:
    """Ordered tokens of one text, indexed 0..N-1 with strictly increasing starts."""

    tokens: tuple[Token, ...] = ()

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, index: int) -> Token:
        return self.tokens[index]

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __bool__(self) -> bool:
        return bool(self.tokens)

    @property
    def last_index(self) -> int:
        """Index of the final token, -1 when empty."""
        return len(self.tokens) - 1

    @cached_property
    def starts(self) -> tuple[int, ...]:
        """Token start offsets, computed once per segmentation."""
        return tuple(token.start for token in self.tokens)


@dataclass(frozen=True)
class SentenceRange:
    """Inclusive word-index range of one sentence."""

    start: int
    end: int

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.start <= index <= self.end


class PlaybackState(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"


@dataclass(frozen=True)
class PlaybackParameters:
    """Rate and voice a narration request is issued with.

    The voice is an opaque identifier from the voice catalog, compared by equality.
    """

    rate: float = 1.0
    voice: str | None = None

    def __post_init__(self) -> None:
        if self.rate <= 0:
            raise ValueError(f"Rate must be positive, got {self.rate}")


@dataclass(frozen=True)
class NarrationRequest:
    """A text slice handed to the narration engine."""

    text: str
    rate: float
    voice: str | None = None


@dataclass(frozen=True)
class Voice:
    """An entry of the engine's voice catalog."""

    id: str
    name: str
    language: str = ""
    local: bool = True


@dataclass(frozen=True)
class Session:
    """Text snapshot and its segmentation, fixed from a fresh start until stop."""

    text: str
    segmentation: Segmentation = field(default_factory=Segmentation)


@dataclass(frozen=True)
class Position:
    """Highlighted word and its sentence, replaced as a unit."""

    word_index: int = -1
    sentence: SentenceRange | None = None


@dataclass(frozen=True)
class PlaybackSnapshot:
    """Everything the rendering layer reads, captured at one instant."""

    state: PlaybackState
    word_index: int
    sentence: SentenceRange | None
    segmentation: Segmentation
    text: str = ""

    @property
    def active(self) -> bool:
        return self.state is not PlaybackState.IDLE
