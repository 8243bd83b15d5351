"""Decide whether a narration "finished" signal means playback really ended.

Some engines emit their finished signal whenever a request is canceled,
including the cancel issued to restart narration with new parameters. On
those engines a finished signal has to be checked against the tracked
position before playback is torn down. Engines whose signal is reliable use
a policy that trusts it outright.
"""

from __future__ import annotations

import unicodedata
from abc import ABC, abstractmethod
from enum import Enum

from playstream.core.models import Segmentation


class CompletionVerdict(str, Enum):
    INTENTIONAL = "intentional"  # side effect of an explicit stop
    COMPLETED = "completed"  # genuine end of text
    SPURIOUS = "spurious"  # cancel artifact, ignore


def normalize_word(word: str) -> str:
    """Strip trailing punctuation and symbol characters from a word."""
    end = len(word)
    while end > 0 and unicodedata.category(word[end - 1])[0] in ("P", "S"):
        end -= 1
    return word[:end]


class TerminationPolicy(ABC):
    """Classifies completion signals for one controller."""

    def arm_stop(self) -> None:
        """Note that an explicit stop canceled the active request."""

    def reset(self) -> None:
        """Forget any pending stop; called when a fresh session starts."""

    @property
    def stop_pending(self) -> bool:
        return False

    @abstractmethod
    def classify(self, word_index: int, segmentation: Segmentation) -> CompletionVerdict:
        """Classify a completion signal given the tracked position."""


class ReliableCompletionPolicy(TerminationPolicy):
    """For engines that only signal completion when text runs out."""

    def classify(self, word_index: int, segmentation: Segmentation) -> CompletionVerdict:
        return CompletionVerdict.COMPLETED


class SpuriousCompletionPolicy(TerminationPolicy):
    """For engines that also signal completion on every cancel.

    An explicit stop arms a one-shot flag that absorbs the next signal.
    Otherwise the signal counts only when the tracked word is the last one.
    """

    def __init__(self) -> None:
        self._stop_pending = False

    def arm_stop(self) -> None:
        self._stop_pending = True

    def reset(self) -> None:
        self._stop_pending = False

    @property
    def stop_pending(self) -> bool:
        return self._stop_pending

    def classify(self, word_index: int, segmentation: Segmentation) -> CompletionVerdict:
        if self._stop_pending:
            self._stop_pending = False
            return CompletionVerdict.INTENTIONAL

        last = segmentation.last_index
        if last >= 0 and word_index == last:
            return CompletionVerdict.COMPLETED

        if self._matches_last_word(word_index, segmentation):
            return CompletionVerdict.COMPLETED

        return CompletionVerdict.SPURIOUS

    @staticmethod
    def _matches_last_word(word_index: int, segmentation: Segmentation) -> bool:
        # Same text alone is not enough: the last word may also occur earlier.
        last = segmentation.last_index
        if not 0 <= word_index <= last:
            return False
        current = normalize_word(segmentation[word_index].word)
        final = normalize_word(segmentation[last].word)
        if not current or not final:
            return False
        return current == final and word_index == last


def make_policy(completion_signal_reliable: bool) -> TerminationPolicy:
    """Pick the termination policy for an engine's completion-signal capability."""
    if completion_signal_reliable:
        return ReliableCompletionPolicy()
    return SpuriousCompletionPolicy()
