"""Word and sentence segmentation of raw text.

Words are maximal runs of non-whitespace characters. A sentence ends at a
word whose last character is ``.``, ``!`` or ``?``; text without any
terminator is one sentence.
"""

from __future__ import annotations

import re

from playstream.core.models import Segmentation, SentenceRange, Token

_WORD_RE = re.compile(r"\S+")


def segment(text: str) -> Segmentation:
    """Split text into tokens carrying their start offsets.

    Returns an empty Segmentation for empty or whitespace-only text.
    """
    tokens = tuple(Token(word=m.group(), start=m.start()) for m in _WORD_RE.finditer(text))
    return Segmentation(tokens)


def sentence_range_of(word_index: int, segmentation: Segmentation) -> SentenceRange:
    """Return the inclusive range of the sentence containing ``word_index``.

    Raises:
        IndexError: If word_index is not a valid index into segmentation.
    """
    if not 0 <= word_index < len(segmentation):
        raise IndexError(f"Word index {word_index} out of range for {len(segmentation)} tokens")

    start = word_index
    while start > 0 and not segmentation[start - 1].ends_sentence:
        start -= 1

    end = word_index
    while end < segmentation.last_index and not segmentation[end].ends_sentence:
        end += 1

    return SentenceRange(start=start, end=end)


def sentences(segmentation: Segmentation) -> list[SentenceRange]:
    """All sentence ranges of a segmentation, in order."""
    ranges: list[SentenceRange] = []
    index = 0
    while index < len(segmentation):
        sentence = sentence_range_of(index, segmentation)
        ranges.append(sentence)
        index = sentence.end + 1
    return ranges
