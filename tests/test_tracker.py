"""Tests for the position tracker."""

import pytest

from playstream.core.segmenter import segment
from playstream.core.tracker import advance


@pytest.fixture
def seg(sample_text):
    return segment(sample_text)


def test_offset_at_word_start(seg):
    assert advance(6, seg, 0) == 1


def test_offset_relative_to_slice(seg):
    # Slice starts at "This" (offset 13); relative 5 lands on "is" at 18.
    assert advance(5, seg, 2) == 3
    assert advance(0, seg, 2) == 2


def test_offset_inside_word_resolves_to_next_word(seg):
    # Offset 8 is inside "world."; the first token starting at or after it is "This".
    assert advance(8, seg, 0) == 2


@pytest.mark.parametrize("offset", [23, 24, 27, 500], ids=["last-start", "inside", "end", "far"])
def test_offset_past_last_start_is_last_index(seg, offset):
    assert advance(offset, seg, 0) == seg.last_index


def test_each_signal_resolved_independently(seg):
    """Skipped and backwards signals resolve from scratch each time."""
    assert [advance(o, seg, 0) for o in (0, 18, 6, 23, 13)] == [0, 3, 1, 5, 2]


def test_negative_offset_clamps_to_slice_start(seg):
    assert advance(-4, seg, 3) == 3


def test_single_word_text():
    seg = segment("Hello")
    assert advance(0, seg, 0) == 0
    assert advance(3, seg, 0) == 0


@pytest.mark.parametrize("start", [-1, 6])
def test_invalid_slice_start(seg, start):
    with pytest.raises(IndexError):
        advance(0, seg, start)


def test_empty_segmentation():
    with pytest.raises(IndexError):
        advance(0, segment(""), 0)


def test_repeated_signals_reuse_token_starts(seg):
    starts = seg.starts
    assert [advance(offset, seg, 0) for offset in (0, 6, 13, 18, 21, 23)] == [0, 1, 2, 3, 4, 5]
    assert seg.starts is starts
