"""Tests for word and sentence segmentation."""

import re

import pytest

from playstream.core.models import SentenceRange, Token
from playstream.core.segmenter import segment, sentence_range_of, sentences


def test_segment_sample(sample_text):
    result = segment(sample_text)
    assert list(result) == [
        Token("Hello", 0),
        Token("world.", 6),
        Token("This", 13),
        Token("is", 18),
        Token("a", 21),
        Token("test!", 23),
    ]


@pytest.mark.parametrize("text", ["", "   ", "\n\t \r\n"], ids=["empty", "spaces", "mixed"])
def test_segment_blank_text_is_empty(text):
    result = segment(text)
    assert len(result) == 0
    assert not result
    assert result.last_index == -1


def test_segment_keeps_offsets_with_irregular_whitespace():
    text = "  One\ttwo\n\nthree   four "
    result = segment(text)
    assert [t.word for t in result] == ["One", "two", "three", "four"]
    for token in result:
        assert text[token.start : token.end] == token.word


@pytest.mark.parametrize(
    "text",
    [
        "Hello world. This is a test!",
        "  leading and trailing  ",
        "line one.\nline two?\n\n  line three!",
        "no-terminators at all here",
        "tabs\tand non-breaking spaces",
    ],
)
def test_segment_reconstructs_source(text):
    """Tokens plus the whitespace between them rebuild the original text."""
    result = segment(text)
    rebuilt = text[: result[0].start] if result else text
    for i, token in enumerate(result):
        rebuilt += token.word
        gap_end = result[i + 1].start if i + 1 < len(result) else len(text)
        gap = text[token.end : gap_end]
        assert gap == "" or gap.isspace()
        rebuilt += gap
    assert rebuilt == text


def test_segment_starts_strictly_increase():
    result = segment("a bb ccc dddd. e! f? g")
    starts = [t.start for t in result]
    assert starts == sorted(set(starts))
    assert [m.start() for m in re.finditer(r"\S+", "a bb ccc dddd. e! f? g")] == starts


def test_sentence_range_middle_word(sample_text):
    seg = segment(sample_text)
    assert sentence_range_of(3, seg) == SentenceRange(start=2, end=5)


def test_sentence_range_first_sentence(sample_text):
    seg = segment(sample_text)
    assert sentence_range_of(0, seg) == SentenceRange(0, 1)
    assert sentence_range_of(1, seg) == SentenceRange(0, 1)


def test_sentence_range_without_terminators_spans_everything():
    seg = segment("just some words without an ending")
    assert sentence_range_of(3, seg) == SentenceRange(0, seg.last_index)


def test_sentence_range_question_and_exclamation():
    seg = segment("Why? Because! Done.")
    assert sentence_range_of(0, seg) == SentenceRange(0, 0)
    assert sentence_range_of(1, seg) == SentenceRange(1, 1)
    assert sentence_range_of(2, seg) == SentenceRange(2, 2)


def test_sentence_range_trailing_words_after_last_terminator():
    seg = segment("Done. and then")
    assert sentence_range_of(2, seg) == SentenceRange(1, 2)


@pytest.mark.parametrize(
    "text",
    ["Hello world. This is a test!", "One. Two three. Four five six", "a b c"],
)
def test_sentence_range_contains_and_is_idempotent(text):
    seg = segment(text)
    for i in range(len(seg)):
        rng = sentence_range_of(i, seg)
        assert rng.start <= i <= rng.end
        for j in range(rng.start, rng.end + 1):
            assert sentence_range_of(j, seg) == rng


@pytest.mark.parametrize("index", [-1, 6, 100])
def test_sentence_range_out_of_range(sample_text, index):
    with pytest.raises(IndexError):
        sentence_range_of(index, segment(sample_text))


def test_sentences_cover_all_words(sample_text):
    seg = segment(sample_text)
    assert sentences(seg) == [SentenceRange(0, 1), SentenceRange(2, 5)]
    assert sentences(segment("")) == []
