"""Tests for terminal highlight rendering."""

from playstream.cli.render import SENTENCE_STYLE, WORD_STYLE, render_highlight
from playstream.core.models import PlaybackSnapshot, PlaybackState, Segmentation
from playstream.core.segmenter import segment, sentence_range_of


def _snapshot(text, index):
    seg = segment(text)
    return PlaybackSnapshot(
        state=PlaybackState.PLAYING,
        word_index=index,
        sentence=sentence_range_of(index, seg),
        segmentation=seg,
        text=text,
    )


def _styled(text, style):
    return [text.plain[s.start : s.end] for s in text.spans if str(s.style) == style]


def test_highlights_word_and_sentence(sample_text):
    rendered = render_highlight(_snapshot(sample_text, 3))
    assert rendered.plain == sample_text
    assert _styled(rendered, SENTENCE_STYLE) == ["This is a test!"]
    assert _styled(rendered, WORD_STYLE) == ["is"]


def test_sentence_highlight_can_be_disabled(sample_text):
    rendered = render_highlight(_snapshot(sample_text, 0), highlight_sentence=False)
    assert _styled(rendered, SENTENCE_STYLE) == []
    assert _styled(rendered, WORD_STYLE) == ["Hello"]


def test_whitespace_preserved():
    text = "One  two.\n\nThree"
    rendered = render_highlight(_snapshot(text, 2))
    assert rendered.plain == text
    assert _styled(rendered, WORD_STYLE) == ["Three"]


def test_nothing_highlighted_when_idle():
    snapshot = PlaybackSnapshot(
        state=PlaybackState.IDLE, word_index=-1, sentence=None, segmentation=Segmentation()
    )
    rendered = render_highlight(snapshot)
    assert rendered.plain == ""
    assert rendered.spans == []
