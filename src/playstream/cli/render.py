"""Terminal rendering of the highlighted reading position."""

from __future__ import annotations

from rich.text import Text

from playstream.core.models import PlaybackSnapshot

WORD_STYLE = "black on #b4bdfb"
SENTENCE_STYLE = "black on #e8e5ff"


def render_highlight(snapshot: PlaybackSnapshot, highlight_sentence: bool = True) -> Text:
    """Render the session text with the current sentence and word highlighted.

    Whitespace between words is kept exactly as in the source text.
    """
    text = Text(snapshot.text)
    segmentation = snapshot.segmentation
    if snapshot.word_index < 0 or not segmentation:
        return text

    sentence = snapshot.sentence
    if highlight_sentence and sentence is not None:
        text.stylize(
            SENTENCE_STYLE, segmentation[sentence.start].start, segmentation[sentence.end].end
        )

    word = segmentation[snapshot.word_index]
    text.stylize(WORD_STYLE, word.start, word.end)
    return text
