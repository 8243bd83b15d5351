"""Voice catalog filtering and default voice selection."""

from __future__ import annotations

from playstream.core.models import Voice


def select_voices(
    voices: list[Voice], language: str | None = "en-US", local_only: bool = True
) -> list[Voice]:
    """Filter a voice catalog by language tag and locality.

    Language tags compare case-insensitively with ``_`` and ``-`` treated alike.
    """
    wanted = _normalize_tag(language) if language else None
    return [
        v
        for v in voices
        if (wanted is None or _normalize_tag(v.language) == wanted) and (v.local or not local_only)
    ]


def default_voice(
    voices: list[Voice], language: str | None = "en-US", local_only: bool = True
) -> Voice | None:
    """First voice of the filtered catalog, falling back to the first voice overall."""
    filtered = select_voices(voices, language, local_only)
    if filtered:
        return filtered[0]
    return voices[0] if voices else None


def _normalize_tag(tag: str) -> str:
    return tag.replace("_", "-").lower()
