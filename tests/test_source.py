"""Tests for text acquisition."""

import io

import pytest

from playstream.text.source import is_plain_text, load_text


def test_load_text_file(tmp_path):
    path = tmp_path / "story.txt"
    path.write_text("Once upon a time.", encoding="utf-8")
    assert load_text(path) == "Once upon a time."
    assert load_text(str(path)) == "Once upon a time."


def test_load_text_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_text(tmp_path / "missing.txt")


@pytest.mark.parametrize("name", ["story.pdf", "story.md.gz", "story"])
def test_load_text_rejects_non_text(tmp_path, name):
    path = tmp_path / name
    path.write_bytes(b"data")
    with pytest.raises(ValueError, match="valid text file"):
        load_text(path)


def test_load_text_stdin(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("from stdin"))
    assert load_text("-") == "from stdin"


def test_is_plain_text(tmp_path):
    assert is_plain_text(tmp_path / "a.txt")
    assert not is_plain_text(tmp_path / "a.png")
