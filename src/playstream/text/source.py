"""Text acquisition: the raw text a reading session starts from."""

from __future__ import annotations

import mimetypes
import sys
from pathlib import Path


def is_plain_text(path: Path) -> bool:
    """Check if a file looks like plain text by its name."""
    mime, _ = mimetypes.guess_type(path.name)
    return mime == "text/plain"


def load_text(path: Path | str) -> str:
    """Read a UTF-8 plain text file, or stdin when path is ``-``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a plain text file.
    """
    if str(path) == "-":
        return sys.stdin.read()

    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    if not is_plain_text(path):
        raise ValueError(f"Please upload a valid text file: {path.name}")
    return path.read_text(encoding="utf-8")
