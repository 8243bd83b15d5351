"""Shared CLI utilities."""

from __future__ import annotations

from pathlib import Path

import typer

from playstream.text.source import load_text
from playstream.utils.console import console


def read_input(file: Path | None, text: str | None) -> str:
    """Return the text to work on from ``--text`` or a file argument.

    Exits with status 1 when neither is given or the file cannot be used.
    """
    if text is not None:
        return text
    if file is None:
        console.print("[red]Nothing to read:[/red] pass a text file or --text.")
        raise typer.Exit(1)
    try:
        return load_text(file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
