"""playstream segment command — show how text splits into words and sentences."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.table import Table

from playstream.cli.utils import read_input
from playstream.core.segmenter import segment as split_words
from playstream.core.segmenter import sentence_range_of, sentences
from playstream.utils.console import console


def segment(
    file: Annotated[
        Optional[Path],
        typer.Argument(help="Plain text file to segment ('-' for stdin)."),
    ] = None,
    text: Annotated[
        Optional[str],
        typer.Option("--text", "-t", help="Text to segment instead of a file."),
    ] = None,
) -> None:
    """List every word with its offset and the sentence it belongs to."""
    segmentation = split_words(read_input(file, text))
    if not segmentation:
        console.print("[yellow]No words found.[/yellow]")
        return

    table = Table(title=f"Words ({len(segmentation)})")
    table.add_column("#", style="bold cyan", justify="right")
    table.add_column("Offset", justify="right")
    table.add_column("Word")
    table.add_column("Sentence", style="dim")

    for index, token in enumerate(segmentation):
        sentence = sentence_range_of(index, segmentation)
        table.add_row(str(index), str(token.start), token.word, f"{sentence.start}-{sentence.end}")

    console.print(table)
    console.print(f"\n[dim]{len(sentences(segmentation))} sentence(s).[/dim]")
