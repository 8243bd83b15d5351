"""playstream voices command — list the narration engine's voices."""

from __future__ import annotations

from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from playstream.core.config import load_config
from playstream.engine import create_engine
from playstream.engine.voices import select_voices
from playstream.utils.console import console


def voices(
    engine_name: Annotated[
        Optional[str],
        typer.Option("--engine", "-e", help="Narration engine: simulated or pyttsx3."),
    ] = None,
    show_all: Annotated[
        bool,
        typer.Option("--all", help="Show every voice, not only the configured local ones."),
    ] = False,
) -> None:
    """List voices available for narration."""
    try:
        config = load_config(**{"engine.backend": engine_name})
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    try:
        engine = create_engine(config.engine)
    except (ValueError, ImportError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    try:
        catalog = engine.voices()
    finally:
        engine.close()

    if not show_all:
        catalog = select_voices(
            catalog, config.engine.voice_language, config.engine.local_voices_only
        )

    table = Table(title=f"Voices ({len(catalog)})")
    table.add_column("ID", style="bold cyan")
    table.add_column("Name")
    table.add_column("Language", width=10)
    table.add_column("Local", width=6)

    for voice in catalog:
        table.add_row(voice.id, voice.name, voice.language or "-", "yes" if voice.local else "-")

    console.print(table)
    if not show_all:
        console.print(
            f"\n[dim]Filtered to {config.engine.voice_language}"
            f"{' local' if config.engine.local_voices_only else ''} voices. "
            "Use --all to list every voice.[/dim]"
        )
