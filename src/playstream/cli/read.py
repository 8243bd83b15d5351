"""playstream read command — narrate text with live word highlighting."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Group
from rich.live import Live
from rich.markup import escape
from rich.text import Text

from playstream.cli.keys import KEY_HELP, KeyControls, key_reader
from playstream.cli.render import render_highlight
from playstream.cli.utils import read_input
from playstream.core.config import load_config
from playstream.core.controller import PlaybackController
from playstream.core.models import PlaybackParameters, PlaybackState
from playstream.engine import create_engine
from playstream.engine.voices import default_voice, select_voices
from playstream.utils.console import console

POLL_INTERVAL = 0.02  # seconds between engine ticks


def read(
    file: Annotated[
        Optional[Path],
        typer.Argument(help="Plain text file to read ('-' for stdin)."),
    ] = None,
    text: Annotated[
        Optional[str],
        typer.Option("--text", "-t", help="Text to read instead of a file."),
    ] = None,
    rate: Annotated[
        Optional[float],
        typer.Option("--rate", "-r", help="Speech rate multiplier (e.g. 1.5)."),
    ] = None,
    voice: Annotated[
        Optional[str],
        typer.Option("--voice", "-v", help="Voice id from 'playstream voices'."),
    ] = None,
    engine_name: Annotated[
        Optional[str],
        typer.Option("--engine", "-e", help="Narration engine: simulated or pyttsx3."),
    ] = None,
    from_word: Annotated[
        int,
        typer.Option("--from-word", min=0, help="Word index to start reading from."),
    ] = 0,
    no_sentence: Annotated[
        bool,
        typer.Option("--no-sentence", help="Highlight only the current word."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Show playback decisions."),
    ] = False,
) -> None:
    """Read text aloud while highlighting the current word and sentence.

    While reading: space pauses or resumes, + and - change the rate,
    v switches to the next voice, q or Ctrl+C stops.
    """
    try:
        config = load_config(
            **{
                "reader.rate": rate,
                "reader.voice": voice,
                "engine.backend": engine_name,
                "verbose": verbose or None,
            }
        )
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    source = read_input(file, text)

    try:
        engine = create_engine(config.engine)
    except (ValueError, ImportError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    catalog = engine.voices()
    voice_id = config.reader.voice
    if voice_id is None:
        fallback = default_voice(
            catalog, config.engine.voice_language, config.engine.local_voices_only
        )
        voice_id = fallback.id if fallback else None

    controller = PlaybackController(
        engine,
        PlaybackParameters(rate=config.reader.rate, voice=voice_id),
        completion_signal_reliable=config.engine.completion_signal_reliable,
        verbose=config.verbose,
    )
    highlight_sentence = config.reader.highlight_sentence and not no_sentence

    try:
        started = controller.start(source, from_word)
    except IndexError as e:
        console.print(f"[red]{e}[/red]")
        engine.close()
        raise typer.Exit(1)
    if not started:
        console.print("[yellow]Nothing to read: the text has no words.[/yellow]")
        engine.close()
        return

    console.print(
        f"[bold]Reading:[/bold] {len(controller.segmentation)} words"
        f" [dim](engine {config.engine.backend}, rate {config.reader.rate}x,"
        f" voice {voice_id or 'default'})[/dim]"
    )

    voices = select_voices(
        catalog, config.engine.voice_language, config.engine.local_voices_only
    )
    controls = KeyControls(controller, config.reader, voices or catalog)
    status = KEY_HELP

    def view(snapshot):
        return Group(
            render_highlight(snapshot, highlight_sentence), Text(status, style="dim")
        )

    try:
        with key_reader() as next_key, Live(
            view(controller.snapshot()), console=console, refresh_per_second=20
        ) as live:
            while controller.state is not PlaybackState.IDLE:
                key = next_key()
                if key is not None:
                    status = controls.handle(key) or status
                engine.tick()
                snapshot = controller.snapshot()
                if snapshot.active:
                    live.update(view(snapshot))
                time.sleep(POLL_INTERVAL)
    except KeyboardInterrupt:
        controller.stop()
        console.print("[yellow]Stopped.[/yellow]")
    else:
        if controls.quit_requested:
            console.print("[yellow]Stopped.[/yellow]")
        else:
            console.print("[green]Finished reading.[/green]")
    finally:
        engine.close()
