"""PlayStream CLI entry point."""

from typing import Annotated, Optional

import typer
from dotenv import load_dotenv

from playstream import __version__
from playstream.cli.read import read
from playstream.cli.segment import segment
from playstream.cli.voices import voices

app = typer.Typer(
    name="playstream",
    help="PlayStream — read text aloud with word and sentence highlighting.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"playstream {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """PlayStream — read text aloud with word and sentence highlighting."""
    # Load .env for PLAYSTREAM_* settings; shell exports take precedence
    load_dotenv(override=False)


app.command("read")(read)
app.command("segment")(segment)
app.command("voices")(voices)
