import logging
import sys
from pathlib import Path

import click

from .exceptions import InvalidKeyError, UnsupportedFormatError
from .models import DisplaySettings, Song
from .registry import available_formats, get_adapter
from .renderer import Renderer
from .transpose import offset_to_key


def _default_title(source_name: str) -> str:
    """Derive a title from the input file name: ``amazing-grace.txt`` → ``Amazing Grace``."""
    if source_name == "-":
        return ""
    stem = Path(source_name).stem
    return stem.replace("-", " ").replace("_", " ").title()


def _read_source(source: str) -> str:
    """Return the song text from *source*, a file path or ``-`` for stdin."""
    if source == "-":
        return click.get_text_stream("stdin", encoding="utf-8").read()
    return Path(source).read_text(encoding="utf-8")


@click.command()
@click.argument("source")
@click.option("-k", "--key", default="C", show_default=True,
              help="Key the song is written in, e.g. G, Bb, F#m.")
@click.option("-t", "--transpose", default=0, type=int, metavar="N",
              help="Transpose by N semitones (negative moves down).")
@click.option("--to-key", "to_key", default=None, metavar="KEY",
              help="Transpose to KEY instead of giving an offset.")
@click.option("--title", default=None, help="Song title (default: from the file name).")
@click.option("--authors", default="", help="Song authors shown in the header.")
@click.option("--tempo", default=None, type=click.IntRange(1, 400), help="Tempo in BPM.")
@click.option("--no-chords", "no_chords", is_flag=True, default=False,
              help="Show lyrics only.")
@click.option("--no-comments", "no_comments", is_flag=True, default=False,
              help="Hide '#' comment lines (lines with links are still shown).")
@click.option("-f", "--format", "fmt", default="text", show_default=True,
              help="Output format.")
@click.option("-o", "--output", "output_path", default=None, metavar="PATH",
              help="Write to PATH instead of stdout.")
@click.option("-v", "--verbose", is_flag=True, default=False,
              help="Log debug output to stderr.")
def main(
    source: str,
    key: str,
    transpose: int,
    to_key: str | None,
    title: str | None,
    authors: str,
    tempo: int | None,
    no_chords: bool,
    no_comments: bool,
    fmt: str,
    output_path: str | None,
    verbose: bool,
) -> None:
    """Render an inline-chord song sheet, optionally transposed.

    SOURCE is a text file with [Chord] tokens inside the lyrics ('-' reads
    stdin).

    \b
    Output formats:
      - text  aligned chord rows above lyric rows
      - html  HTML fragment with chorus anchors
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
            force=True,
        )

    # --- Resolve adapter ---
    try:
        adapter = get_adapter(fmt)
    except UnsupportedFormatError as exc:
        click.echo(f"Error: {exc}", err=True)
        click.echo(f"Supported formats: {', '.join(available_formats())}", err=True)
        sys.exit(1)

    # --- Resolve offset ---
    if to_key is not None:
        if transpose:
            click.echo("Error: use either --transpose or --to-key, not both", err=True)
            sys.exit(1)
        try:
            transpose = offset_to_key(key, to_key)
        except InvalidKeyError as exc:
            click.echo(f"Error: {exc}", err=True)
            sys.exit(1)

    # --- Read ---
    try:
        body = _read_source(source)
    except (OSError, UnicodeDecodeError) as exc:
        click.echo(f"Error: Could not read {source}: {exc}", err=True)
        sys.exit(1)

    song = Song(
        title=title if title is not None else _default_title(source),
        body=body,
        key=key,
        authors=authors,
        tempo=tempo,
    )
    settings = DisplaySettings(show_chords=not no_chords, show_comments=not no_comments)

    # --- Render ---
    rendered = Renderer(settings).render(song, transpose)
    text = adapter.render(rendered, song)

    # --- Output ---
    if output_path is None:
        click.echo(text, nl=False)
        return

    dest = Path(output_path)
    dest.write_text(text, encoding="utf-8")
    click.echo(f"Written to {dest}")
