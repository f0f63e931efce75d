"""Plain monospace text output.

Each paragraph of the rendered song becomes a run of lines separated from the
next by one blank line.  Chord rows are only written when they hold a chord,
so a lyric-only line stays a single row::

    Amazing Grace
    By John Newton -- 72 BPM

    G       G7         C         G
    Amazing grace! How sweet the sound
"""

from ..models import CommentBlock, LabelBlock, LineBlock, LinkBlock, Paragraph, RenderedSong, Song
from .base import OutputAdapter


class TextAdapter(OutputAdapter):
    """Render a song sheet as plain text."""

    name = "text"

    def render(self, rendered: RenderedSong, song: Song) -> str:
        parts: list[str] = []

        # --- Header ---
        if song.title:
            parts.append(song.title)
        byline = _byline(song)
        if byline:
            parts.append(byline)
        if rendered.transpose and rendered.current_key_label:
            parts.append(f"Key: {rendered.current_key_label} (from {rendered.original_key})")

        # --- Paragraphs ---
        for paragraph in rendered.paragraphs:
            lines = _render_paragraph(paragraph)
            if not lines:
                continue
            if parts:
                parts.append("")
            parts.extend(lines)

        return "\n".join(parts) + "\n"


def _byline(song: Song) -> str:
    if not song.authors and not song.tempo:
        return ""
    byline = f"By {song.authors or 'Unknown'}"
    if song.tempo:
        byline += f" -- {song.tempo} BPM"
    return byline


def _render_paragraph(paragraph: Paragraph) -> list[str]:
    lines: list[str] = []
    for block in paragraph.blocks:
        if isinstance(block, LineBlock):
            if block.line.has_chords:
                lines.append(block.line.chord_line.rstrip())
            lines.append(block.line.lyric_line.rstrip())
        elif isinstance(block, LabelBlock):
            lines.append(block.text)
        elif isinstance(block, CommentBlock):
            lines.append(block.text)
        elif isinstance(block, LinkBlock):
            lines.append("".join(s.text for s in block.segments))
    return lines
