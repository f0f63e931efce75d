"""Inline-chord song body → renderable layout model.

Body format
-----------

The body is split into blocks on blank lines.  Inside a block every line is
classified, in this order:

  1. ``# ...``                   COMMENT, or LINK if it holds an http(s) URL
  2. ``{eoc}``                   END_OF_CHORUS: closes the chorus, not shown
  3. first line, chorus block    CHORUS_LABEL: replaced by ``"   Chorus:"``
  4. first line ending in ``:``  SECTION_LABEL: shown verbatim in bold
  5. anything else               CONTENT: inline ``[Chord]`` tokens + lyrics

A block is a chorus block when its first line starts with ``chorus`` or
``{soc}`` (case-insensitive).  Content lines inside the chorus region are
indented by three spaces.  Chorus state never carries over to the next block.

Content lines are laid out as two monospace rows::

    "[C]Hello [G]world"   →   chord_line = "C     G"
                              lyric_line = "Hello world"

Usage::

    from songsheet.renderer import render_song
    rendered = render_song(song, transpose=2)
    for line in rendered.iter_lines():
        print(line.chord_line)
        print(line.lyric_line)
"""

import logging
import re
from enum import Enum, auto

from .models import (
    Block,
    CommentBlock,
    DisplaySettings,
    LabelBlock,
    LineBlock,
    LinkBlock,
    LinkSegment,
    LyricSpan,
    Paragraph,
    RenderedLine,
    RenderedSong,
    Song,
)
from .transpose import current_key, current_key_label, spelling_for_key, transpose_chord

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Regexes
# ---------------------------------------------------------------------------

BLOCK_SEPARATOR_RE = re.compile(r"\n\s*\n")
LEADING_BLANK_LINES_RE = re.compile(r"^\s*\n")

# Inline chord token, kept in the split result: "[Am7]"
CHORD_TOKEN_SPLIT_RE = re.compile(r"(\[.*?\])")
CHORD_TOKEN_RE = re.compile(r"\[.*?\]")

URL_SPLIT_RE = re.compile(r"(https?://\S+)")
URL_RE = re.compile(r"^https?://")

ASIDE_SPLIT_RE = re.compile(r"(\([^)]*\))")

CHORUS_INDENT = "   "
CHORUS_LABEL = CHORUS_INDENT + "Chorus:"


# ---------------------------------------------------------------------------
# LineType / ChorusState
# ---------------------------------------------------------------------------


class LineType(Enum):
    COMMENT = auto()  # "# capo 2"
    LINK = auto()  # "# video: https://..."
    END_OF_CHORUS = auto()  # "{eoc}"
    CHORUS_LABEL = auto()  # "Chorus:" / "{soc}" opening a chorus block
    SECTION_LABEL = auto()  # "Verse 1:" opening any other block
    CONTENT = auto()  # lyrics with inline [Chord] tokens


class ChorusState(Enum):
    NORMAL = auto()
    IN_CHORUS = auto()


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def split_blocks(body: str) -> list[str]:
    """Split a song body into blank-line separated blocks.

    An empty (or whitespace-only) body has no blocks.  Blank lines before the
    first block and after the last one are dropped.
    """
    body = LEADING_BLANK_LINES_RE.sub("", body.rstrip())
    if not body:
        return []
    return BLOCK_SEPARATOR_RE.split(body)


def opens_chorus(first_line: str) -> bool:
    """Return True if a block whose first line is *first_line* is a chorus."""
    label = first_line.strip().lower()
    return label.startswith("chorus") or label.startswith("{soc}")


def classify_line(line: str, index: int, chorus_block: bool) -> LineType:
    """Classify one raw line of a block.

    Args:
        line:         The raw line.
        index:        Position of the line inside its block (0 = first).
        chorus_block: Whether the block was opened as a chorus.

    Returns:
        The :class:`LineType` for this line.
    """
    stripped = line.strip()
    if stripped.startswith("#"):
        return LineType.LINK if URL_SPLIT_RE.search(line) else LineType.COMMENT
    lowered = stripped.lower()
    if lowered == "{eoc}":
        return LineType.END_OF_CHORUS
    if index == 0:
        if chorus_block:
            return LineType.CHORUS_LABEL
        if lowered.endswith(":"):
            return LineType.SECTION_LABEL
    return LineType.CONTENT


# ---------------------------------------------------------------------------
# Line layout
# ---------------------------------------------------------------------------


def align_chords(line: str, transpose: int = 0, use_flats: bool = False) -> tuple[str, str]:
    """Lay out a content line as ``(chord_line, lyric_line)``.

    Each chord starts in the column where the lyric text that followed its
    ``[...]`` token begins.  When two chords would touch, both rows get one
    extra space so the chords stay apart.

    Example::

        align_chords("[C]Hello [G]world")   -> ("C     G", "Hello world")
        align_chords("[G][D]Hi")            -> ("G D", "  Hi")
    """
    chord_line = ""
    lyric_line = ""

    for part in CHORD_TOKEN_SPLIT_RE.split(line):
        if not part:
            continue
        if not (part.startswith("[") and part.endswith("]")):
            lyric_line += part
            continue

        chord = transpose_chord(part[1:-1], transpose, use_flats)

        width = max(len(chord_line), len(lyric_line))
        chord_line = chord_line.ljust(width)
        lyric_line = lyric_line.ljust(width)

        if chord_line and not chord_line.endswith(" "):
            chord_line += " "
            lyric_line += " "

        chord_line += chord

    return chord_line, lyric_line


def strip_chords(line: str) -> str:
    """Remove every ``[...]`` token and trim the remaining lyric text."""
    return CHORD_TOKEN_RE.sub("", line).strip()


def render_line(
    line: str,
    is_chorus: bool = False,
    transpose: int = 0,
    use_flats: bool = False,
    show_chords: bool = True,
) -> RenderedLine:
    """Render one content line, applying the chorus indent where needed."""
    indent = CHORUS_INDENT if is_chorus else ""
    if not show_chords:
        return RenderedLine("", indent + strip_chords(line), is_chorus)

    chord_line, lyric_line = align_chords(line, transpose, use_flats)
    return RenderedLine(indent + chord_line, indent + lyric_line, is_chorus)


def split_link_segments(line: str) -> tuple[LinkSegment, ...]:
    """Split a comment line into URL and text segments.

    The leading ``#`` is stripped from the first text segment and blank text
    segments are dropped::

        "# Video: https://youtu.be/x"
            -> (LinkSegment("Video: "), LinkSegment("https://youtu.be/x", True))
    """
    segments = []
    for i, part in enumerate(URL_SPLIT_RE.split(line)):
        if URL_RE.match(part):
            segments.append(LinkSegment(part, is_url=True))
            continue
        if i == 0:
            part = re.sub(r"^\s*#\s*", "", part)
        if part.strip():
            segments.append(LinkSegment(part))
    return tuple(segments)


def split_lyric_spans(text: str) -> list[LyricSpan]:
    """Tag the parenthesised ``(...)`` runs of a lyric line as asides."""
    return [
        LyricSpan(part, part.startswith("(") and part.endswith(")"))
        for part in ASIDE_SPLIT_RE.split(text)
        if part
    ]


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------


class Renderer:
    """Render :class:`~songsheet.models.Song` bodies for one set of settings.

    The renderer holds no state between calls; the same song, offset and
    settings always produce the same :class:`~songsheet.models.RenderedSong`.
    """

    def __init__(self, settings: DisplaySettings | None = None):
        self.settings = settings or DisplaySettings()

    def render(self, song: Song, transpose: int = 0) -> RenderedSong:
        """Return the layout model for *song* moved by *transpose* semitones."""
        use_flats = spelling_for_key(song.key, transpose)

        paragraphs: list[Paragraph] = []
        chorus_count = 0
        for block in split_blocks(song.body):
            paragraph = self._render_block(block, transpose, use_flats)
            if paragraph.is_chorus:
                paragraph.anchor = f"chorus-{chorus_count}"
                chorus_count += 1
            paragraphs.append(paragraph)

        logger.debug(
            "Rendered %d paragraph(s), %d chorus(es), transpose=%d",
            len(paragraphs),
            chorus_count,
            transpose,
        )
        return RenderedSong(
            paragraphs=paragraphs,
            transpose=transpose,
            use_flats=use_flats,
            original_key=song.key,
            current_key=current_key(song.key, transpose, use_flats),
            current_key_label=current_key_label(song.key, transpose),
            chord_color=self.settings.chord_color,
            section_color=self.settings.section_color,
        )

    def _render_block(self, block: str, transpose: int, use_flats: bool) -> Paragraph:
        lines = block.split("\n")
        chorus_block = opens_chorus(lines[0])
        state = ChorusState.IN_CHORUS if chorus_block else ChorusState.NORMAL

        blocks: list[Block] = []
        for index, line in enumerate(lines):
            lt = classify_line(line, index, chorus_block)
            state, rendered = self._step(state, lt, line, transpose, use_flats)
            if rendered is not None:
                blocks.append(rendered)

        return Paragraph(blocks=blocks, is_chorus=chorus_block)

    def _step(
        self,
        state: ChorusState,
        lt: LineType,
        line: str,
        transpose: int,
        use_flats: bool,
    ) -> tuple[ChorusState, Block | None]:
        """Advance the chorus state by one line; return the new state and its block."""
        if lt == LineType.LINK:
            return state, LinkBlock(split_link_segments(line))

        if lt == LineType.COMMENT:
            if not self.settings.show_comments:
                return state, None
            return state, CommentBlock(line)

        if lt == LineType.END_OF_CHORUS:
            return ChorusState.NORMAL, None

        if lt == LineType.CHORUS_LABEL:
            return state, LabelBlock(CHORUS_LABEL, style="chorus")

        if lt == LineType.SECTION_LABEL:
            return state, LabelBlock(line.strip(), style="section")

        rendered = render_line(
            line,
            is_chorus=state == ChorusState.IN_CHORUS,
            transpose=transpose,
            use_flats=use_flats,
            show_chords=self.settings.show_chords,
        )
        return state, LineBlock(rendered)


def render_song(
    song: Song,
    transpose: int = 0,
    settings: DisplaySettings | None = None,
) -> RenderedSong:
    """Convenience wrapper: ``Renderer(settings).render(song, transpose)``."""
    return Renderer(settings).render(song, transpose)
