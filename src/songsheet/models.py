from dataclasses import dataclass, field
from typing import ClassVar, Iterator


@dataclass
class Song:
    """A song as handed over by the song store.

    Only ``body`` and ``key`` influence rendering; the rest is carried through
    for presentation headers.
    """

    title: str = ""
    body: str = ""
    key: str = "C"
    authors: str = ""
    tempo: int | None = None


@dataclass
class DisplaySettings:
    """Viewer preferences that change how a song is laid out."""

    show_chords: bool = True
    show_comments: bool = True
    chord_color: str = ""  # presentational tag, e.g. "amber" or "blue"
    section_color: str = ""  # presentational tag, e.g. "purple" or "teal"


@dataclass(frozen=True)
class KeyContext:
    """A parsed song key: root pitch class plus major/minor flag."""

    root: int
    is_minor: bool = False
    suffix: str = ""  # everything after the root, e.g. "m" or "m7"


@dataclass(frozen=True)
class LyricSpan:
    """One run of lyric text. ``is_aside`` marks a ``(...)`` sub-span."""

    text: str
    is_aside: bool = False


@dataclass(frozen=True)
class LinkSegment:
    """One run of a link line: either a URL or the text between URLs."""

    text: str
    is_url: bool = False


@dataclass(frozen=True)
class RenderedLine:
    """A chord row and the lyric row it floats above.

    Example::

        chord_line = "C     G"
        lyric_line = "Hello world"
    """

    chord_line: str
    lyric_line: str
    is_chorus: bool = False

    @property
    def has_chords(self) -> bool:
        return bool(self.chord_line.strip())


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LabelBlock:
    """A bold label line: a section header or the synthesized chorus label."""

    kind: ClassVar[str] = "label"

    text: str
    style: str = "section"  # "section" or "chorus"


@dataclass(frozen=True)
class LineBlock:
    kind: ClassVar[str] = "line"

    line: RenderedLine


@dataclass(frozen=True)
class CommentBlock:
    """A ``#`` comment shown as italic literal text."""

    kind: ClassVar[str] = "comment"

    text: str


@dataclass(frozen=True)
class LinkBlock:
    """A ``#`` comment that carries one or more URLs."""

    kind: ClassVar[str] = "link"

    segments: tuple[LinkSegment, ...]

    @property
    def urls(self) -> list[str]:
        return [s.text for s in self.segments if s.is_url]


Block = LabelBlock | LineBlock | CommentBlock | LinkBlock


@dataclass
class Paragraph:
    """The rendered form of one blank-line separated block of the body."""

    blocks: list[Block] = field(default_factory=list)
    is_chorus: bool = False
    anchor: str | None = None  # "chorus-N" for chorus-opening paragraphs


@dataclass
class RenderedSong:
    """Everything a presentation layer needs to draw one song."""

    paragraphs: list[Paragraph] = field(default_factory=list)
    transpose: int = 0
    use_flats: bool = False
    original_key: str = "C"
    current_key: str | None = None
    current_key_label: str | None = None  # "Bb / A#" for black keys
    chord_color: str = ""
    section_color: str = ""

    @property
    def anchors(self) -> list[tuple[int, str]]:
        """``(chorus_index, anchor_id)`` pairs in document order."""
        anchors = [p.anchor for p in self.paragraphs if p.anchor]
        return list(enumerate(anchors))

    def iter_lines(self) -> Iterator[RenderedLine]:
        """Yield every chord/lyric pair, paragraph by paragraph."""
        for paragraph in self.paragraphs:
            for block in paragraph.blocks:
                if isinstance(block, LineBlock):
                    yield block.line
