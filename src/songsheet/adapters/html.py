"""HTML fragment output, built with BeautifulSoup.

Structure::

    <div class="song" data-chord-color="..." data-section-color="...">
      <h1 class="title">...</h1>
      <p class="byline">...</p>
      <div class="paragraph">                     (id="chorus-N" on choruses)
        <div class="label section">Verse 1:</div>
        <div class="line">
          <pre class="chord">C     G</pre>         (only when the row has a chord)
          <pre class="lyrics">Hello <span class="aside">(oh)</span></pre>
        </div>
        <div class="comment">#capo 2</div>
        <div class="link"><span>Video:</span><a href="...">...</a></div>
      </div>
    </div>

Text is escaped by BeautifulSoup; the adapter never builds markup by string
concatenation.
"""

from bs4 import BeautifulSoup, Tag

from ..models import CommentBlock, LabelBlock, LineBlock, LinkBlock, Paragraph, RenderedSong, Song
from ..renderer import split_lyric_spans
from .base import OutputAdapter


class HtmlAdapter(OutputAdapter):
    """Render a song sheet as an HTML fragment."""

    name = "html"

    def render(self, rendered: RenderedSong, song: Song) -> str:
        soup = BeautifulSoup("", "html.parser")
        root = soup.new_tag(
            "div",
            attrs={
                "class": "song",
                "data-chord-color": rendered.chord_color or "default",
                "data-section-color": rendered.section_color or "default",
            },
        )
        soup.append(root)

        if song.title:
            root.append(_text_tag(soup, "h1", song.title, "title"))
        if song.authors or song.tempo:
            byline = f"By {song.authors or 'Unknown'}"
            if song.tempo:
                byline += f" -- {song.tempo} BPM"
            root.append(_text_tag(soup, "p", byline, "byline"))
        if rendered.transpose and rendered.current_key_label:
            root.append(_text_tag(soup, "p", f"Key: {rendered.current_key_label}", "key"))

        for paragraph in rendered.paragraphs:
            if not paragraph.blocks:
                continue
            root.append(_render_paragraph(soup, paragraph))

        return str(soup) + "\n"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _text_tag(soup: BeautifulSoup, name: str, text: str, css_class: str) -> Tag:
    tag = soup.new_tag(name, attrs={"class": css_class})
    tag.string = text
    return tag


def _render_paragraph(soup: BeautifulSoup, paragraph: Paragraph) -> Tag:
    attrs = {"class": "paragraph chorus" if paragraph.is_chorus else "paragraph"}
    if paragraph.anchor:
        attrs["id"] = paragraph.anchor
    div = soup.new_tag("div", attrs=attrs)

    for block in paragraph.blocks:
        if isinstance(block, LabelBlock):
            div.append(_text_tag(soup, "div", block.text, f"label {block.style}"))
        elif isinstance(block, CommentBlock):
            div.append(_text_tag(soup, "div", block.text, "comment"))
        elif isinstance(block, LinkBlock):
            div.append(_render_link(soup, block))
        elif isinstance(block, LineBlock):
            div.append(_render_line(soup, block))
    return div


def _render_line(soup: BeautifulSoup, block: LineBlock) -> Tag:
    line = block.line
    div = soup.new_tag("div", attrs={"class": "line"})
    if line.has_chords:
        div.append(_text_tag(soup, "pre", line.chord_line, "chord"))

    lyrics = soup.new_tag("pre", attrs={"class": "lyrics"})
    for span in split_lyric_spans(line.lyric_line):
        if span.is_aside:
            lyrics.append(_text_tag(soup, "span", span.text, "aside"))
        else:
            lyrics.append(span.text)
    div.append(lyrics)
    return div


def _render_link(soup: BeautifulSoup, block: LinkBlock) -> Tag:
    div = soup.new_tag("div", attrs={"class": "link"})
    for segment in block.segments:
        if segment.is_url:
            a = soup.new_tag(
                "a",
                attrs={"href": segment.text, "target": "_blank", "rel": "noopener noreferrer"},
            )
            a.string = segment.text
            div.append(a)
        else:
            div.append(_text_tag(soup, "span", segment.text, "comment"))
    return div
