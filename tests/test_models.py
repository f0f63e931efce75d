from songsheet.models import (
    DisplaySettings,
    LabelBlock,
    LineBlock,
    LinkBlock,
    LinkSegment,
    Paragraph,
    RenderedLine,
    RenderedSong,
    Song,
)


def test_song_defaults():
    song = Song()
    assert song.body == ""
    assert song.key == "C"
    assert song.authors == ""
    assert song.tempo is None


def test_display_settings_defaults():
    settings = DisplaySettings()
    assert settings.show_chords
    assert settings.show_comments
    assert settings.chord_color == ""
    assert settings.section_color == ""


def test_rendered_line_has_chords():
    assert RenderedLine("   C", "   Hi").has_chords
    assert not RenderedLine("   ", "   Hi").has_chords
    assert not RenderedLine("", "Hi").has_chords


def test_block_kinds():
    assert LabelBlock("Verse:").kind == "label"
    assert LineBlock(RenderedLine("", "x")).kind == "line"
    assert LinkBlock(()).kind == "link"


def test_link_block_urls():
    block = LinkBlock((LinkSegment("see "), LinkSegment("https://a.example", is_url=True)))
    assert block.urls == ["https://a.example"]


def test_rendered_song_anchors_and_lines():
    first = RenderedLine("C", "one")
    second = RenderedLine("   G", "   two", is_chorus=True)
    song = RenderedSong(paragraphs=[
        Paragraph(blocks=[LabelBlock("Verse:"), LineBlock(first)]),
        Paragraph(blocks=[LineBlock(second)], is_chorus=True, anchor="chorus-0"),
    ])
    assert song.anchors == [(0, "chorus-0")]
    assert list(song.iter_lines()) == [first, second]
