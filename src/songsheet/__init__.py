"""Chord/lyrics notation engine: parse, transpose and lay out song sheets."""

from .models import DisplaySettings, RenderedSong, Song
from .renderer import Renderer, render_song
from .transpose import resolve_spelling, transpose_chord

__version__ = "0.1.0"

__all__ = [
    "DisplaySettings",
    "RenderedSong",
    "Renderer",
    "Song",
    "render_song",
    "resolve_spelling",
    "transpose_chord",
]
