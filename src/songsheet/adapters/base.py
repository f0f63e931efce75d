from abc import ABC, abstractmethod

from ..models import RenderedSong, Song


class OutputAdapter(ABC):
    """Abstract base class for all presentation adapters."""

    name: str = ""

    @classmethod
    def can_handle(cls, fmt: str) -> bool:
        """Return True if this adapter produces the given output format."""
        return fmt.lower() == cls.name

    @abstractmethod
    def render(self, rendered: RenderedSong, song: Song) -> str:
        """Turn a rendered song into the adapter's output text.

        *song* supplies the header fields (title, authors, tempo); all layout
        comes from *rendered*.
        """
