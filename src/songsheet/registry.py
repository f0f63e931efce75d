from .adapters.base import OutputAdapter
from .adapters.html import HtmlAdapter
from .adapters.text import TextAdapter
from .exceptions import UnsupportedFormatError

_ADAPTERS: list[type[OutputAdapter]] = [
    TextAdapter,
    HtmlAdapter,
]


def available_formats() -> list[str]:
    return [cls.name for cls in _ADAPTERS]


def get_adapter(fmt: str) -> OutputAdapter:
    """Return an instantiated adapter for the given output format.

    Raises UnsupportedFormatError if no adapter matches.
    """
    for cls in _ADAPTERS:
        if cls.can_handle(fmt):
            return cls()
    raise UnsupportedFormatError(fmt)
