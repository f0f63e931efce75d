"""Chord transposition with key-aware enharmonic spelling.

Chords are transposed root by root: ``Cm7/Bb`` is split on ``/`` and each part
has its leading note name (``[A-G][#b]?``) moved by the offset while the rest
of the part (``m7``) is copied verbatim.  Parts that do not start with a note
name (``N.C.``, ``riff``, Nashville numbers) pass through untouched.

Whether black keys are written as sharps or flats is decided once per song by
:func:`resolve_spelling`, so a transposed chart never mixes ``C#`` and ``Db``.

Spelling rules (first match wins) for the *target* key index
------------------------------------------------------------

+-------------------------------+----------------------------------------+
| Target key                    | Spelling                               |
+===============================+========================================+
| minor on 1, 6 or 8            | sharps (C#m, F#m, G#m)                 |
+-------------------------------+----------------------------------------+
| 3, 8, 10 (Eb, Ab, Bb)         | flats                                  |
+-------------------------------+----------------------------------------+
| 6 (F#/Gb)                     | flats, unless moved up from F          |
+-------------------------------+----------------------------------------+
| 1 (C#/Db)                     | flats, unless moved up from C          |
+-------------------------------+----------------------------------------+
| 5 (F)                         | flats                                  |
+-------------------------------+----------------------------------------+
| anything else                 | sharps                                 |
+-------------------------------+----------------------------------------+
"""

import logging
import re
from types import MappingProxyType

from .exceptions import InvalidKeyError
from .models import KeyContext

logger = logging.getLogger(__name__)

CHROMATIC_SCALE = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

FLAT_TO_SHARP = MappingProxyType({"Db": "C#", "Eb": "D#", "Gb": "F#", "Ab": "G#", "Bb": "A#"})
SHARP_TO_FLAT = MappingProxyType({sharp: flat for flat, sharp in FLAT_TO_SHARP.items()})

# Leading note name of a chord part: C, C#, Db ...
_ROOT_RE = re.compile(r"^([A-G][#b]?)(.*)$", re.DOTALL)

# Song key: root plus an optional minor marker.
_KEY_RE = re.compile(r"^([A-G][#b]?)(m)?")

_ALWAYS_FLAT = frozenset({3, 8, 10})
_MINOR_SHARP = frozenset({1, 6, 8})


def normalize_offset(offset: int) -> int:
    """Wrap any semitone offset into ``0..11``."""
    return ((offset % 12) + 12) % 12


def note_index(note: str) -> int | None:
    """Return the pitch class of a note name, or ``None`` if it is not one.

    Only the five standard flats are recognised; ``Cb``, ``Fb``, ``E#`` and
    ``B#`` are not notes here.
    """
    note = FLAT_TO_SHARP.get(note, note)
    try:
        return CHROMATIC_SCALE.index(note)
    except ValueError:
        return None


def parse_key(key: str | None) -> KeyContext:
    """Parse a song key such as ``"Gm"``, ``"C#"`` or ``"Bb"``.

    Anything that does not start with a note name falls back to C major.
    """
    m = _KEY_RE.match(key or "")
    if not m:
        return KeyContext(root=0)
    root = note_index(m.group(1))
    if root is None:
        return KeyContext(root=0)
    return KeyContext(root=root, is_minor=bool(m.group(2)), suffix=key[len(m.group(1)):])


def resolve_spelling(key_root: int, is_minor: bool, offset: int) -> bool:
    """Return ``True`` if a song in *key_root* moved by *offset* should use flats."""
    target = normalize_offset(key_root + offset)

    if is_minor and target in _MINOR_SHARP:
        return False
    if target in _ALWAYS_FLAT:
        return True
    if target == 6:
        return key_root != 5
    if target == 1:
        return key_root != 0
    return target == 5


def spelling_for_key(key: str | None, offset: int) -> bool:
    """:func:`resolve_spelling` for a raw key string."""
    ctx = parse_key(key)
    use_flats = resolve_spelling(ctx.root, ctx.is_minor, offset)
    logger.debug("key=%r offset=%d -> %s", key, offset, "flats" if use_flats else "sharps")
    return use_flats


def transpose_note(note: str, offset: int, use_flats: bool = False) -> str | None:
    """Move a bare note name by *offset*; ``None`` if *note* is not a note."""
    index = note_index(note)
    if index is None:
        return None
    name = CHROMATIC_SCALE[normalize_offset(index + offset)]
    if use_flats:
        return SHARP_TO_FLAT.get(name, name)
    return name


def transpose_chord(chord: str, offset: int, use_flats: bool = False) -> str:
    """Transpose a chord symbol by *offset* semitones.

    Examples::

        transpose_chord("G", 2)             -> "A"
        transpose_chord("Cm7/Bb", 1)        -> "C#m7/B"
        transpose_chord("A", 1, True)       -> "Bb"
        transpose_chord("N.C.", 5)          -> "N.C."

    A zero offset returns *chord* exactly as given.  Never raises.
    """
    if offset == 0:
        return chord
    return "/".join(_transpose_part(part, offset, use_flats) for part in chord.split("/"))


def _transpose_part(part: str, offset: int, use_flats: bool) -> str:
    m = _ROOT_RE.match(part)
    if not m:
        return part
    root = transpose_note(m.group(1), offset, use_flats)
    if root is None:
        return part
    return root + m.group(2)


# ---------------------------------------------------------------------------
# Key helpers
# ---------------------------------------------------------------------------


def current_key(key: str | None, offset: int, use_flats: bool = False) -> str | None:
    """Return the name of *key* after transposing it by *offset*.

    The original suffix is kept, so ``current_key("Bbm", 2)`` is ``"Cm"``.
    Returns ``None`` when *key* has no recognisable root.
    """
    m = _ROOT_RE.match(key or "")
    if not m:
        return None
    root = transpose_note(m.group(1), offset, use_flats)
    if root is None:
        return None
    return root + m.group(2)


def key_label(note: str, suffix: str = "") -> str:
    """Return an unambiguous label for a key, e.g. ``"Db / C#"`` for ``C#`` or ``Db``."""
    note = FLAT_TO_SHARP.get(note, note)
    flat = SHARP_TO_FLAT.get(note)
    if flat:
        return f"{flat}{suffix} / {note}{suffix}"
    return f"{note}{suffix}"


def current_key_label(key: str | None, offset: int) -> str | None:
    """:func:`key_label` for *key* moved by *offset*, e.g. ``"Bbm / A#m"``.

    Returns ``None`` when *key* has no recognisable root.
    """
    if current_key(key, offset) is None:
        return None
    ctx = parse_key(key)
    return key_label(CHROMATIC_SCALE[normalize_offset(ctx.root + offset)], ctx.suffix)


def offset_to_key(original_key: str, target_key: str) -> int:
    """Return the offset in ``-6..6`` that moves *original_key* to *target_key*.

    Only the roots are compared; ``offset_to_key("G", "Em")`` is ``-3``.

    Raises InvalidKeyError if either key does not start with a note name.
    """
    indexes = []
    for key in (original_key, target_key):
        m = _KEY_RE.match(key or "")
        index = note_index(m.group(1)) if m else None
        if index is None:
            raise InvalidKeyError(key)
        indexes.append(index)

    diff = indexes[1] - indexes[0]
    if diff > 6:
        diff -= 12
    if diff < -6:
        diff += 12
    return diff
