import pytest

from songsheet.exceptions import InvalidKeyError
from songsheet.models import KeyContext
from songsheet.transpose import (
    CHROMATIC_SCALE,
    current_key,
    current_key_label,
    key_label,
    normalize_offset,
    note_index,
    offset_to_key,
    parse_key,
    resolve_spelling,
    spelling_for_key,
    transpose_chord,
)

# ---------------------------------------------------------------------------
# normalize_offset / note_index
# ---------------------------------------------------------------------------


def test_normalize_offset_wraps_negative():
    assert normalize_offset(-1) == 11
    assert normalize_offset(-13) == 11
    assert normalize_offset(14) == 2
    assert normalize_offset(0) == 0


def test_note_index_sharps_and_flats():
    assert note_index("C") == 0
    assert note_index("C#") == 1
    assert note_index("Db") == 1
    assert note_index("Bb") == 10


def test_note_index_unmodelled_enharmonics():
    assert note_index("Cb") is None
    assert note_index("E#") is None
    assert note_index("H") is None


# ---------------------------------------------------------------------------
# parse_key
# ---------------------------------------------------------------------------


def test_parse_key_major():
    assert parse_key("G") == KeyContext(root=7, is_minor=False, suffix="")


def test_parse_key_minor_flat():
    ctx = parse_key("Bbm")
    assert ctx.root == 10
    assert ctx.is_minor


def test_parse_key_sharp():
    assert parse_key("C#").root == 1


def test_parse_key_garbage_defaults_to_c_major():
    assert parse_key("unknown") == KeyContext(root=0)
    assert parse_key("") == KeyContext(root=0)
    assert parse_key(None) == KeyContext(root=0)


# ---------------------------------------------------------------------------
# resolve_spelling
# ---------------------------------------------------------------------------


def test_spelling_minor_keys_prefer_sharps():
    # Em + 2 -> F#m, Am - 1 -> G#m, Bm + 2 -> C#m
    assert resolve_spelling(4, True, 2) is False
    assert resolve_spelling(9, True, -1) is False
    assert resolve_spelling(11, True, 2) is False


def test_spelling_always_flat_targets():
    # C -> Eb, Ab, Bb
    assert resolve_spelling(0, False, 3) is True
    assert resolve_spelling(0, False, 8) is True
    assert resolve_spelling(0, False, 10) is True


def test_spelling_minor_ab_is_g_sharp_minor():
    # Minor rule beats the always-flat rule at index 8
    assert resolve_spelling(0, True, 8) is False


def test_spelling_f_sharp_from_f_keeps_sharps():
    assert resolve_spelling(5, False, 1) is False


def test_spelling_gb_from_elsewhere_uses_flats():
    assert resolve_spelling(0, False, 6) is True
    assert resolve_spelling(7, False, -1) is True


def test_spelling_c_sharp_from_c_keeps_sharps():
    assert resolve_spelling(0, False, 1) is False


def test_spelling_db_from_elsewhere_uses_flats():
    assert resolve_spelling(2, False, -1) is True


def test_spelling_f_uses_flats():
    assert resolve_spelling(0, False, 5) is True


def test_spelling_default_sharps():
    for target in (0, 2, 4, 7, 9, 11):
        assert resolve_spelling(0, False, target) is False


def test_spelling_offset_wraps():
    assert resolve_spelling(0, False, -2) is True  # Bb
    assert resolve_spelling(0, False, 15) is True  # Eb


def test_spelling_for_key_parses_key():
    assert spelling_for_key("G", 3) is True  # Bb
    assert spelling_for_key("Gm", 1) is False  # G#m
    assert spelling_for_key("nonsense", 5) is True  # C + 5 = F


# ---------------------------------------------------------------------------
# transpose_chord
# ---------------------------------------------------------------------------


def test_transpose_up_sharps():
    assert transpose_chord("G", 2, False) == "A"


def test_transpose_zero_is_exact_passthrough():
    for chord in ("F#", "Dbmaj7", "N.C.", "weird//thing", ""):
        assert transpose_chord(chord, 0, True) == chord


def test_transpose_down():
    assert transpose_chord("D", -2) == "C"


def test_transpose_slash_chord():
    assert transpose_chord("Cm7/Bb", 1, False) == "C#m7/B"


def test_transpose_slash_chord_with_flats():
    assert transpose_chord("G/B", 3, True) == "Bb/D"


def test_transpose_flat_root_normalized():
    assert transpose_chord("Bb", 2) == "C"
    assert transpose_chord("Eb7", 1) == "E7"


def test_transpose_uses_flats_when_asked():
    assert transpose_chord("A", 1, True) == "Bb"
    assert transpose_chord("A", 1, False) == "A#"


def test_transpose_suffix_untouched():
    assert transpose_chord("Asus4", 2) == "Bsus4"
    assert transpose_chord("Cm+7", 2) == "Dm+7"


def test_transpose_passthrough_non_chords():
    for token in ("N.C.", "riff", "x2", "1", "Cb", "H7"):
        assert transpose_chord(token, 5) == token


def test_transpose_slash_part_without_root_passes_through():
    assert transpose_chord("C/riff", 2) == "D/riff"


def test_transpose_periodic_mod_12():
    for chord in ("C", "F#m", "Bb7/D", "N.C."):
        for n in (-7, 1, 5):
            for flats in (True, False):
                assert transpose_chord(chord, n, flats) == transpose_chord(chord, n + 12, flats)


def test_transpose_round_trip_keeps_pitch_class():
    for name in CHROMATIC_SCALE:
        for n in range(-11, 12):
            there = transpose_chord(name + "m7", n, True)
            back = transpose_chord(there, -n, False) if n else there
            assert back == name + "m7"


# ---------------------------------------------------------------------------
# Key helpers
# ---------------------------------------------------------------------------


def test_current_key_keeps_suffix():
    assert current_key("Bbm", 2) == "Cm"
    assert current_key("G", 0) == "G"
    assert current_key("E", 1) == "F"


def test_current_key_invalid():
    assert current_key("xyz", 2) is None


def test_key_label_black_keys():
    assert key_label("C#") == "Db / C#"
    assert key_label("A#", "m") == "Bbm / A#m"


def test_key_label_accepts_flat_spelling():
    assert key_label("Db") == "Db / C#"


def test_key_label_white_keys():
    assert key_label("G") == "G"
    assert key_label("E", "m") == "Em"


def test_current_key_label():
    assert current_key_label("G", 3) == "Bb / A#"
    assert current_key_label("Bbm", 2) == "Cm"
    assert current_key_label("Am7", 1) == "Bbm7 / A#m7"
    assert current_key_label("xyz", 1) is None


def test_offset_to_key_shortest_path():
    assert offset_to_key("C", "D") == 2
    assert offset_to_key("C", "A") == -3
    assert offset_to_key("G", "Em") == -3
    assert offset_to_key("C", "F#") == 6
    assert offset_to_key("Bb", "C") == 2


def test_offset_to_key_invalid():
    with pytest.raises(InvalidKeyError):
        offset_to_key("C", "Z")
    with pytest.raises(InvalidKeyError):
        offset_to_key("", "C")
