import pytest

from asciimotion.maps import CharMap, resolve_chars


def test_chars1_matches_table():
    assert CharMap.CHARS1.chars() == list(" .:-=+*#%@")


def test_documented_lengths():
    assert len(CharMap.CHARS1.chars()) == 10
    assert len(CharMap.CHARS2.chars()) == 67
    assert len(CharMap.CHARS3.chars()) == 92
    assert len(CharMap.GRADIENT.chars()) == 5
    assert len(CharMap.BLACK_WHITE.chars()) == 2


def test_single_block_maps():
    assert CharMap.SOLID.chars() == ["█"]
    assert CharMap.DOTTED.chars() == ["⣿"]


def test_maps_start_dark():
    for char_map in (CharMap.CHARS1, CharMap.CHARS2, CharMap.CHARS3, CharMap.GRADIENT):
        assert char_map.chars()[0] == " "


def test_resolve_builtin():
    assert resolve_chars(CharMap.BW_DOTTED) == [" ", "⣿"]


def test_resolve_custom_string():
    assert resolve_chars("abc") == ["a", "b", "c"]


def test_resolve_iterable_copies():
    source = ["x", "y"]
    result = resolve_chars(source)
    assert result == source
    result.append("z")
    assert source == ["x", "y"]


def test_resolve_rejects_bad_input():
    with pytest.raises(TypeError):
        resolve_chars(42)
    with pytest.raises(TypeError):
        resolve_chars(["ab", "c"])