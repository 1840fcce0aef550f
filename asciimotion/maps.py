"""Character lookup tables ordered from dark to bright."""

from __future__ import annotations

import enum
from collections.abc import Iterable


class CharMap(enum.Enum):
    """Built-in character maps."""

    CHARS1 = " .:-=+*#%@"
    CHARS2 = ''' .'`^",:;Il!i~+_-?][}{1)(|/tfjrxnuvczXYUJCLQ0OZmwqpdbkhao*#MW&8%B@$'''
    CHARS3 = " `.-':_,^=;><+!rc*/z?sLTv)J7(|Fi{C}fI31tlu[neoZ5Yxjya]2ESwqkP6h9d4VpOGbUAKXHm8RD#$Bg0MNWQ%&@"
    SOLID = "█"
    DOTTED = "⣿"
    GRADIENT = " ░▒▓█"
    BLACK_WHITE = " █"
    BW_DOTTED = " ⣿"
    BRAILLE = " ··⣀⣀⣤⣤⣤⣀⡀⢀⠠⠔⠒⠑⠊⠉⠁"

    def chars(self) -> list[str]:
        """Return the map as a list of single characters."""
        return list(self.value)


def resolve_chars(char_map: CharMap | str | Iterable[str]) -> list[str]:
    """Turn a built-in map, a string of characters or an iterable of characters into a list."""
    if isinstance(char_map, CharMap):
        return char_map.chars()
    if isinstance(char_map, str):
        return list(char_map)
    if isinstance(char_map, Iterable):
        chars = list(char_map)
        if not all(isinstance(c, str) and len(c) == 1 for c in chars):
            raise TypeError("custom character maps must contain single characters")
        return chars
    raise TypeError(f"unsupported character map: {char_map!r}")