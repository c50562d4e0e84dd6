"""
Static byte -> Morse symbol table.

Rules:
- Pure data plus one lookup function.
- Covers all 256 byte values; unmapped bytes give the empty sequence.
- Letters are case-insensitive.
- Space and horizontal tab are word breaks.
"""

from __future__ import annotations

from enum import Enum
from typing import Final, Mapping, Tuple


class Symbol(str, Enum):
    """
    One element of a Morse character.
    """

    DOT = "."
    DASH = "-"
    WORD_SPACE = " "


SymbolSequence = Tuple[Symbol, ...]

EMPTY_SEQUENCE: Final[SymbolSequence] = ()

# International Morse code (ITU-R M.1677-1) for the supported characters.
_PATTERNS: Final[Mapping[str, str]] = {
    "A": ".-",     "B": "-...",   "C": "-.-.",   "D": "-..",
    "E": ".",      "F": "..-.",   "G": "--.",    "H": "....",
    "I": "..",     "J": ".---",   "K": "-.-",    "L": ".-..",
    "M": "--",     "N": "-.",     "O": "---",    "P": ".--.",
    "Q": "--.-",   "R": ".-.",    "S": "...",    "T": "-",
    "U": "..-",    "V": "...-",   "W": ".--",    "X": "-..-",
    "Y": "-.--",   "Z": "--..",
    "0": "-----",  "1": ".----",  "2": "..---",  "3": "...--",
    "4": "....-",  "5": ".....",  "6": "-....",  "7": "--...",
    "8": "---..",  "9": "----.",
    ",": "--..--", ".": ".-.-.-", "=": "-...-",  "?": "..--..",
    " ": " ",      "\t": " ",
}


def _parse(pattern: str) -> SymbolSequence:
    return tuple(Symbol(ch) for ch in pattern)


def _build_table() -> Tuple[SymbolSequence, ...]:
    table = [EMPTY_SEQUENCE] * 256
    for char, pattern in _PATTERNS.items():
        seq = _parse(pattern)
        table[ord(char)] = seq
        if char.isalpha():
            table[ord(char.lower())] = seq
    return tuple(table)


SYMBOL_TABLE: Final[Tuple[SymbolSequence, ...]] = _build_table()


def lookup(byte_value: int) -> SymbolSequence:
    """
    Return the symbol sequence for a single input byte.

    An empty tuple means "no tone" and is a valid result, not an error.

    Raises:
        ValueError if byte_value is not in [0, 255].
    """
    if not 0 <= byte_value <= 255:
        raise ValueError(f"byte_value must be in [0, 255], got {byte_value}")
    return SYMBOL_TABLE[byte_value]
