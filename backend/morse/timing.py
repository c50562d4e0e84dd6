"""
Morse timing model (pure).

Every duration is an integer number of samples derived from one base unit.

    unit(wpm) = round(sample_rate * 60 / (50 * wpm))

Send speed (wpm) drives dit, dah and the intra-character space.
Farnsworth speed (fwpm) drives the inter-character and inter-word spaces.

Reference: https://morsecode.world/international/timing.html
"""

from __future__ import annotations

from constants import (
    DAH_UNITS,
    DIT_UNITS,
    ENVELOPE_DIT_DIVISOR,
    INTER_CHARACTER_SPACE_UNITS,
    INTER_WORD_SPACE_UNITS,
    INTRA_CHARACTER_SPACE_UNITS,
    SAMPLE_RATE_HZ,
    SECONDS_PER_MINUTE,
    UNITS_PER_WORD,
)


def unit(wpm: int, *, sample_rate_hz: int = SAMPLE_RATE_HZ) -> int:
    """
    Length of one Morse unit in samples.

    Rounds half up using integer arithmetic only, so the result does not
    depend on float representation.

    Raises:
        ValueError if wpm or sample_rate_hz is not positive.
    """
    if wpm <= 0:
        raise ValueError("wpm must be > 0")
    if sample_rate_hz <= 0:
        raise ValueError("sample_rate_hz must be > 0")

    numerator = sample_rate_hz * SECONDS_PER_MINUTE
    denominator = UNITS_PER_WORD * wpm
    return (2 * numerator + denominator) // (2 * denominator)


def dit(wpm: int, *, sample_rate_hz: int = SAMPLE_RATE_HZ) -> int:
    return DIT_UNITS * unit(wpm, sample_rate_hz=sample_rate_hz)


def dah(wpm: int, *, sample_rate_hz: int = SAMPLE_RATE_HZ) -> int:
    return DAH_UNITS * unit(wpm, sample_rate_hz=sample_rate_hz)


def intra_character_space(wpm: int, *, sample_rate_hz: int = SAMPLE_RATE_HZ) -> int:
    """Gap between elements of one character. Send speed."""
    return INTRA_CHARACTER_SPACE_UNITS * unit(wpm, sample_rate_hz=sample_rate_hz)


def inter_character_space(fwpm: int, *, sample_rate_hz: int = SAMPLE_RATE_HZ) -> int:
    """Gap between characters. Farnsworth speed."""
    return INTER_CHARACTER_SPACE_UNITS * unit(fwpm, sample_rate_hz=sample_rate_hz)


def inter_word_space(fwpm: int, *, sample_rate_hz: int = SAMPLE_RATE_HZ) -> int:
    """
    Gap emitted for a word-break byte. Farnsworth speed.

    Kept at 5 units. A space byte is also surrounded by two inter-character
    spaces, so a single word break is 3 + 5 + 3 = 11 units of silence, not
    the 7 unit standard gap.
    """
    return INTER_WORD_SPACE_UNITS * unit(fwpm, sample_rate_hz=sample_rate_hz)


def rise_time(wpm: int, *, sample_rate_hz: int = SAMPLE_RATE_HZ) -> int:
    """Envelope fade-in length for tones."""
    return dit(wpm, sample_rate_hz=sample_rate_hz) // ENVELOPE_DIT_DIVISOR


def fall_time(wpm: int, *, sample_rate_hz: int = SAMPLE_RATE_HZ) -> int:
    """Envelope fade-out length for tones."""
    return dit(wpm, sample_rate_hz=sample_rate_hz) // ENVELOPE_DIT_DIVISOR
