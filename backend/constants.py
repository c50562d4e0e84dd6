"""
CONSTANTS
---------
Single source of truth for all behavioral numbers in text-to-cw.

Rules:
- If changing a value changes the generated audio, it belongs here.
- No magic numbers elsewhere in the codebase.
- Other modules MUST import from this file.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

# =============================================================================
# Program identity
# =============================================================================

PROGRAM_NAME: Final[str] = "text-to-cw"
VERSION: Final[str] = "0.1.0"

# =============================================================================
# Audio Format (PCM16 mono @ 44.1kHz)
# =============================================================================

SAMPLE_RATE_HZ: Final[int] = 44_100
CHANNELS: Final[int] = 1
BITS_PER_SAMPLE: Final[int] = 16

# Half of 2**14; keeps every shaped tone sample well inside int16.
TONE_AMPLITUDE: Final[int] = 8_192

# =============================================================================
# Speed & Tone Parameters
# =============================================================================

DEFAULT_WPM: Final[int] = 18
DEFAULT_FREQUENCY_HZ: Final[int] = 600

MIN_WPM: Final[int] = 1
MAX_WPM: Final[int] = 100

MIN_FREQUENCY_HZ: Final[int] = 60
MAX_FREQUENCY_HZ: Final[int] = 3_000

# PARIS standard: one word is 50 units long.
UNITS_PER_WORD: Final[int] = 50
SECONDS_PER_MINUTE: Final[int] = 60

# =============================================================================
# Element Lengths (in units)
# =============================================================================

DIT_UNITS: Final[int] = 1
DAH_UNITS: Final[int] = 3
INTRA_CHARACTER_SPACE_UNITS: Final[int] = 1
INTER_CHARACTER_SPACE_UNITS: Final[int] = 3

# 5, not 7. Do not change: see morse.timing.inter_word_space.
INTER_WORD_SPACE_UNITS: Final[int] = 5

# Rise and fall are each 1/10 of a dit.
ENVELOPE_DIT_DIVISOR: Final[int] = 10

# =============================================================================
# Encoder (FLAC)
# =============================================================================

FLAC_COMPRESSION_LEVEL: Final[int] = 8
FLAC_MAX_COMPRESSION_LEVEL: Final[int] = 8
FLAC_VERIFY_DEFAULT: Final[bool] = True

# STREAMINFO block size written for an empty stream (libFLAC default, level 8).
FLAC_BLOCK_SIZE: Final[int] = 4_096

# New output files get this mode, minus the process umask.
OUTPUT_FILE_MODE: Final[int] = 0o666

# =============================================================================
# Sample Buffer
# =============================================================================

BUFFER_INITIAL_CAPACITY: Final[int] = 4_096

# =============================================================================
# Convenience Bundles
# =============================================================================


@dataclass(frozen=True)
class AudioFormat:
    """
    Immutable bundle describing the PCM audio handed to the encoder.

    This is a convenience wrapper for passing format metadata around;
    it is NOT a second source of truth.
    """
    sample_rate_hz: int = SAMPLE_RATE_HZ
    channels: int = CHANNELS
    bits_per_sample: int = BITS_PER_SAMPLE


AUDIO_FORMAT_V1: Final[AudioFormat] = AudioFormat()


# =============================================================================
# Helper Functions
# =============================================================================

def samples_to_seconds(num_samples: int, sample_rate_hz: int = SAMPLE_RATE_HZ) -> float:
    """
    Convert a sample count to duration in seconds.

    Defensive behavior:
    - Non-positive input returns 0.0.
    """
    if num_samples <= 0:
        return 0.0
    return num_samples / sample_rate_hz
