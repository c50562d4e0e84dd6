"""
Run configuration.

Responsibilities:
- Clamp operator-supplied speed/tone values into a typed, immutable object
- Read environment variables for process-wide defaults
- Provide typed, immutable config objects

Non-responsibilities:
- No argument parsing (cli.main owns that)
- No audio constants (constants.py owns those)
- No runtime mutation
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from constants import (
    DEFAULT_FREQUENCY_HZ,
    DEFAULT_WPM,
    FLAC_VERIFY_DEFAULT,
    MAX_FREQUENCY_HZ,
    MAX_WPM,
    MIN_FREQUENCY_HZ,
    MIN_WPM,
    SAMPLE_RATE_HZ,
)


def _in_range(value: int | None, low: int, high: int) -> bool:
    return value is not None and low <= value <= high


@dataclass(frozen=True)
class SpeedConfig:
    """
    Immutable speed and tone parameters for one run.

    Constructed once, after validation, and passed downward to the segment
    bank. Always build through from_values() so the ranges hold.

    wpm:
        Send speed. Controls dit, dah and intra-character space.
    fwpm:
        Farnsworth speed. Controls inter-character and inter-word space.
    tone_frequency_hz:
        Pitch of the dit/dah tone.
    sample_rate_hz:
        Fixed output sample rate.
    """

    wpm: int = DEFAULT_WPM
    fwpm: int = DEFAULT_WPM
    tone_frequency_hz: int = DEFAULT_FREQUENCY_HZ
    sample_rate_hz: int = SAMPLE_RATE_HZ

    @staticmethod
    def from_values(
        wpm: int | None = None,
        fwpm: int | None = None,
        tone_frequency_hz: int | None = None,
    ) -> SpeedConfig:
        """
        Build a SpeedConfig, replacing anything out of range with its default.

        - wpm outside [1, 100] (or None) -> 18
        - fwpm outside [1, 100] (or None) -> the final wpm
        - frequency outside [60, 3000] (or None) -> 600

        Never raises for out-of-range values.
        """
        final_wpm = wpm if _in_range(wpm, MIN_WPM, MAX_WPM) else DEFAULT_WPM
        final_fwpm = fwpm if _in_range(fwpm, MIN_WPM, MAX_WPM) else final_wpm
        final_freq = (
            tone_frequency_hz
            if _in_range(tone_frequency_hz, MIN_FREQUENCY_HZ, MAX_FREQUENCY_HZ)
            else DEFAULT_FREQUENCY_HZ
        )
        return SpeedConfig(
            wpm=final_wpm,
            fwpm=final_fwpm,
            tone_frequency_hz=final_freq,
        )


def _env_int(name: str) -> int | None:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable process configuration.

    Constructed once at process startup by the CLI.
    """

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    env: str
    log_level: str

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    enable_json_logs: bool

    # ------------------------------------------------------------------
    # Speed / tone defaults (CLI flags override)
    # ------------------------------------------------------------------

    default_wpm: int | None
    default_fwpm: int | None
    default_frequency_hz: int | None

    # ------------------------------------------------------------------
    # Encoder
    # ------------------------------------------------------------------

    verify_output: bool

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @staticmethod
    def load_from_env() -> AppConfig:
        """
        Load configuration from environment variables.

        Unset or non-integer speed variables are left as None so the
        built-in defaults apply.
        """
        return AppConfig(
            env=os.environ.get("ENV", "dev"),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),

            enable_json_logs=os.environ.get("ENABLE_JSON_LOGS", "1") == "1",

            default_wpm=_env_int("TEXT_TO_CW_WPM"),
            default_fwpm=_env_int("TEXT_TO_CW_FWPM"),
            default_frequency_hz=_env_int("TEXT_TO_CW_FREQUENCY"),

            verify_output=os.environ.get(
                "TEXT_TO_CW_VERIFY", "1" if FLAC_VERIFY_DEFAULT else "0"
            ) == "1",
        )
