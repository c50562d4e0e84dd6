"""
Command-line entry point.

    text-to-cw [-f FWPM] [-h] [-t FREQUENCY] [-V] [-w WPM] INPUT OUTPUT

Responsibilities:
- Parse flags (lenient integers; out-of-range values fall back to defaults)
- Read the input file as raw bytes
- Run synthesis, then hand the finished buffer to the FLAC encoder
- Map fatal errors to one log event and exit status 1

Exit codes:
- 0 success (including -h / -V)
- 1 fatal run error (input, allocation, encoding)
- 2 usage error (argparse)
"""

from __future__ import annotations

import argparse
import re
import sys
import time
from pathlib import Path
from typing import Sequence

from dotenv import load_dotenv

from audio.flac_encoder import encode_flac
from config import AppConfig, SpeedConfig
from constants import (
    DEFAULT_FREQUENCY_HZ,
    DEFAULT_WPM,
    FLAC_COMPRESSION_LEVEL,
    PROGRAM_NAME,
    VERSION,
)
from errors import AllocationFailure, EncodeFailure, InputUnavailable
from morse.render import render
from observability import logger
from observability.logger import log_event
from observability.metrics import timed

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def lenient_int(raw: str) -> int:
    """
    Parse the leading integer of `raw`, like C atoi().

    "25wpm" -> 25, "abc" -> 0. Never raises; 0 is always out of range and
    so selects the default downstream.
    """
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description="Convert text into a Morse code (CW) FLAC audio file.",
    )
    parser.add_argument(
        "-f", dest="fwpm", metavar="NUM", type=lenient_int, default=None,
        help="Farnsworth spacing words per minute. Default: same as -w",
    )
    parser.add_argument(
        "-t", dest="frequency", metavar="NUM", type=lenient_int, default=None,
        help=f"Frequency of the generated tone in Hertz. Default {DEFAULT_FREQUENCY_HZ}",
    )
    parser.add_argument(
        "-V", action="version", version=f"{PROGRAM_NAME} v{VERSION}",
        help="Display version information and exit",
    )
    parser.add_argument(
        "-w", dest="wpm", metavar="NUM", type=lenient_int, default=None,
        help=f"Words per minute. Default {DEFAULT_WPM}",
    )
    parser.add_argument("input", metavar="INPUT", help="Input text file")
    parser.add_argument("output", metavar="OUTPUT", help="Output FLAC file")
    return parser


def read_input(path: str) -> bytes:
    """
    Read the whole input file as raw bytes (no decoding).

    Raises:
        InputUnavailable if the file cannot be opened or read.
        AllocationFailure if the contents do not fit in memory.
    """
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise InputUnavailable(f"Could not open input file '{path}': {exc.strerror or exc}") from exc
    except MemoryError as exc:
        raise AllocationFailure(f"Input file '{path}' does not fit in memory") from exc


def _now_ms() -> int:
    return int(time.time() * 1000)


def _pick(flag_value: int | None, env_value: int | None) -> int | None:
    return flag_value if flag_value is not None else env_value


def main(argv: Sequence[str] | None = None, *, config: AppConfig | None = None) -> int:
    """
    Run one conversion. Returns the process exit code.

    argparse exits directly (SystemExit) for -h, -V and usage errors.
    """
    config = config or AppConfig.load_from_env()
    logger.configure(json_logs=config.enable_json_logs, level=config.log_level)

    args = build_parser().parse_args(argv)

    speed = SpeedConfig.from_values(
        wpm=_pick(args.wpm, config.default_wpm),
        fwpm=_pick(args.fwpm, config.default_fwpm),
        tone_frequency_hz=_pick(args.frequency, config.default_frequency_hz),
    )

    log_event({
        "ts_ms": _now_ms(),
        "event_type": "RUN_STARTED",
        "env": config.env,
        "input": args.input,
        "output": args.output,
        "wpm": speed.wpm,
        "fwpm": speed.fwpm,
        "frequency_hz": speed.tone_frequency_hz,
    })

    try:
        data = read_input(args.input)
    except (InputUnavailable, AllocationFailure) as exc:
        log_event({
            "ts_ms": _now_ms(),
            "event_type": "INPUT_FAILED",
            "message": str(exc),
        }, level="ERROR")
        return EXIT_FAILURE

    try:
        with timed("synthesis", details={"bytes": len(data)}) as extra:
            result = render(data, speed)
            extra["samples"] = result.total_samples
    except AllocationFailure as exc:
        log_event({
            "ts_ms": _now_ms(),
            "event_type": "SYNTHESIS_FAILED",
            "message": str(exc),
        }, level="ERROR")
        return EXIT_FAILURE

    log_event({
        "ts_ms": _now_ms(),
        "event_type": "SYNTHESIS_COMPLETE",
        "duration_s": round(result.duration_s, 3),
        **result.stats,
    })

    try:
        with timed("encoding", details={"samples": result.total_samples}):
            encode_flac(
                result.samples,
                args.output,
                audio_format=result.audio_format,
                compression_level=FLAC_COMPRESSION_LEVEL,
                verify=config.verify_output,
            )
    except (EncodeFailure, AllocationFailure) as exc:
        log_event({
            "ts_ms": _now_ms(),
            "event_type": "ENCODING_FAILED",
            "output": args.output,
            "message": str(exc),
        }, level="ERROR")
        return EXIT_FAILURE

    log_event({
        "ts_ms": _now_ms(),
        "event_type": "ENCODING_COMPLETE",
        "output": args.output,
        "total_samples": result.total_samples,
        "verified": config.verify_output,
    })
    return EXIT_SUCCESS


def run() -> None:
    """Console-script entry point."""
    load_dotenv()
    sys.exit(main())


if __name__ == "__main__":
    run()
