"""
JSONL event logger.

- Write one JSON object per line
- Output to stderr (stdout is reserved for --help / --version)
- No buffering, no batching
- No side effects beyond logging
"""

from __future__ import annotations

import json
import sys
from typing import Any, Mapping, Callable

_LEVELS: dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
}


# ------------------------------------------------------------------
# Explicit output sink (patchable in tests)
# ------------------------------------------------------------------

def _stderr_print(line: str) -> None:
    sys.stderr.write(line + "\n")
    sys.stderr.flush()

_print: Callable[[str], None] = _stderr_print

_json_enabled: bool = True
_min_level: int = _LEVELS["INFO"]


def configure(*, json_logs: bool = True, level: str = "INFO") -> None:
    """
    Set the output format and minimum level for the process.

    Unknown level names fall back to INFO.
    """
    global _json_enabled, _min_level  # pylint: disable=global-statement
    _json_enabled = json_logs
    _min_level = _LEVELS.get(level.upper(), _LEVELS["INFO"])


def _format_plain(event: Mapping[str, Any]) -> str:
    head = str(event.get("event_type", "EVENT"))
    rest = " ".join(
        f"{key}={value}" for key, value in event.items() if key != "event_type"
    )
    return f"{head} {rest}" if rest else head


def log_event(event: Mapping[str, Any], *, level: str = "INFO") -> None:
    """
    Write a single event line to the sink.

    The caller is responsible for:
    - Supplying a fully-formed event dict
    - Including ts_ms, event_type, etc.

    This function:
    - Drops events below the configured level
    - Serializes to JSON (or key=value when JSON logs are off)
    - Writes exactly one line
    - Never raises
    """
    if _LEVELS.get(level.upper(), _LEVELS["INFO"]) < _min_level:
        return

    if not _json_enabled:
        _print(_format_plain(event))
        return

    try:
        line = json.dumps(event, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        # Last-resort fallback: logging must never crash the run
        fallback: dict[str, Any] = {
            "ts_ms": event.get("ts_ms"),
            "event_type": "LOGGER_SERIALIZATION_ERROR",
            "error": str(e),
            "original_event_repr": repr(event),
        }
        line = json.dumps(fallback, ensure_ascii=False, separators=(",", ":"))

    _print(line)
