"""
Timing helpers for observability.

Responsibilities:
- Measure durations using monotonic time (immune to clock changes)
- Emit metrics as JSONL events via observability.logger
- Never aggregate: one metric = one log event

Design notes:
- Durations use monotonic time for correctness
- Event timestamps (ts_ms) use wall-clock time for human readability
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Iterator

from observability.logger import log_event


@contextmanager
def timed(
    name: str,
    *,
    details: dict[str, Any] | None = None,
) -> Iterator[dict[str, Any]]:
    """
    Context manager for measuring durations safely.

    Guarantees:
    - Metric is emitted exactly once
    - Exceptions inside the block do NOT suppress timing

    The yielded dict is merged into `details` at exit, so the block can
    attach results it only knows at the end:

        with timed("synthesis", details={"bytes": n}) as extra:
            result = render(data, speed)
            extra["samples"] = result.total_samples
    """
    extra: dict[str, Any] = {}
    start_ns = time.monotonic_ns()
    try:
        yield extra
    finally:
        duration_ms = (time.monotonic_ns() - start_ns) // 1_000_000
        log_event({
            # Wall-clock timestamp for log correlation / readability
            "ts_ms": int(time.time() * 1000),
            "event_type": "METRIC_TIMER",
            "metric": name,
            "value_ms": duration_ms,
            "details": {**(details or {}), **extra},
        })
