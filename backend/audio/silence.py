"""Zero-filled gap segments."""

from __future__ import annotations

import numpy as np

from audio.segments import AudioSegment, SegmentKind
from errors import AllocationFailure


def synthesize_silence(
    duration_samples: int,
    *,
    kind: SegmentKind = SegmentKind.INTER_CHARACTER_SPACE,
) -> AudioSegment:
    """
    Return a segment of `duration_samples` zero samples.

    Raises:
        ValueError on a negative length.
        AllocationFailure if the sample storage cannot be allocated.
    """
    if duration_samples < 0:
        raise ValueError("duration_samples must be >= 0")

    try:
        samples = np.zeros(duration_samples, dtype=np.int16)
    except MemoryError as exc:
        raise AllocationFailure(
            f"could not allocate {duration_samples} samples for {kind.value}"
        ) from exc

    return AudioSegment(kind=kind, samples=samples)
