"""
Shaped sine tone synthesis (pure).

Purpose:
- Build the dit and dah tone segments for one run.

Shaping:
- raw[i] = amplitude * sin(2*pi * f * i / sr), truncated toward zero
- first `rise` samples scaled by i / rise
- last `fall` samples scaled by (n - i) / fall
- the fade-in wins if the two windows overlap
"""

from __future__ import annotations

import numpy as np

from audio.segments import AudioSegment, SegmentKind
from errors import AllocationFailure


def synthesize_tone(
    duration_samples: int,
    frequency_hz: int,
    sample_rate_hz: int,
    amplitude: int,
    rise_samples: int,
    fall_samples: int,
    *,
    kind: SegmentKind = SegmentKind.DIT,
) -> AudioSegment:
    """
    Synthesize one amplitude-shaped tone segment.

    Args:
        duration_samples:
            Length of the segment.
        frequency_hz:
            Tone pitch.
        sample_rate_hz:
            Output sample rate.
        amplitude:
            Peak value. The caller keeps it inside int16; it is not checked.
        rise_samples / fall_samples:
            Envelope window lengths. 0 disables that side.
        kind:
            SegmentKind tag for the result (DIT or DAH).

    Raises:
        ValueError on negative lengths or a non-positive sample rate.
        AllocationFailure if the sample storage cannot be allocated.
    """
    if duration_samples < 0:
        raise ValueError("duration_samples must be >= 0")
    if sample_rate_hz <= 0:
        raise ValueError("sample_rate_hz must be > 0")
    if rise_samples < 0 or fall_samples < 0:
        raise ValueError("rise_samples and fall_samples must be >= 0")

    try:
        index = np.arange(duration_samples, dtype=np.float64)
        raw = np.trunc(amplitude * np.sin(2.0 * np.pi * frequency_hz * index / sample_rate_hz))

        envelope = np.ones(duration_samples, dtype=np.float64)
        if fall_samples > 0:
            tail = index >= duration_samples - fall_samples
            envelope[tail] = (duration_samples - index[tail]) / fall_samples
        if rise_samples > 0:
            head = index < rise_samples
            envelope[head] = index[head] / rise_samples

        samples = np.trunc(raw * envelope).astype(np.int16)
    except MemoryError as exc:
        raise AllocationFailure(
            f"could not allocate {duration_samples} samples for {kind.value} tone"
        ) from exc

    return AudioSegment(kind=kind, samples=samples)
