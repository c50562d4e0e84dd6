"""
Append-only PCM16 sample buffer.

Rules:
- Samples are only ever appended, in call order (append order is time order)
- No reordering, deduplication or compaction
- Capacity doubles on growth (amortized O(total length))
- Deterministic, synchronous behavior
"""

from __future__ import annotations

import numpy as np

from audio.segments import AudioSegment, SegmentKind
from constants import BUFFER_INITIAL_CAPACITY
from errors import AllocationFailure


class SampleAssembler:
    """
    Owns the single growing output buffer for one run.

    len(assembler) is always the sum of the lengths of all appended
    segments.
    """

    def __init__(self, *, initial_capacity: int = BUFFER_INITIAL_CAPACITY) -> None:
        if initial_capacity <= 0:
            raise ValueError("initial_capacity must be > 0")

        self._buffer: np.ndarray = self._allocate(initial_capacity)
        self._length: int = 0
        self._segment_counts: dict[SegmentKind, int] = {kind: 0 for kind in SegmentKind}

    # -------------------------
    # Core operations
    # -------------------------

    def append(self, segment: AudioSegment) -> None:
        """
        Copy `segment`'s samples after everything appended so far.

        Raises:
            AllocationFailure if the buffer cannot grow.
        """
        needed = self._length + len(segment)
        if needed > self._buffer.shape[0]:
            self._grow(needed)

        self._buffer[self._length:needed] = segment.samples
        self._length = needed
        self._segment_counts[segment.kind] += 1

    def samples(self) -> np.ndarray:
        """
        Read-only view of the assembled samples, in time order.
        """
        view = self._buffer[: self._length]
        view.flags.writeable = False
        return view

    # -------------------------
    # Introspection helpers
    # -------------------------

    def __len__(self) -> int:
        return self._length

    def capacity(self) -> int:
        return int(self._buffer.shape[0])

    def snapshot(self) -> dict[str, int]:
        """
        Lightweight snapshot for logging / metrics.
        """
        out: dict[str, int] = {
            "samples": self._length,
            "capacity": self.capacity(),
        }
        for kind, count in self._segment_counts.items():
            out[f"{kind.value}_count"] = count
        return out

    # -------------------------
    # Internal
    # -------------------------

    def _grow(self, needed: int) -> None:
        new_capacity = self._buffer.shape[0]
        while new_capacity < needed:
            new_capacity *= 2

        grown = self._allocate(new_capacity)
        grown[: self._length] = self._buffer[: self._length]
        self._buffer = grown

    @staticmethod
    def _allocate(capacity: int) -> np.ndarray:
        try:
            return np.zeros(capacity, dtype=np.int16)
        except MemoryError as exc:
            raise AllocationFailure(
                f"could not grow sample buffer to {capacity} samples"
            ) from exc
