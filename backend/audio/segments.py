"""
Audio segment primitives.

Pure data containers only.
No synthesis, no buffering, no timing logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np


class SegmentKind(str, Enum):
    """
    The five distinct segments a run can emit.
    """

    DIT = "dit"
    DAH = "dah"
    INTRA_CHARACTER_SPACE = "intra_character_space"
    INTER_CHARACTER_SPACE = "inter_character_space"
    INTER_WORD_SPACE = "inter_word_space"


@dataclass(frozen=True, eq=False)
class AudioSegment:
    """
    A contiguous run of PCM16 mono samples, appended as a unit.

    kind:
        Which element this segment represents.

    samples:
        1-D int16 array. Marked read-only at construction; one instance is
        reused for every occurrence of its kind in a run.
    """
    kind: SegmentKind
    samples: np.ndarray

    def __post_init__(self) -> None:
        if self.samples.dtype != np.int16:
            raise ValueError(f"samples must be int16, got {self.samples.dtype}")
        if self.samples.ndim != 1:
            raise ValueError("samples must be 1-D (mono)")
        self.samples.flags.writeable = False

    def __len__(self) -> int:
        return int(self.samples.shape[0])

    @property
    def is_tone(self) -> bool:
        return self.kind in (SegmentKind.DIT, SegmentKind.DAH)
