"""
One-call synthesis pipeline.

    SpeedConfig + input bytes -> RenderResult (samples + format)

Nothing here touches files; the CLI reads the input and hands the result to
the encoder.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from audio.assembler import SampleAssembler
from audio.segment_bank import SegmentBank
from config import SpeedConfig
from constants import AudioFormat, CHANNELS, BITS_PER_SAMPLE, samples_to_seconds
from morse.emitter import CharacterEmitter


@dataclass(frozen=True, eq=False)
class RenderResult:
    """
    Finished output of a run, ready for the encoder.

    samples:
        Read-only int16 mono samples in time order.
    audio_format:
        Sample rate, channel count and bit depth of `samples`.
    stats:
        Assembler snapshot (sample count, per-kind segment counts).
    """
    samples: np.ndarray
    audio_format: AudioFormat
    stats: dict[str, int]

    @property
    def total_samples(self) -> int:
        return int(self.samples.shape[0])

    @property
    def duration_s(self) -> float:
        return samples_to_seconds(self.total_samples, self.audio_format.sample_rate_hz)


def render(data: bytes, speed: SpeedConfig) -> RenderResult:
    """
    Synthesize the Morse audio for `data`.

    Raises:
        AllocationFailure if any segment or the buffer cannot be allocated.
        No partial result is returned in that case.
    """
    bank = SegmentBank.build(speed)
    assembler = SampleAssembler()
    emitter = CharacterEmitter(bank=bank, sink=assembler)

    emitter.feed(data)

    return RenderResult(
        samples=assembler.samples(),
        audio_format=AudioFormat(
            sample_rate_hz=speed.sample_rate_hz,
            channels=CHANNELS,
            bits_per_sample=BITS_PER_SAMPLE,
        ),
        stats=assembler.snapshot(),
    )
