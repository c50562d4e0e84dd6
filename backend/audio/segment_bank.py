"""
Per-run cache of the five reusable segments.

Built once from a finalized SpeedConfig, then only read. Every occurrence of
a dit, dah or gap in the output reuses the same AudioSegment.
"""

from __future__ import annotations

from dataclasses import dataclass

from audio.segments import AudioSegment, SegmentKind
from audio.silence import synthesize_silence
from audio.tone import synthesize_tone
from config import SpeedConfig
from constants import TONE_AMPLITUDE
from morse import timing


@dataclass(frozen=True)
class SegmentBank:
    dit: AudioSegment
    dah: AudioSegment
    intra_character_space: AudioSegment
    inter_character_space: AudioSegment
    inter_word_space: AudioSegment

    @staticmethod
    def build(speed: SpeedConfig) -> SegmentBank:
        """
        Synthesize all five segments for `speed`.

        Tones and the intra-character space use speed.wpm; the
        inter-character and inter-word spaces use speed.fwpm.

        Raises:
            AllocationFailure if any segment cannot be allocated.
        """
        sr = speed.sample_rate_hz
        rise = timing.rise_time(speed.wpm, sample_rate_hz=sr)
        fall = timing.fall_time(speed.wpm, sample_rate_hz=sr)

        def tone(duration: int, kind: SegmentKind) -> AudioSegment:
            return synthesize_tone(
                duration,
                speed.tone_frequency_hz,
                sr,
                TONE_AMPLITUDE,
                rise,
                fall,
                kind=kind,
            )

        return SegmentBank(
            dit=tone(timing.dit(speed.wpm, sample_rate_hz=sr), SegmentKind.DIT),
            dah=tone(timing.dah(speed.wpm, sample_rate_hz=sr), SegmentKind.DAH),
            intra_character_space=synthesize_silence(
                timing.intra_character_space(speed.wpm, sample_rate_hz=sr),
                kind=SegmentKind.INTRA_CHARACTER_SPACE,
            ),
            inter_character_space=synthesize_silence(
                timing.inter_character_space(speed.fwpm, sample_rate_hz=sr),
                kind=SegmentKind.INTER_CHARACTER_SPACE,
            ),
            inter_word_space=synthesize_silence(
                timing.inter_word_space(speed.fwpm, sample_rate_hz=sr),
                kind=SegmentKind.INTER_WORD_SPACE,
            ),
        )

    def get(self, kind: SegmentKind) -> AudioSegment:
        """Return the cached segment for `kind`."""
        return getattr(self, kind.value)
