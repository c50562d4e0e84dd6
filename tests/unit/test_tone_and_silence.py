# pylint: disable=missing-module-docstring,missing-function-docstring

import math

import numpy as np
import pytest

from audio import silence as silence_module
from audio import tone as tone_module
from audio.segment_bank import SegmentBank
from audio.segments import AudioSegment, SegmentKind
from audio.silence import synthesize_silence
from audio.tone import synthesize_tone
from config import SpeedConfig
from constants import SAMPLE_RATE_HZ, TONE_AMPLITUDE
from errors import AllocationFailure
from morse import timing


def make_dit(wpm: int = 20, frequency_hz: int = 600) -> AudioSegment:
    rise = timing.rise_time(wpm)
    return synthesize_tone(
        timing.dit(wpm), frequency_hz, SAMPLE_RATE_HZ, TONE_AMPLITUDE, rise, rise,
    )


# ---------------------------------------------------------------------
# Tone shape
# ---------------------------------------------------------------------

def test_dit_tone_length_matches_timing():
    seg = make_dit(20)
    assert len(seg) == timing.dit(20) == 2_646
    assert seg.samples.dtype == np.int16


def test_rise_shaping_attenuates_start():
    seg = make_dit(20)
    quarter_rise = timing.rise_time(20) // 4
    mid = len(seg) // 2

    head_peak = np.abs(seg.samples[:quarter_rise].astype(np.int32)).max()
    mid_peak = np.abs(seg.samples[mid - 100 : mid + 100].astype(np.int32)).max()

    assert abs(int(seg.samples[0])) < mid_peak
    assert head_peak < mid_peak
    assert mid_peak > 0.95 * TONE_AMPLITUDE


def test_fall_shaping_attenuates_tail():
    seg = make_dit(20)
    quarter_fall = timing.fall_time(20) // 4
    mid = len(seg) // 2

    tail_peak = np.abs(seg.samples[-quarter_fall:].astype(np.int32)).max()
    mid_peak = np.abs(seg.samples[mid - 100 : mid + 100].astype(np.int32)).max()

    assert tail_peak < mid_peak


def test_unshaped_samples_are_truncated_sine():
    seg = make_dit(20)
    for i in (500, 1001, 1777):
        expected = math.trunc(TONE_AMPLITUDE * math.sin(2 * math.pi * 600 * i / SAMPLE_RATE_HZ))
        assert int(seg.samples[i]) == expected


def test_peak_stays_within_amplitude():
    seg = make_dit(5, frequency_hz=3000)
    assert np.abs(seg.samples.astype(np.int32)).max() <= TONE_AMPLITUDE


def test_zero_envelope_leaves_tone_unshaped():
    seg = synthesize_tone(200, 600, SAMPLE_RATE_HZ, TONE_AMPLITUDE, 0, 0)
    last = 199
    expected = math.trunc(TONE_AMPLITUDE * math.sin(2 * math.pi * 600 * last / SAMPLE_RATE_HZ))
    assert int(seg.samples[last]) == expected


def test_tone_rejects_negative_duration():
    with pytest.raises(ValueError):
        synthesize_tone(-1, 600, SAMPLE_RATE_HZ, TONE_AMPLITUDE, 0, 0)


def test_tone_allocation_failure_is_fatal_error(monkeypatch: pytest.MonkeyPatch):
    class OutOfMemoryNumpy:
        float64 = np.float64
        pi = np.pi

        @staticmethod
        def arange(*_args, **_kwargs):
            raise MemoryError

    monkeypatch.setattr(tone_module, "np", OutOfMemoryNumpy)

    with pytest.raises(AllocationFailure):
        synthesize_tone(100, 600, SAMPLE_RATE_HZ, TONE_AMPLITUDE, 10, 10)


# ---------------------------------------------------------------------
# Silence
# ---------------------------------------------------------------------

def test_silence_is_all_zero():
    seg = synthesize_silence(7_938, kind=SegmentKind.INTER_CHARACTER_SPACE)
    assert len(seg) == 7_938
    assert not seg.samples.any()
    assert seg.kind is SegmentKind.INTER_CHARACTER_SPACE
    assert not seg.is_tone


def test_silence_allocation_failure_is_fatal_error(monkeypatch: pytest.MonkeyPatch):
    class OutOfMemoryNumpy:
        int16 = np.int16

        @staticmethod
        def zeros(*_args, **_kwargs):
            raise MemoryError

    monkeypatch.setattr(silence_module, "np", OutOfMemoryNumpy)

    with pytest.raises(AllocationFailure):
        synthesize_silence(100)


# ---------------------------------------------------------------------
# Segments are immutable and cached per run
# ---------------------------------------------------------------------

def test_segment_samples_are_read_only():
    seg = synthesize_silence(10)
    with pytest.raises(ValueError):
        seg.samples[0] = 1


def test_segment_rejects_wrong_dtype():
    with pytest.raises(ValueError):
        AudioSegment(kind=SegmentKind.DIT, samples=np.zeros(4, dtype=np.float32))


def test_bank_uses_send_and_farnsworth_speeds():
    bank = SegmentBank.build(SpeedConfig.from_values(wpm=20, fwpm=10))

    assert len(bank.dit) == timing.dit(20)
    assert len(bank.dah) == timing.dah(20)
    assert len(bank.intra_character_space) == timing.intra_character_space(20)
    assert len(bank.inter_character_space) == timing.inter_character_space(10)
    assert len(bank.inter_word_space) == timing.inter_word_space(10)

    assert bank.dit.is_tone and bank.dah.is_tone
    assert bank.get(SegmentKind.INTER_WORD_SPACE) is bank.inter_word_space


def test_bank_dah_has_same_envelope_as_dit():
    bank = SegmentBank.build(SpeedConfig.from_values(wpm=20))
    rise = timing.rise_time(20)
    # Both tones start at phase 0 with the same fade-in.
    assert np.array_equal(bank.dit.samples[:rise], bank.dah.samples[:rise])
