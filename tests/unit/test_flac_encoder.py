# pylint: disable=missing-module-docstring,missing-function-docstring

import os
import stat
from pathlib import Path

import numpy as np
import pytest
import soundfile as sf

from audio import flac_encoder
from audio.flac_encoder import empty_stream, encode_flac
from config import SpeedConfig
from constants import AudioFormat
from errors import AllocationFailure, EncodeFailure
from morse.render import render


def sos_samples() -> np.ndarray:
    return render(b"SOS", SpeedConfig.from_values(wpm=20)).samples


# ---------------------------------------------------------------------
# Successful encode
# ---------------------------------------------------------------------

def test_writes_mono_16bit_flac(tmp_path: Path):
    out = tmp_path / "sos.flac"
    samples = sos_samples()

    encode_flac(samples, out)

    info = sf.info(str(out))
    assert info.format == "FLAC"
    assert info.subtype == "PCM_16"
    assert info.samplerate == 44_100
    assert info.channels == 1
    assert info.frames == samples.shape[0]


def test_decoded_samples_match_input(tmp_path: Path):
    out = tmp_path / "sos.flac"
    samples = sos_samples()

    encode_flac(samples, out, verify=False)

    decoded, _ = sf.read(str(out), dtype="int16")
    assert np.array_equal(decoded, samples)


def test_leaves_no_temporary_files(tmp_path: Path):
    encode_flac(sos_samples(), tmp_path / "sos.flac")

    assert [p.name for p in tmp_path.iterdir()] == ["sos.flac"]


# ---------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------

def test_missing_directory_is_encode_failure(tmp_path: Path):
    out = tmp_path / "missing" / "sos.flac"

    with pytest.raises(EncodeFailure):
        encode_flac(sos_samples(), out)

    assert not out.exists()


def test_rejects_stereo_format(tmp_path: Path):
    with pytest.raises(EncodeFailure):
        encode_flac(sos_samples(), tmp_path / "x.flac", audio_format=AudioFormat(channels=2))


def test_rejects_unsupported_bit_depth(tmp_path: Path):
    with pytest.raises(EncodeFailure):
        encode_flac(sos_samples(), tmp_path / "x.flac", audio_format=AudioFormat(bits_per_sample=24))


def test_rejects_bad_compression_level(tmp_path: Path):
    with pytest.raises(EncodeFailure):
        encode_flac(sos_samples(), tmp_path / "x.flac", compression_level=9)


def test_verify_mismatch_discards_output(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    out = tmp_path / "sos.flac"
    samples = sos_samples()

    real_read = sf.read

    def corrupt_read(path, **kwargs):
        data, rate = real_read(path, **kwargs)
        data = data.copy()
        data[0] += 1
        return data, rate

    monkeypatch.setattr(flac_encoder.sf, "read", corrupt_read)

    with pytest.raises(EncodeFailure, match="verify failed"):
        encode_flac(samples, out, verify=True)

    assert not out.exists()
    assert list(tmp_path.iterdir()) == []


def test_encoder_memory_error_is_allocation_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    out = tmp_path / "sos.flac"

    def out_of_memory(*_args, **_kwargs):
        raise MemoryError

    monkeypatch.setattr(flac_encoder.sf, "write", out_of_memory)

    with pytest.raises(AllocationFailure):
        encode_flac(sos_samples(), out)

    assert list(tmp_path.iterdir()) == []


# ---------------------------------------------------------------------
# Empty input
# ---------------------------------------------------------------------

def test_empty_buffer_gives_valid_zero_length_flac(tmp_path: Path):
    out = tmp_path / "empty.flac"

    encode_flac(np.zeros(0, dtype=np.int16), out)

    info = sf.info(str(out))
    assert info.format == "FLAC"
    assert info.samplerate == 44_100
    assert info.channels == 1
    assert info.frames == 0


def test_empty_buffer_without_verify_still_has_header(tmp_path: Path):
    out = tmp_path / "empty.flac"

    encode_flac(np.zeros(0, dtype=np.int16), out, verify=False)

    assert out.read_bytes().startswith(b"fLaC")
    assert sf.info(str(out)).frames == 0


def test_empty_stream_layout():
    stream = empty_stream(AudioFormat())

    assert len(stream) == 4 + 4 + 34
    assert stream[:4] == b"fLaC"
    # last-block flag + STREAMINFO type, then 24-bit length
    assert stream[4:8] == bytes([0x80, 0, 0, 34])


# ---------------------------------------------------------------------
# File mode
# ---------------------------------------------------------------------

@pytest.fixture
def umask_022():
    previous = os.umask(0o022)
    try:
        yield
    finally:
        os.umask(previous)


@pytest.mark.usefixtures("umask_022")
def test_output_mode_follows_umask(tmp_path: Path):
    out = tmp_path / "sos.flac"

    encode_flac(sos_samples(), out)

    assert stat.S_IMODE(out.stat().st_mode) == 0o644


@pytest.mark.usefixtures("umask_022")
def test_empty_output_mode_follows_umask(tmp_path: Path):
    out = tmp_path / "empty.flac"

    encode_flac(np.zeros(0, dtype=np.int16), out)

    assert stat.S_IMODE(out.stat().st_mode) == 0o644
