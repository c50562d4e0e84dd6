"""
FLAC encoder (soundfile / libsndfile).

Role in the system:
- Receives the finished PCM16 mono buffer and its AudioFormat.
- Writes a FLAC file at the requested path.
- Optionally decodes the file back and compares it sample-for-sample.

Architectural constraints:
- Called only after synthesis has fully succeeded.
- Writes to a temporary file beside the target and moves it into place on
  success, so a failed encode never leaves a partial file at `path`.
- The finished file gets the usual 0o666 & ~umask mode.
- No retries.

libsndfile only emits the FLAC header on the first frame write, so an empty
buffer is written here as a header-only stream:

    4 bytes  "fLaC"
    4 bytes  metadata block header (last-block flag, type 0, length 34)
    34 bytes STREAMINFO (total_samples = 0)
"""

from __future__ import annotations

import hashlib
import os
import struct
import tempfile
from pathlib import Path

import numpy as np
import soundfile as sf

from constants import (
    AUDIO_FORMAT_V1,
    AudioFormat,
    FLAC_BLOCK_SIZE,
    FLAC_COMPRESSION_LEVEL,
    FLAC_MAX_COMPRESSION_LEVEL,
    FLAC_VERIFY_DEFAULT,
    OUTPUT_FILE_MODE,
)
from errors import AllocationFailure, EncodeFailure

_SUBTYPES: dict[int, str] = {
    16: "PCM_16",
}

FLAC_MARKER = b"fLaC"
STREAMINFO_LAST_BLOCK = 0x80
STREAMINFO_LENGTH = 34


def encode_flac(
    samples: np.ndarray,
    path: str | os.PathLike[str],
    *,
    audio_format: AudioFormat = AUDIO_FORMAT_V1,
    compression_level: int = FLAC_COMPRESSION_LEVEL,
    verify: bool = FLAC_VERIFY_DEFAULT,
) -> Path:
    """
    Encode `samples` as FLAC at `path`.

    Args:
        samples:
            1-D int16 array, one channel, time order.
        path:
            Output file path. Replaced atomically on success.
        audio_format:
            Sample rate / channels / bit depth of `samples`.
        compression_level:
            FLAC level 0-8 (libFLAC scale).
        verify:
            Decode the written file and compare it against `samples`.

    Returns:
        The output path.

    Raises:
        EncodeFailure on unsupported parameters, write errors or a verify
        mismatch.
        AllocationFailure if the encoder runs out of memory.
    """
    if audio_format.channels != 1 or samples.ndim != 1:
        raise EncodeFailure("only mono audio is supported")
    subtype = _SUBTYPES.get(audio_format.bits_per_sample)
    if subtype is None:
        raise EncodeFailure(f"unsupported bits_per_sample={audio_format.bits_per_sample}")
    if not 0 <= compression_level <= FLAC_MAX_COMPRESSION_LEVEL:
        raise EncodeFailure(f"compression_level must be in [0, {FLAC_MAX_COMPRESSION_LEVEL}]")

    target = Path(path)
    directory = target.parent

    try:
        fd, tmp_name = tempfile.mkstemp(suffix=".flac", prefix=".text-to-cw-", dir=directory)
    except OSError as exc:
        raise EncodeFailure(f"cannot create output in {directory}: {exc}") from exc
    os.close(fd)
    tmp_path = Path(tmp_name)

    try:
        if samples.shape[0] == 0:
            tmp_path.write_bytes(empty_stream(audio_format))
        else:
            sf.write(
                str(tmp_path),
                np.asarray(samples, dtype=np.int16),
                audio_format.sample_rate_hz,
                subtype=subtype,
                format="FLAC",
                compression_level=compression_level / FLAC_MAX_COMPRESSION_LEVEL,
            )
        if verify:
            _verify(tmp_path, samples, audio_format)
        os.chmod(tmp_path, OUTPUT_FILE_MODE & ~_current_umask())
        os.replace(tmp_path, target)
    except (sf.SoundFileError, OSError) as exc:
        tmp_path.unlink(missing_ok=True)
        raise EncodeFailure(f"{type(exc).__name__}: {exc}") from exc
    except MemoryError as exc:
        tmp_path.unlink(missing_ok=True)
        raise AllocationFailure(
            f"could not allocate encoder buffers for {samples.shape[0]} samples"
        ) from exc
    except EncodeFailure:
        tmp_path.unlink(missing_ok=True)
        raise

    return target


def empty_stream(audio_format: AudioFormat) -> bytes:
    """
    Return a complete FLAC stream holding zero samples.

    STREAMINFO layout (big-endian):
        16 bits  min block size
        16 bits  max block size
        24 bits  min frame size (0 = unknown)
        24 bits  max frame size (0 = unknown)
        20 bits  sample rate
         3 bits  channels - 1
         5 bits  bits per sample - 1
        36 bits  total samples
       128 bits  MD5 of the decoded audio
    """
    packed_format = (
        (audio_format.sample_rate_hz << 44)
        | ((audio_format.channels - 1) << 41)
        | ((audio_format.bits_per_sample - 1) << 36)
    )
    streaminfo = (
        struct.pack(">HH", FLAC_BLOCK_SIZE, FLAC_BLOCK_SIZE)
        + bytes(6)
        + struct.pack(">Q", packed_format)
        + hashlib.md5(b"").digest()
    )
    block_header = bytes([STREAMINFO_LAST_BLOCK]) + len(streaminfo).to_bytes(3, "big")
    return FLAC_MARKER + block_header + streaminfo


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _verify(path: Path, expected: np.ndarray, audio_format: AudioFormat) -> None:
    decoded, sample_rate = sf.read(str(path), dtype="int16", always_2d=False)

    if sample_rate != audio_format.sample_rate_hz:
        raise EncodeFailure(
            f"verify failed: sample rate {sample_rate} != {audio_format.sample_rate_hz}"
        )
    if decoded.shape[0] != expected.shape[0]:
        raise EncodeFailure(
            f"verify failed: decoded {decoded.shape[0]} samples, expected {expected.shape[0]}"
        )
    if not np.array_equal(decoded, expected):
        raise EncodeFailure("verify failed: decoded samples differ from input")
