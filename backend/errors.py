"""
Fatal error types for a text-to-cw run.

Every error here ends the run: the CLI reports it once and exits with a
failure status. Nothing is retried and no partial audio reaches the encoder.

Unsupported characters and out-of-range speed/tone values are NOT errors
(they are silent no-tone bytes and clamped defaults respectively).
"""

from __future__ import annotations


class TextToCwError(Exception):
    """Base class for all fatal run errors."""


class AllocationFailure(TextToCwError):
    """
    Raised when sample storage for a segment or the output buffer cannot be
    allocated.

    The run is aborted; the partially assembled buffer is discarded.
    """


class InputUnavailable(TextToCwError):
    """
    Raised when the input byte source cannot be opened or read.
    """


class EncodeFailure(TextToCwError):
    """
    Raised when the FLAC encoder cannot produce the output file, or when the
    verify pass decodes samples that differ from the ones handed to it.
    """
