"""
Character emitter: input bytes -> ordered segment appends.

State machine:

    START --(first byte)--> BETWEEN_CHARACTERS --(every later byte)--> itself

Per byte, in stream order:
1. If the state is BETWEEN_CHARACTERS, append an inter-character space.
2. For each symbol k of the byte's sequence: append an intra-character space
   if k > 0, then the symbol's segment
   (DOT -> dit, DASH -> dah, WORD_SPACE -> inter-word space).

A byte with an empty sequence appends no tone, but the inter-character space
from step 1 still stands. No space is appended after the last byte.
"""

from __future__ import annotations

from enum import Enum
from typing import Final, Iterable, Iterator, Mapping, Protocol

from audio.segment_bank import SegmentBank
from audio.segments import AudioSegment, SegmentKind
from morse.symbols import Symbol, lookup


class EmitterState(str, Enum):
    START = "START"
    BETWEEN_CHARACTERS = "BETWEEN_CHARACTERS"


class SegmentSink(Protocol):
    """Anything that accepts segments in time order (SampleAssembler)."""

    def append(self, segment: AudioSegment) -> None: ...


SYMBOL_SEGMENTS: Final[Mapping[Symbol, SegmentKind]] = {
    Symbol.DOT: SegmentKind.DIT,
    Symbol.DASH: SegmentKind.DAH,
    Symbol.WORD_SPACE: SegmentKind.INTER_WORD_SPACE,
}


class CharacterEmitter:
    """
    Drives the symbol table and segment bank for one input stream.

    The stream may be fed in several chunks; state carries across feed()
    calls, so chunking never adds or drops an inter-character space.
    """

    def __init__(self, *, bank: SegmentBank, sink: SegmentSink) -> None:
        self._bank = bank
        self._sink = sink
        self._state: EmitterState = EmitterState.START
        self._bytes_seen: int = 0

    @property
    def state(self) -> EmitterState:
        return self._state

    @property
    def bytes_seen(self) -> int:
        return self._bytes_seen

    def feed(self, data: Iterable[int]) -> None:
        """
        Append the segments for every byte in `data` to the sink.

        Raises:
            AllocationFailure propagated from the sink.
        """
        for segment in self.segments(data):
            self._sink.append(segment)

    def segments(self, data: Iterable[int]) -> Iterator[AudioSegment]:
        """
        Yield the segments for `data` in order, advancing the state machine.

        Does not touch the sink.
        """
        for byte_value in data:
            if self._state is EmitterState.BETWEEN_CHARACTERS:
                yield self._bank.inter_character_space
            else:
                self._state = EmitterState.BETWEEN_CHARACTERS
            self._bytes_seen += 1

            for k, symbol in enumerate(lookup(byte_value)):
                if k > 0:
                    yield self._bank.intra_character_space
                yield self._bank.get(SYMBOL_SEGMENTS[symbol])
