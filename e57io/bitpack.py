"""Decoding of packed numeric values from a bit stream."""

from __future__ import annotations

import struct

from .bitstream import ByteStreamReadBuffer
from .errors import InvalidError

_DOUBLE = struct.Struct("<d")
_SINGLE = struct.Struct("<f")


def unpack_doubles(stream: ByteStreamReadBuffer) -> list[float]:
    """Drain all complete 64 bit IEEE doubles from the stream."""
    values = []
    while (data := stream.extract(64)) is not None:
        values.append(_DOUBLE.unpack(data.to_bytes(8, "little"))[0])
    return values


def unpack_singles(stream: ByteStreamReadBuffer) -> list[float]:
    """Drain all complete 32 bit IEEE floats from the stream."""
    values = []
    while (data := stream.extract(32)) is not None:
        values.append(_SINGLE.unpack((data & 0xFFFFFFFF).to_bytes(4, "little"))[0])
    return values


def unpack_ints(stream: ByteStreamReadBuffer, minimum: int, maximum: int) -> list[int]:
    """Drain all complete integers packed for the range ``minimum..=maximum``.

    Each value occupies just enough bits to hold ``maximum - minimum`` and is
    stored as an offset from ``minimum``.
    """
    value_range = maximum - minimum
    if value_range <= 0:
        raise InvalidError(
            f"Integer range {minimum}..{maximum} is too small for bit packing"
        )
    bits = value_range.bit_length()
    mask = (1 << bits) - 1
    values = []
    while (raw := stream.extract(bits)) is not None:
        values.append((raw & mask) + minimum)
    return values