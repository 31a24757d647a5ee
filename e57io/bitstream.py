"""Bit level read and write buffers for E57 byte streams."""

from __future__ import annotations

_U64_MASK = (1 << 64) - 1


class ByteStreamReadBuffer:
    """Accumulates bytes and hands out arbitrary runs of up to 64 bits."""

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._offset = 0

    def append(self, data: bytes | bytearray | memoryview) -> None:
        """Append data, dropping bytes that were already consumed completely."""
        consumed = self._offset // 8
        if consumed:
            del self._buffer[:consumed]
            self._offset -= consumed * 8
        self._buffer.extend(data)

    def extract(self, bits: int) -> int | None:
        """Take ``bits`` (at most 64) bits from the stream.

        The result may carry more bits than requested above the requested
        ones; callers must mask them. Returns None if not enough bits remain.
        """
        if self.available() < bits:
            return None
        start = self._offset // 8
        end = (self._offset + bits + 7) // 8
        shift = self._offset % 8
        value = int.from_bytes(self._buffer[start:end], "little") >> shift
        self._offset += bits
        return value & _U64_MASK

    def available(self) -> int:
        """Number of bits that can still be extracted."""
        return len(self._buffer) * 8 - self._offset


class ByteStreamWriteBuffer:
    """Collects bytes and partial bytes into a contiguous bit stream."""

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._last_byte_bit = 0

    def add_bytes(self, data: bytes | bytearray | memoryview) -> None:
        """Append whole bytes at the current bit position."""
        if self._last_byte_bit == 0:
            self._buffer.extend(data)
        else:
            data = bytes(data)
            self.add_bits(data, len(data) * 8)

    def add_bits(self, data: bytes | bytearray | memoryview, bits: int) -> None:
        """Append the lowest ``bits`` bits of ``data`` (LSB first)."""
        data = bytes(data)
        if self._last_byte_bit == 0:
            self._buffer.extend(data[: (bits + 7) // 8])
            self._last_byte_bit = bits % 8
            return
        start_byte = len(self._buffer) - 1
        start_bit = self._last_byte_bit
        for b in range(bits):
            source_set = data[b // 8] & (1 << (b % 8))
            target_mask = (1 << self._last_byte_bit) if source_set else 0
            target_byte = start_byte + (start_bit + b) // 8
            if target_byte >= len(self._buffer):
                self._buffer.append(0)
            self._buffer[target_byte] |= target_mask
            self._last_byte_bit = (self._last_byte_bit + 1) % 8

    def take_full_bytes(self) -> bytes:
        """Remove and return all completely filled bytes."""
        count = self.full_bytes()
        taken = bytes(self._buffer[:count])
        del self._buffer[:count]
        return taken

    def take_all_bytes(self) -> bytes:
        """Remove and return every byte, including a partially filled last one."""
        self._last_byte_bit = 0
        taken = bytes(self._buffer)
        self._buffer.clear()
        return taken

    def full_bytes(self) -> int:
        """Number of completely filled bytes."""
        length = len(self._buffer)
        return length - 1 if self._last_byte_bit != 0 else length

    def all_bytes(self) -> int:
        """Number of bytes including a partially filled last one."""
        return len(self._buffer)