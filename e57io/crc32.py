"""CRC-32C (Castagnoli) checksum used for E57 pages."""

from __future__ import annotations


def _build_table() -> tuple[int, ...]:
    table = []
    for i in range(256):
        val = i
        for _ in range(8):
            if val & 1:
                val = (val >> 1) ^ 0x82F63B78
            else:
                val >>= 1
        table.append(val)
    return tuple(table)


_TABLE = _build_table()


def crc32c(data: bytes | bytearray | memoryview) -> int:
    """Return the CRC-32C checksum of ``data`` as an unsigned 32 bit integer."""
    crc = 0xFFFFFFFF
    table = _TABLE
    for byte in bytes(data):
        crc = table[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc ^ 0xFFFFFFFF