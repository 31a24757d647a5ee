"""Headers of the packets inside compressed vector sections."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO, ClassVar, Union

from .errors import InvalidError, ReadError, WriteError

_INDEX = struct.Struct("<xHHB9x")
_DATA = struct.Struct("<BHH")
_IGNORED = struct.Struct("<xH")
_DATA_OUT = struct.Struct("<BBHH")

INDEX_PACKET = 0
DATA_PACKET = 1
IGNORED_PACKET = 2


def _read_exact(reader: BinaryIO, size: int, desc: str) -> bytes:
    data = bytearray()
    try:
        while len(data) < size:
            chunk = reader.read(size - len(data))
            if not chunk:
                break
            data += chunk
    except (OSError, ReadError) as exc:
        raise ReadError(desc) from exc
    if len(data) < size:
        raise ReadError(desc)
    return bytes(data)


@dataclass(frozen=True)
class IndexPacketHeader:
    """Header of an index packet."""

    packet_length: int
    entry_count: int
    index_level: int

    @classmethod
    def read(cls, reader: BinaryIO) -> IndexPacketHeader:
        """Read the header after its type byte has been consumed."""
        data = _read_exact(reader, _INDEX.size, "Failed to read index packet header")
        length, entry_count, index_level = _INDEX.unpack(data)
        packet_length = length + 1
        if packet_length % 4 != 0:
            raise InvalidError(
                "Index packet length is not aligned and a multiple of four"
            )
        return cls(packet_length, entry_count, index_level)


@dataclass(frozen=True)
class DataPacketHeader:
    """Header of a data packet."""

    SIZE: ClassVar[int] = _DATA_OUT.size

    comp_restart_flag: bool
    packet_length: int
    bytestream_count: int

    @classmethod
    def read(cls, reader: BinaryIO) -> DataPacketHeader:
        """Read the header after its type byte has been consumed."""
        data = _read_exact(reader, _DATA.size, "Failed to read data packet header")
        flags, length, bytestream_count = _DATA.unpack(data)
        packet_length = length + 1
        if packet_length % 4 != 0:
            raise InvalidError(
                "Data packet length is not aligned and a multiple of four"
            )
        if bytestream_count == 0:
            raise InvalidError("A byte stream count of 0 is not allowed")
        return cls(bool(flags & 1), packet_length, bytestream_count)

    def write(self, writer: BinaryIO) -> None:
        """Write the complete header including its type byte."""
        if not 1 <= self.packet_length <= 0x10000:
            raise WriteError(
                f"Data packet length {self.packet_length} cannot be encoded"
            )
        try:
            data = _DATA_OUT.pack(
                DATA_PACKET,
                1 if self.comp_restart_flag else 0,
                self.packet_length - 1,
                self.bytestream_count,
            )
            writer.write(data)
        except (OSError, struct.error) as exc:
            raise WriteError("Failed to write data packet header") from exc


@dataclass(frozen=True)
class IgnoredPacketHeader:
    """Header of a packet whose content is to be skipped."""

    packet_length: int

    @classmethod
    def read(cls, reader: BinaryIO) -> IgnoredPacketHeader:
        """Read the header after its type byte has been consumed."""
        data = _read_exact(
            reader, _IGNORED.size, "Failed to read ignore packet header"
        )
        (length,) = _IGNORED.unpack(data)
        packet_length = length + 1
        if packet_length % 4 != 0:
            raise InvalidError(
                "Ignored packet length is not aligned and a multiple of four"
            )
        return cls(packet_length)


PacketHeader = Union[IndexPacketHeader, DataPacketHeader, IgnoredPacketHeader]

_READERS = {
    INDEX_PACKET: IndexPacketHeader.read,
    DATA_PACKET: DataPacketHeader.read,
    IGNORED_PACKET: IgnoredPacketHeader.read,
}


def read_packet_header(reader: BinaryIO) -> PacketHeader:
    """Read the type byte of the next packet and then its header."""
    packet_type = _read_exact(reader, 1, "Failed to read packet type ID")[0]
    read = _READERS.get(packet_type)
    if read is None:
        raise InvalidError(
            "Found unknown packet ID when trying to read packet header"
        )
    return read(reader)