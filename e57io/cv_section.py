"""Header of a compressed vector binary section."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO, ClassVar

from .errors import InvalidError, ReadError, WriteError

_LAYOUT = struct.Struct("<B7xQQQ")
_SECTION_ID = 1


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


@dataclass
class CompressedVectorSectionHeader:
    """Section header describing where compressed vector data is stored."""

    SIZE: ClassVar[int] = _LAYOUT.size

    section_length: int = 0
    data_offset: int = 0
    index_offset: int = 0

    @classmethod
    def read(cls, reader: BinaryIO) -> CompressedVectorSectionHeader:
        """Read and validate a section header from a binary stream."""
        data = _read_exact(
            reader, cls.SIZE, "Failed to read compressed vector section header"
        )
        section_id, length, data_offset, index_offset = _LAYOUT.unpack(data)
        if section_id != _SECTION_ID:
            raise InvalidError(
                "Section ID of the compressed vector section header is not 1"
            )
        if length % 4 != 0:
            raise InvalidError("Section length is not aligned and a multiple of four")
        return cls(length, data_offset, index_offset)

    def write(self, writer: BinaryIO) -> None:
        """Write the section header to a binary stream."""
        try:
            data = _LAYOUT.pack(
                _SECTION_ID, self.section_length, self.data_offset, self.index_offset
            )
            writer.write(data)
        except (OSError, struct.error) as exc:
            raise WriteError(
                "Failed to write compressed vector section header"
            ) from exc