"""Binary blob sections stored inside E57 files."""

from __future__ import annotations

import re
import struct
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import BinaryIO

from .errors import InvalidError, ReadError, WriteError
from .paged_reader import PagedReader
from .paged_writer import PagedWriter

_SECTION_HEADER = struct.Struct("<B7xQ")
_BLOB_SECTION_ID = 0
_CHUNK_SIZE = 64 * 1024
_U64_PATTERN = re.compile(r"\+?[0-9]+")


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _parse_u64(text: str, desc: str) -> int:
    if not _U64_PATTERN.fullmatch(text):
        raise InvalidError(desc)
    value = int(text)
    if value >= 1 << 64:
        raise InvalidError(desc)
    return value


def _read_section_length(reader: PagedReader) -> int:
    try:
        data = reader.read_exact(_SECTION_HEADER.size)
    except ReadError as exc:
        raise ReadError("Failed to read blob section header") from exc
    section_id, section_length = _SECTION_HEADER.unpack(data)
    if section_id != _BLOB_SECTION_ID:
        raise InvalidError("Section ID of the blob section header is not 0")
    return section_length


def _write_section_header(writer: PagedWriter, section_length: int) -> None:
    writer.write(_SECTION_HEADER.pack(_BLOB_SECTION_ID, section_length))


@dataclass
class Blob:
    """Location and size of a binary data blob inside an E57 file."""

    offset: int
    """Physical file offset of the blob section."""
    length: int
    """Logical size of the blob data in bytes."""

    @classmethod
    def from_element(cls, element: ET.Element) -> Blob:
        """Build a blob descriptor from an XML element of type Blob."""
        if element.get("type") != "Blob":
            raise InvalidError("The supplied tag is not a blob")
        offset = element.get("fileOffset")
        if offset is None:
            raise InvalidError("Failed to find 'fileOffset' attribute in blob tag")
        offset_value = _parse_u64(offset, "Unable to parse offset as u64")
        length = element.get("length")
        if length is None:
            raise InvalidError("Failed to find 'length' attribute in blob tag")
        length_value = _parse_u64(length, "Unable to parse length as u64")
        return cls(offset_value, length_value)

    @classmethod
    def from_parent(cls, tag_name: str, parent: ET.Element) -> Blob | None:
        """Build a blob from the first child named ``tag_name``, if present."""
        child = next((c for c in parent if _local_name(c.tag) == tag_name), None)
        if child is None:
            return None
        return cls.from_element(child)

    def xml_string(self, tag_name: str) -> str:
        """Serialize the descriptor as an XML element named ``tag_name``."""
        return (
            f'<{tag_name} type="Blob" fileOffset="{self.offset}" '
            f'length="{self.length}"/>\n'
        )

    def read(self, reader: PagedReader, writer: BinaryIO) -> int:
        """Copy the blob data into ``writer`` and return the number of bytes."""
        try:
            reader.seek_physical(self.offset)
        except ReadError as exc:
            raise ReadError("Failed to seek to start offset of blob") from exc
        section_length = _read_section_length(reader)
        if self.length > section_length + _SECTION_HEADER.size:
            raise InvalidError("Blob XML length and blob section header mismatch")
        copied = 0
        try:
            while copied < self.length:
                chunk = reader.read(min(_CHUNK_SIZE, self.length - copied))
                if not chunk:
                    break
                writer.write(chunk)
                copied += len(chunk)
        except (OSError, ReadError) as exc:
            raise ReadError("Failed to read binary blob data") from exc
        return copied

    @classmethod
    def write(cls, writer: PagedWriter, reader: BinaryIO) -> Blob:
        """Append a blob section with all data from ``reader``."""
        start_offset = writer.physical_position()
        _write_section_header(writer, 0)
        length = 0
        try:
            while chunk := reader.read(_CHUNK_SIZE):
                writer.write(chunk)
                length += len(chunk)
        except OSError as exc:
            raise WriteError("Failed to write blob data") from exc
        end_offset = writer.physical_position()
        writer.physical_seek(start_offset)
        _write_section_header(writer, length)
        writer.physical_seek(end_offset)
        return cls(start_offset, length)