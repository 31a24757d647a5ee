"""Low level access to the header and XML section of E57 files."""

from __future__ import annotations

import os
from typing import BinaryIO

from .errors import NotImplementedFeatureError, ReadError
from .header import Header
from .paged_reader import PagedReader

MAX_XML_SIZE = 1024 * 1024 * 10

_PAGE_SIZE_OFFSET = 40
_XML_OFFSET_OFFSET = 24
_XML_LENGTH_OFFSET = 32


def _get_u64(stream: BinaryIO, offset: int, name: str) -> int:
    try:
        stream.seek(offset, os.SEEK_SET)
    except OSError as exc:
        raise ReadError(f"Cannot seek to {name} offset") from exc
    try:
        data = stream.read(8)
    except OSError as exc:
        raise ReadError(f"Cannot read {name} bytes") from exc
    if len(data) != 8:
        raise ReadError(f"Cannot read {name} bytes")
    return int.from_bytes(data, "little")


def _paged_reader(stream: BinaryIO, page_size: int) -> PagedReader:
    try:
        return PagedReader(stream, page_size)
    except ReadError as exc:
        raise ReadError("Failed creating paged CRC reader") from exc


def extract_xml(reader: PagedReader, offset: int, length: int) -> bytes:
    """Read ``length`` logical bytes of XML starting at physical ``offset``."""
    if length > MAX_XML_SIZE:
        raise NotImplementedFeatureError(
            f"XML sections larger than {MAX_XML_SIZE} bytes are not supported"
        )
    try:
        reader.seek_physical(offset)
    except ReadError as exc:
        raise ReadError("Cannot seek to XML offset") from exc
    try:
        return reader.read_exact(length)
    except ReadError as exc:
        raise ReadError("Failed to read XML data") from exc


def validate_crc(stream: BinaryIO) -> int:
    """Check the checksum of every page and return the page size.

    Only the page size is taken from the file header; nothing else is
    parsed or validated.
    """
    page_size = _get_u64(stream, _PAGE_SIZE_OFFSET, "page size")
    reader = _paged_reader(stream, page_size)
    page = 0
    while True:
        try:
            chunk = reader.read(page_size)
        except ReadError as exc:
            raise ReadError(f"Failed to validate CRC for page {page}") from exc
        if not chunk:
            return page_size
        page += 1


def raw_xml(stream: BinaryIO) -> bytes:
    """Return the unparsed XML section, checking only the CRC of its pages."""
    page_size = _get_u64(stream, _PAGE_SIZE_OFFSET, "page size")
    xml_offset = _get_u64(stream, _XML_OFFSET_OFFSET, "XML offset")
    xml_length = _get_u64(stream, _XML_LENGTH_OFFSET, "XML length")
    reader = _paged_reader(stream, page_size)
    return extract_xml(reader, xml_offset, xml_length)


def read_header(stream: BinaryIO) -> Header:
    """Read and validate the file header at the start of ``stream``."""
    try:
        stream.seek(0, os.SEEK_SET)
    except OSError as exc:
        raise ReadError("Cannot seek to start of file") from exc
    return Header.read(stream)