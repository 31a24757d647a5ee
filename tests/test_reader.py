import io

import pytest

from e57io.errors import InvalidError, NotImplementedFeatureError, ReadError
from e57io.header import Header
from e57io.paged_reader import PagedReader
from e57io.paged_writer import PagedWriter
from e57io.reader import MAX_XML_SIZE, extract_xml, raw_xml, read_header, validate_crc

XML = b'<?xml version="1.0" encoding="UTF-8"?>\n<e57Root type="Structure"/>\n'


def _build_file(xml: bytes) -> bytes:
    stream = io.BytesIO()
    writer = PagedWriter(stream)
    Header().write(writer)
    xml_offset = writer.physical_position()
    writer.write(xml)
    phys_length = writer.physical_size()
    writer.physical_seek(0)
    Header(
        phys_length=phys_length, phys_xml_offset=xml_offset, xml_length=len(xml)
    ).write(writer)
    writer.flush()
    return stream.getvalue()


def test_raw_xml_returns_section():
    assert raw_xml(io.BytesIO(_build_file(XML))) == XML


def test_raw_xml_spanning_pages():
    xml = b"<a>" + b"x" * 3000 + b"</a>"
    assert raw_xml(io.BytesIO(_build_file(xml))) == xml


def test_read_header_values():
    data = _build_file(XML)
    header = read_header(io.BytesIO(data))
    assert header.signature == b"ASTM-E57"
    assert header.page_size == 1024
    assert header.phys_xml_offset == 48
    assert header.xml_length == len(XML)
    assert header.phys_length == len(data)


def test_read_header_bad_signature():
    data = bytearray(_build_file(XML))
    data[0:8] = b"NOT-E57!"
    with pytest.raises(InvalidError):
        read_header(io.BytesIO(bytes(data)))


def test_validate_crc_valid_file():
    assert validate_crc(io.BytesIO(_build_file(XML))) == 1024


def test_validate_crc_multi_page_file():
    data = _build_file(b"y" * 5000)
    assert len(data) % 1024 == 0
    assert validate_crc(io.BytesIO(data)) == 1024


def test_validate_crc_detects_corruption():
    data = bytearray(_build_file(b"z" * 3000))
    data[2000] ^= 0xFF
    with pytest.raises(ReadError):
        validate_crc(io.BytesIO(bytes(data)))


def test_raw_xml_detects_corruption():
    data = bytearray(_build_file(XML))
    data[60] ^= 0xFF
    with pytest.raises(ReadError):
        raw_xml(io.BytesIO(bytes(data)))


def test_empty_stream_fails():
    with pytest.raises(ReadError):
        validate_crc(io.BytesIO(b""))


def test_invalid_page_size_fails():
    data = bytearray(_build_file(XML))
    data[40:48] = (3).to_bytes(8, "little")
    with pytest.raises(ReadError):
        raw_xml(io.BytesIO(bytes(data)))


def test_extract_xml_too_large():
    reader = PagedReader(io.BytesIO(_build_file(XML)), 1024)
    with pytest.raises(NotImplementedFeatureError):
        extract_xml(reader, 48, MAX_XML_SIZE + 1)


def test_extract_xml_offset_behind_end():
    data = _build_file(XML)
    reader = PagedReader(io.BytesIO(data), 1024)
    with pytest.raises(ReadError):
        extract_xml(reader, len(data), 4)


def test_extract_xml_length_behind_end():
    data = _build_file(XML)
    reader = PagedReader(io.BytesIO(data), 1024)
    with pytest.raises(ReadError):
        extract_xml(reader, 48, len(data))


def test_extract_xml_reads_bytes():
    reader = PagedReader(io.BytesIO(_build_file(XML)), 1024)
    assert extract_xml(reader, 48, len(XML)) == XML