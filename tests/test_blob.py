import io
import xml.etree.ElementTree as ET

import pytest

from e57io.blob import Blob
from e57io.errors import InvalidError
from e57io.paged_reader import PagedReader
from e57io.paged_writer import PAGE_SIZE, PagedWriter


def write_blobs(*payloads):
    stream = io.BytesIO()
    writer = PagedWriter(stream)
    blobs = [Blob.write(writer, io.BytesIO(p)) for p in payloads]
    writer.close()
    return stream, blobs


def read_blob(stream, blob):
    reader = PagedReader(stream, PAGE_SIZE)
    out = io.BytesIO()
    count = blob.read(reader, out)
    return count, out.getvalue()


def test_xml_string():
    assert (
        Blob(48, 1073).xml_string("pngImage")
        == '<pngImage type="Blob" fileOffset="48" length="1073"/>\n'
    )


def test_xml_round_trip():
    blob = Blob(116, 7722)
    element = ET.fromstring(blob.xml_string("jpegImage"))
    assert Blob.from_element(element) == blob


def test_from_element_wrong_type():
    element = ET.fromstring('<x type="Float" fileOffset="1" length="2"/>')
    with pytest.raises(InvalidError):
        Blob.from_element(element)


def test_from_element_missing_offset():
    element = ET.fromstring('<x type="Blob" length="2"/>')
    with pytest.raises(InvalidError):
        Blob.from_element(element)


def test_from_element_bad_length():
    element = ET.fromstring('<x type="Blob" fileOffset="1" length="abc"/>')
    with pytest.raises(InvalidError):
        Blob.from_element(element)


def test_from_element_negative_offset():
    element = ET.fromstring('<x type="Blob" fileOffset="-1" length="2"/>')
    with pytest.raises(InvalidError):
        Blob.from_element(element)


def test_from_parent_with_namespace():
    parent = ET.fromstring(
        '<rep xmlns="http://example.com/e57">'
        '<imageMask type="Blob" fileOffset="7884" length="1073"/></rep>'
    )
    assert Blob.from_parent("imageMask", parent) == Blob(7884, 1073)
    assert Blob.from_parent("pngImage", parent) is None


def test_write_read_round_trip():
    payload = b"hello blob"
    stream, (blob,) = write_blobs(payload)
    assert blob.offset == 0
    assert blob.length == len(payload)
    count, data = read_blob(stream, blob)
    assert count == len(payload)
    assert data == payload


def test_multiple_blobs_across_pages():
    first = bytes(range(256)) * 12
    second = b"second"
    stream, (a, b) = write_blobs(first, second)
    assert len(stream.getvalue()) % PAGE_SIZE == 0
    assert b.offset > a.offset
    assert read_blob(stream, a) == (len(first), first)
    assert read_blob(stream, b) == (len(second), second)


def test_empty_blob():
    stream, (blob,) = write_blobs(b"")
    assert blob.length == 0
    assert read_blob(stream, blob) == (0, b"")


def test_length_mismatch():
    stream, (blob,) = write_blobs(b"0123456789")
    too_long = Blob(blob.offset, blob.length + 100)
    with pytest.raises(InvalidError):
        read_blob(stream, too_long)


def test_wrong_section_id():
    stream = io.BytesIO()
    writer = PagedWriter(stream)
    writer.write(b"\x05" + bytes(31))
    writer.close()
    with pytest.raises(InvalidError):
        read_blob(stream, Blob(0, 4))