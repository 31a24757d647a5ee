import io
import struct

import pytest

from e57io.errors import InvalidError, ReadError, WriteError
from e57io.packet import (
    DataPacketHeader,
    IgnoredPacketHeader,
    IndexPacketHeader,
    read_packet_header,
)


def test_data_header_write_layout():
    out = io.BytesIO()
    DataPacketHeader(comp_restart_flag=False, packet_length=64, bytestream_count=3).write(out)
    data = out.getvalue()
    assert len(data) == DataPacketHeader.SIZE
    assert data[0] == 1
    assert struct.unpack("<HH", data[2:6]) == (63, 3)


@pytest.mark.parametrize("flag", [True, False])
def test_data_header_round_trip(flag):
    header = DataPacketHeader(comp_restart_flag=flag, packet_length=1024, bytestream_count=6)
    out = io.BytesIO()
    header.write(out)
    out.seek(0)
    assert read_packet_header(out) == header


def test_data_header_zero_bytestreams():
    data = struct.pack("<BBHH", 1, 0, 63, 0)
    with pytest.raises(InvalidError):
        read_packet_header(io.BytesIO(data))


def test_data_header_unaligned():
    data = struct.pack("<BBHH", 1, 0, 62, 1)
    with pytest.raises(InvalidError):
        read_packet_header(io.BytesIO(data))


def test_data_header_unencodable_length():
    header = DataPacketHeader(comp_restart_flag=False, packet_length=0, bytestream_count=1)
    with pytest.raises(WriteError):
        header.write(io.BytesIO())


def test_index_header():
    data = struct.pack("<BxHHB9x", 0, 31, 5, 2)
    header = read_packet_header(io.BytesIO(data))
    assert header == IndexPacketHeader(packet_length=32, entry_count=5, index_level=2)


def test_index_header_unaligned():
    data = struct.pack("<BxHHB9x", 0, 30, 5, 2)
    with pytest.raises(InvalidError):
        read_packet_header(io.BytesIO(data))


def test_ignored_header():
    data = struct.pack("<BxH", 2, 15)
    assert read_packet_header(io.BytesIO(data)) == IgnoredPacketHeader(packet_length=16)


def test_ignored_header_unaligned():
    data = struct.pack("<BxH", 2, 16)
    with pytest.raises(InvalidError):
        read_packet_header(io.BytesIO(data))


def test_unknown_packet_type():
    with pytest.raises(InvalidError):
        read_packet_header(io.BytesIO(b"\x07" + bytes(15)))


def test_truncated_header():
    with pytest.raises(ReadError):
        read_packet_header(io.BytesIO(b"\x01\x00"))


def test_empty_stream():
    with pytest.raises(ReadError):
        read_packet_header(io.BytesIO(b""))