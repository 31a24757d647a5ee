# e57io

`e57io` reads and writes the low-level building blocks of ASTM E57 files, the
format used to exchange 3D point clouds and images from laser scanners. It
uses only the standard library.

## What it covers

- **File header** (`e57io.header`): `Header.read(stream)` reads the 48-byte
  header at the start of an E57 file and checks the `ASTM-E57` signature,
  version 1.0 and the page size of 1024 bytes. `Header.write(stream)` writes
  it; `Header()` gives a header with those defaults and zero lengths.
- **Paged CRC layer**: an E57 file is made of pages, each ending with a
  big-endian CRC-32C of its payload.
  - `e57io.paged_reader.PagedReader(stream, page_size)` exposes the logical
    data of a file. It checks each page's checksum when it first reads from
    it and offers `read`, `read_exact`, `read_all`, `seek`, `tell`,
    `seek_physical` (physical offset in, logical offset out) and `align`.
  - `e57io.paged_writer.PagedWriter(stream)` takes an empty stream opened for
    reading, writing and seeking, and writes 1024-byte pages with checksums.
    It offers `write`, `flush`, `close`, `physical_position`,
    `physical_seek`, `physical_size` and `align`, and works as a context
    manager. Closing flushes the pending page but leaves the stream open.
- **Checksums**: `e57io.crc32.crc32c(data)` computes the Castagnoli CRC.
- **Binary sections**:
  - `e57io.cv_section.CompressedVectorSectionHeader` reads and writes the
    32-byte compressed vector section header.
  - `e57io.packet` has `IndexPacketHeader`, `DataPacketHeader` and
    `IgnoredPacketHeader`, and `read_packet_header(stream)`, which reads the
    type byte and then the matching header.
  - `e57io.blob.Blob` describes a blob section by offset and length. It can
    be built from an XML element (`from_element`, `from_parent`), turned back
    into XML (`xml_string`), copied out of a `PagedReader` (`read`) and
    appended through a `PagedWriter` (`Blob.write`).
- **Bit streams**: `e57io.bitstream.ByteStreamReadBuffer` and
  `ByteStreamWriteBuffer` handle values that are not byte-aligned.
  `e57io.bitpack` has `unpack_doubles`, `unpack_singles` and
  `unpack_ints(stream, minimum, maximum)`, each of which drains a read buffer
  into a list.
- **XML metadata helpers**: `e57io.date_time.DateTime` holds a GPS time and
  an atomic clock flag and converts to and from XML.
  `e57io.extension.Extension.from_xml(xml)` lists the named namespaces
  declared on the root element, and `validate_name(name)` checks a name for
  use as a namespace or attribute.
- **File-level helpers** (`e57io.reader`): `read_header`, `validate_crc`,
  `raw_xml` and `extract_xml`.

## What it does not do

The package works at the level of headers, pages, sections and bit streams.
It does not parse the XML section into point cloud or image descriptors, it
has no iterator over the points of a point cloud, and it does not assemble a
complete E57 file with its XML section. Those steps are left to the caller.

## Installation

```
pip install e57io
```

## Quick look at a file

```python
from e57io.reader import read_header, raw_xml, validate_crc

with open("scan.e57", "rb") as stream:
    header = read_header(stream)
    print(header.page_size, header.xml_length)

with open("scan.e57", "rb") as stream:
    page_size = validate_crc(stream)   # raises ReadError if a checksum is wrong

with open("scan.e57", "rb") as stream:
    xml_bytes = raw_xml(stream)        # the XML section, CRC-checked
    print(xml_bytes.decode("utf-8"))
```

## Writing pages

```python
from e57io.paged_writer import PagedWriter

with open("out.bin", "w+b") as stream:
    with PagedWriter(stream) as writer:
        writer.write(b"\x00\x01\x02")
    # the file now holds one 1024-byte page ending in its CRC-32C
```

## Checksums and bit streams

```python
from e57io.crc32 import crc32c
from e57io.bitstream import ByteStreamReadBuffer

crc32c(b"")              # 0

stream = ByteStreamReadBuffer()
stream.append(bytes([23, 42, 13]))
stream.extract(2)
stream.available()       # 22
```

## Errors

Problems with E57 data are reported as subclasses of `e57io.errors.E57Error`:

| Exception                    | Meaning                                                 |
|------------------------------|---------------------------------------------------------|
| `InvalidError`               | the content does not follow the E57 specification       |
| `ReadError`                  | reading failed, for example on a bad checksum or a truncated file |
| `WriteError`                 | writing failed                                          |
| `NotImplementedFeatureError` | the file uses something not supported, such as an XML section over 10 MiB |
| `InternalError`              | an unexpected internal inconsistency                    |

```python
from e57io.errors import E57Error
from e57io.reader import validate_crc

try:
    with open("damaged.e57", "rb") as stream:
        validate_crc(stream)
except E57Error as exc:
    print(f"broken file: {exc}")
```

## Running the tests

```
pip install -e ".[test]"
pytest
```