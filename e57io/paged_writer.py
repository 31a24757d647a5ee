"""Writer that lays data out in E57 pages with trailing CRC checksums."""

from __future__ import annotations

import os
from typing import BinaryIO

from .crc32 import crc32c
from .errors import ReadError, WriteError

PAGE_SIZE = 1024
CRC_SIZE = 4
PAGE_PAYLOAD_SIZE = PAGE_SIZE - CRC_SIZE


class PagedWriter:
    """Writes a logical byte stream into pages that each end with a CRC-32C.

    The underlying stream must be empty, readable, writable and seekable.
    Data of the current page is kept in memory until the page is full or
    the writer is flushed. Closing the writer flushes pending data but
    leaves the underlying stream open.
    """

    def __init__(self, stream: BinaryIO) -> None:
        try:
            end = stream.seek(0, os.SEEK_END)
        except OSError as exc:
            raise ReadError("Unable to seek length of writer") from exc
        if end != 0:
            raise WriteError("Supplied writer is not empty")
        self._stream = stream
        self._offset = 0
        self._page = bytearray(PAGE_SIZE)

    def __enter__(self) -> PagedWriter:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _seal_page(self) -> None:
        checksum = crc32c(self._page[:PAGE_PAYLOAD_SIZE])
        self._page[PAGE_PAYLOAD_SIZE:] = checksum.to_bytes(CRC_SIZE, "big")

    def _populate_existing_data(self) -> None:
        """Load the page at the stream position, padding missing bytes with zeros."""
        data = bytearray()
        while len(data) < PAGE_SIZE:
            chunk = self._stream.read(PAGE_SIZE - len(data))
            if not chunk:
                break
            data += chunk
        self._page[: len(data)] = data
        self._page[len(data) :] = bytes(PAGE_SIZE - len(data))

    def write(self, data: bytes | bytearray | memoryview) -> int:
        """Write all of ``data`` and return the number of bytes written."""
        view = memoryview(bytes(data))
        total = len(view)
        try:
            while view:
                count = min(len(view), PAGE_PAYLOAD_SIZE - self._offset)
                self._page[self._offset : self._offset + count] = view[:count]
                self._offset += count
                view = view[count:]
                if self._offset == PAGE_PAYLOAD_SIZE:
                    self._seal_page()
                    self._stream.write(self._page)
                    page_start = self._stream.tell()
                    self._offset = 0
                    self._populate_existing_data()
                    self._stream.seek(page_start)
        except OSError as exc:
            raise WriteError("Failed to write paged data") from exc
        return total

    def flush(self) -> None:
        """Persist the current partial page and flush the underlying stream."""
        try:
            if self._offset > 0:
                position = self._stream.tell()
                self._seal_page()
                self._stream.write(self._page)
                self._stream.seek(position)
            self._stream.flush()
        except OSError as exc:
            raise WriteError("Failed to flush paged writer") from exc

    def close(self) -> None:
        """Flush pending data; the underlying stream stays open."""
        self.flush()

    def physical_position(self) -> int:
        """Current physical offset in the file."""
        try:
            position = self._stream.tell()
        except OSError as exc:
            raise ReadError("Failed to get position from writer") from exc
        return position + self._offset

    def physical_seek(self, pos: int) -> None:
        """Move to a physical file offset that lies outside any checksum."""
        self.flush()
        try:
            end = self._stream.seek(0, os.SEEK_END)
        except OSError as exc:
            raise WriteError("Failed to seek to file end") from exc
        if pos < 0 or pos > end:
            raise WriteError("Cannot seek after end of file")
        page, offset = divmod(pos, PAGE_SIZE)
        if offset >= PAGE_PAYLOAD_SIZE:
            raise WriteError("Cannot seek into checksum")
        page_start = page * PAGE_SIZE
        try:
            self._stream.seek(page_start)
            self._populate_existing_data()
            self._stream.seek(page_start)
        except OSError as exc:
            raise WriteError("Failed to read existing page data") from exc
        self._offset = offset

    def physical_size(self) -> int:
        """Current physical size of the file, including the pending page."""
        self.flush()
        try:
            position = self._stream.tell()
            size = self._stream.seek(0, os.SEEK_END)
            self._stream.seek(position)
        except OSError as exc:
            raise WriteError("Cannot determine physical size") from exc
        return size

    def align(self) -> None:
        """Write zeros up to the next 4-byte aligned offset, if needed."""
        misalignment = self._offset % 4
        if misalignment:
            self.write(bytes(4 - misalignment))