"""Reader that hides the E57 page layout with its trailing CRC checksums."""

from __future__ import annotations

import os
from typing import BinaryIO

from .crc32 import crc32c
from .errors import ReadError

CHECKSUM_SIZE = 4
ALIGNMENT_SIZE = 4
MAX_PAGE_SIZE = 1024 * 1024


class PagedReader:
    """Reads the logical byte stream of a paged file and verifies each page."""

    def __init__(self, stream: BinaryIO, page_size: int) -> None:
        if page_size > MAX_PAGE_SIZE:
            raise ReadError(
                f"Page size {page_size} is bigger than the allowed maximum "
                f"page size of {MAX_PAGE_SIZE} bytes"
            )
        if page_size <= CHECKSUM_SIZE:
            raise ReadError(
                f"Page size {page_size} needs to be bigger than checksum "
                f"({CHECKSUM_SIZE} bytes)"
            )
        try:
            physical_size = stream.seek(0, os.SEEK_END)
        except OSError as exc:
            raise ReadError("Failed to determine the file size") from exc
        if physical_size == 0:
            raise ReadError("A file size of zero is not allowed")
        if physical_size % page_size != 0:
            raise ReadError(
                f"File size {physical_size} is not a multiple of the page size {page_size}"
            )

        self._stream = stream
        self.page_size = page_size
        self.physical_size = physical_size
        self.pages = physical_size // page_size
        self._payload = page_size - CHECKSUM_SIZE
        self.logical_size = self.pages * self._payload
        self._offset = 0
        self._page_num: int | None = None
        self._page = b""

    def _load_page(self, page: int) -> None:
        if self._page_num == page:
            return
        if page >= self.pages:
            raise ReadError(
                f"Page {page} does not exist, only page numbers 0..{self.pages - 1} are valid"
            )
        try:
            self._stream.seek(page * self.page_size)
            data = self._stream.read(self.page_size)
        except OSError as exc:
            self._page_num = None
            raise ReadError(f"Failed to read page {page}") from exc
        if len(data) != self.page_size:
            self._page_num = None
            raise ReadError(f"Page {page} is incomplete")
        expected = bytes(data[self._payload :])
        actual = crc32c(data[: self._payload]).to_bytes(CHECKSUM_SIZE, "big")
        if expected != actual:
            self._page_num = None
            raise ReadError(
                f"Detected invalid checksum (expected: {list(expected)}, "
                f"actual: {list(actual)}) for page {page}"
            )
        self._page = bytes(data)
        self._page_num = page

    def seek_physical(self, offset: int) -> int:
        """Move to a physical file offset and return the matching logical offset."""
        if not 0 <= offset < self.physical_size:
            raise ReadError(f"Offset {offset} is behind end of file")
        pages_before = offset // self.page_size
        self._offset = offset - pages_before * CHECKSUM_SIZE
        return self._offset

    def align(self) -> None:
        """Skip forward to the next 4-byte aligned logical offset, if needed."""
        misalignment = self._offset % ALIGNMENT_SIZE
        if misalignment:
            skip = ALIGNMENT_SIZE - misalignment
            if self._offset + skip > self.logical_size:
                raise ReadError("Tried to seek behind end of the file")
            self._offset += skip

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` logical bytes, or everything left if negative."""
        remaining = self.logical_size - self._offset
        wanted = remaining if size is None or size < 0 else min(size, remaining)
        out = bytearray()
        while len(out) < wanted:
            page, page_offset = divmod(self._offset, self._payload)
            self._load_page(page)
            count = min(wanted - len(out), self._payload - page_offset)
            out += self._page[page_offset : page_offset + count]
            self._offset += count
        return bytes(out)

    def read_exact(self, size: int) -> bytes:
        """Read exactly ``size`` logical bytes or raise ReadError."""
        data = self.read(size)
        if len(data) != size:
            raise ReadError(
                f"Unexpected end of data: wanted {size} bytes, got {len(data)}"
            )
        return data

    def read_all(self) -> bytes:
        """Read every logical byte from the current position to the end."""
        return self.read(-1)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        """Move the logical position and return it."""
        if whence == os.SEEK_SET:
            new_offset = offset
        elif whence == os.SEEK_CUR:
            new_offset = self._offset + offset
        elif whence == os.SEEK_END:
            new_offset = self.logical_size + offset
        else:
            raise ValueError(f"Invalid whence value {whence}")
        if new_offset < 0 or new_offset > self.logical_size:
            raise ReadError(f"Detected invalid offset {new_offset} after end of file")
        self._offset = new_offset
        return self._offset

    def tell(self) -> int:
        """Current logical position."""
        return self._offset