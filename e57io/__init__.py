"""Low-level building blocks for reading and writing ASTM E57 files: headers, CRC pages, sections and bit streams."""

__version__ = "0.1.0"