"""Date and time values as stored in the XML section of E57 files."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass

from .errors import InvalidError


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _find_child(element: ET.Element, name: str, type_name: str) -> ET.Element | None:
    return next(
        (
            child
            for child in element
            if _local_name(child.tag) == name and child.get("type") == type_name
        ),
        None,
    )


@dataclass
class DateTime:
    """A point in time used in E57 files."""

    gps_time: float
    """Seconds since the GPS epoch (00:00 UTC on January 6, 1980)."""
    atomic_reference: bool = False
    """True if a satellite navigation device was used to record the time."""

    @classmethod
    def from_element(cls, element: ET.Element) -> DateTime | None:
        """Build a date time from a structure element.

        Returns None if the time value has no text or the atomic clock
        flag is missing.
        """
        value_node = _find_child(element, "dateTimeValue", "Float")
        if value_node is None:
            raise InvalidError(
                "Unable to find XML tag 'dateTimeValue' with type 'Float'"
            )
        if value_node.text is None:
            return None
        try:
            gps_time = float(value_node.text)
        except ValueError as exc:
            raise InvalidError(
                "Failed to parse inner text of XML tag 'dateTimeValue' as double"
            ) from exc

        atomic_node = _find_child(element, "isAtomicClockReferenced", "Integer")
        if atomic_node is None:
            return None
        atomic_reference = (atomic_node.text or "0").strip() == "1"
        return cls(gps_time, atomic_reference)

    def xml_string(self, tag_name: str) -> str:
        """Serialize as an XML structure element named ``tag_name``."""
        flag = "1" if self.atomic_reference else "0"
        return (
            f'<{tag_name} type="Structure">\n'
            f'<dateTimeValue type="Float">{float(self.gps_time)}</dateTimeValue>\n'
            f'<isAtomicClockReferenced type="Integer">{flag}'
            f"</isAtomicClockReferenced>\n"
            f"</{tag_name}>\n"
        )