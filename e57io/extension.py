"""E57 extensions declared as XML namespaces."""

from __future__ import annotations

import io
import string
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from .errors import InvalidError

_VALID_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_-")


@dataclass
class Extension:
    """An extension identified by its XML namespace prefix and URL."""

    namespace: str
    url: str

    @classmethod
    def from_xml(cls, xml: str | bytes) -> list[Extension]:
        """Return the named namespaces declared on the root element of ``xml``."""
        data = xml.encode("utf-8") if isinstance(xml, str) else bytes(xml)
        extensions = []
        try:
            for event, item in ET.iterparse(
                io.BytesIO(data), events=("start-ns", "start")
            ):
                if event == "start":
                    break
                prefix, uri = item
                if prefix:
                    extensions.append(cls(prefix, uri))
        except ET.ParseError as exc:
            raise InvalidError("Failed to parse XML data") from exc
        return extensions


def validate_name(name: str) -> str:
    """Check a name usable as XML namespace or attribute and return it."""
    if name.lower().startswith("xml"):
        raise InvalidError(
            "Strings used as XML namespaces or attributes must not start "
            f"with 'XML': {name}"
        )
    if not all(c in _VALID_NAME_CHARS for c in name):
        raise InvalidError(
            "Strings used as XML namespaces or attributes should consist only "
            f"of a-z, A-Z, 0-9, dashes and underscores: '{name}'"
        )
    return name