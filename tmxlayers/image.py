"""References to images stored on the filesystem."""

from __future__ import annotations

import re
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from xml.etree.ElementTree import Element

from .errors import MalformedAttributesError

_SIGNED = re.compile(r"[+-]?[0-9]+")
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _required(element: Element, name: str) -> str:
    value = element.get(name)
    if value is None:
        raise MalformedAttributesError(f"image must have a {name} attribute")
    return value


def _parse_i32(element: Element, name: str) -> int:
    text = _required(element, name)
    if not _SIGNED.fullmatch(text) or not _I32_MIN <= int(text) <= _I32_MAX:
        raise MalformedAttributesError(
            f"image {name} attribute is not a 32-bit integer: {text!r}"
        )
    return int(text)


@dataclass(frozen=True)
class Image:
    """An image referenced by a map or tileset."""

    source: Path
    """Uncanonicalized path, joined onto the directory of the referring file."""
    width: int
    height: int
    transparent_colour: str | None = None
    """The colour treated as transparent, as written in the file."""

    @classmethod
    def from_element(
        cls, element: Element, path_relative_to: str | PathLike[str]
    ) -> Image:
        """Build an image from an ``image`` element."""
        source = _required(element, "source")
        return cls(
            source=Path(path_relative_to) / source,
            width=_parse_i32(element, "width"),
            height=_parse_i32(element, "height"),
            transparent_colour=element.get("trans"),
        )