"""Tile animation frames."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from xml.etree.ElementTree import Element

from .errors import MalformedAttributesError

_UNSIGNED = re.compile(r"\+?[0-9]+")
_U32_MAX = 2**32 - 1


def _parse_u32(attrs: Mapping[str, str], name: str) -> int:
    try:
        text = attrs[name]
    except KeyError:
        raise MalformedAttributesError(
            f"frame must have a {name} attribute"
        ) from None
    if not _UNSIGNED.fullmatch(text) or int(text) > _U32_MAX:
        raise MalformedAttributesError(
            f"frame {name} attribute is not an unsigned 32-bit integer: {text!r}"
        )
    return int(text)


@dataclass(frozen=True)
class Frame:
    """One frame of a tile animation."""

    tile_id: int
    """Local ID of a tile within the parent tileset."""
    duration: int
    """How long, in milliseconds, the frame is shown."""

    @classmethod
    def from_attrs(cls, attrs: Mapping[str, str]) -> Frame:
        """Build a frame from the attributes of a ``frame`` element."""
        return cls(
            tile_id=_parse_u32(attrs, "tileid"),
            duration=_parse_u32(attrs, "duration"),
        )


def parse_animation(element: Element) -> list[Frame]:
    """Read the frames of an ``animation`` element in document order."""
    return [Frame.from_attrs(child.attrib) for child in element if child.tag == "frame"]