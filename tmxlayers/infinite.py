"""Unbounded tile layers, stored as fixed-size chunks."""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import ClassVar
from xml.etree.ElementTree import Element

from .errors import InvalidTileFoundError, MalformedAttributesError
from .tile_data import LayerTileData, MapTilesetGid, parse_data_line

_SIGNED = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"\+?[0-9]+")
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_U32_MAX = 2**32 - 1


def _attr(element: Element, name: str) -> str:
    value = element.get(name)
    if value is None:
        raise MalformedAttributesError(f"chunk must have a {name} attribute")
    return value


def _parse_i32(element: Element, name: str) -> int:
    text = _attr(element, name)
    if not _SIGNED.fullmatch(text) or not _I32_MIN <= int(text) <= _I32_MAX:
        raise MalformedAttributesError(
            f"chunk {name} attribute is not a 32-bit integer: {text!r}"
        )
    return int(text)


def _parse_u32(element: Element, name: str) -> int:
    text = _attr(element, name)
    if not _UNSIGNED.fullmatch(text) or int(text) > _U32_MAX:
        raise MalformedAttributesError(
            f"chunk {name} attribute is not an unsigned 32-bit integer: {text!r}"
        )
    return int(text)


@dataclass
class ChunkData:
    """A fixed-size square of tiles within an infinite layer."""

    WIDTH: ClassVar[int] = 16
    HEIGHT: ClassVar[int] = 16
    TILE_COUNT: ClassVar[int] = WIDTH * HEIGHT

    tiles: list[LayerTileData | None] = field(
        default_factory=lambda: [None] * ChunkData.TILE_COUNT, repr=False
    )

    def get_tile_data(self, x: int, y: int) -> LayerTileData | None:
        """Return the tile at a position relative to the chunk's top-left tile."""
        if 0 <= x < self.WIDTH and 0 <= y < self.HEIGHT:
            return self.tiles[x + y * self.WIDTH]
        return None

    @staticmethod
    def tile_to_chunk_pos(x: int, y: int) -> tuple[int, int]:
        """Return the position of the chunk holding the tile at ``(x, y)``."""
        return x // ChunkData.WIDTH, y // ChunkData.HEIGHT


def _relative_index(x: int, y: int, chunk_pos: tuple[int, int]) -> int:
    rel_x = x - chunk_pos[0] * ChunkData.WIDTH
    rel_y = y - chunk_pos[1] * ChunkData.HEIGHT
    return rel_x + rel_y * ChunkData.WIDTH


@dataclass
class InfiniteTileLayerData:
    """The tiles of an unbounded tile layer, keyed by chunk position."""

    chunks: dict[tuple[int, int], ChunkData] = field(
        default_factory=dict, repr=False
    )

    @classmethod
    def from_element(
        cls, element: Element, tilesets: Sequence[MapTilesetGid]
    ) -> InfiniteTileLayerData:
        """Build the layer data from a ``data`` element holding ``chunk`` children."""
        encoding = element.get("encoding")
        compression = element.get("compression")
        chunks: dict[tuple[int, int], ChunkData] = {}
        for child in element:
            if child.tag != "chunk":
                continue
            origin_x = _parse_i32(child, "x")
            origin_y = _parse_i32(child, "y")
            width = _parse_u32(child, "width")
            height = _parse_u32(child, "height")
            tiles = parse_data_line(encoding, compression, child, tilesets)
            for x in range(origin_x, origin_x + width):
                for y in range(origin_y, origin_y + height):
                    internal_index = (x - origin_x) + (y - origin_y) * width
                    if internal_index >= len(tiles):
                        raise InvalidTileFoundError()
                    chunk_pos = ChunkData.tile_to_chunk_pos(x, y)
                    chunk = chunks.setdefault(chunk_pos, ChunkData())
                    chunk.tiles[_relative_index(x, y, chunk_pos)] = tiles[internal_index]
        return cls(chunks=chunks)

    def get_tile_data(self, x: int, y: int) -> LayerTileData | None:
        """Return the tile at ``(x, y)``, or None if empty."""
        chunk_pos = ChunkData.tile_to_chunk_pos(x, y)
        chunk = self.chunks.get(chunk_pos)
        if chunk is None:
            return None
        return chunk.tiles[_relative_index(x, y, chunk_pos)]

    def chunk_data(self) -> Iterator[tuple[tuple[int, int], ChunkData]]:
        """Iterate over ``(chunk position, chunk)`` pairs in no particular order."""
        return iter(self.chunks.items())

    def get_chunk_data(self, x: int, y: int) -> ChunkData | None:
        """Return the chunk at chunk position ``(x, y)``, or None."""
        return self.chunks.get((x, y))