"""Tile layers with a fixed width and height."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from xml.etree.ElementTree import Element

from .tile_data import LayerTileData, MapTilesetGid, parse_data_line


@dataclass
class FiniteTileLayerData:
    """The tiles of a bounded tile layer, stored row by row."""

    width: int = 0
    """Width of the layer in tiles."""
    height: int = 0
    """Height of the layer in tiles."""
    tiles: list[LayerTileData | None] = field(default_factory=list, repr=False)

    @classmethod
    def from_element(
        cls,
        element: Element,
        width: int,
        height: int,
        tilesets: Sequence[MapTilesetGid],
    ) -> FiniteTileLayerData:
        """Build the layer data from a ``data`` element."""
        tiles = parse_data_line(
            element.get("encoding"), element.get("compression"), element, tilesets
        )
        return cls(width=width, height=height, tiles=tiles)

    def get_tile_data(self, x: int, y: int) -> LayerTileData | None:
        """Return the tile at ``(x, y)``, or None if out of bounds or empty."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.tiles[x + y * self.width]
        return None