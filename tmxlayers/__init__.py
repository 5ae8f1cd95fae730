"""Tile, image and group layers, tile data, images and animations of Tiled TMX maps."""

__version__ = "0.1.0"