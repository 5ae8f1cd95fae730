"""Tile data decoding for tile layers: gids, flip flags, csv and base64 payloads."""

from __future__ import annotations

import base64
import binascii
import gzip
import re
import struct
import zlib
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any
from xml.etree.ElementTree import Element

import zstandard

from .errors import (
    Base64DecodingError,
    CsvDecodingError,
    DecompressingError,
    InvalidEncodingFormatError,
)

FLIPPED_HORIZONTALLY_FLAG = 0x80000000
FLIPPED_VERTICALLY_FLAG = 0x40000000
FLIPPED_DIAGONALLY_FLAG = 0x20000000
ALL_FLIP_FLAGS = (
    FLIPPED_HORIZONTALLY_FLAG | FLIPPED_VERTICALLY_FLAG | FLIPPED_DIAGONALLY_FLAG
)
EMPTY_GID = 0

_UNSIGNED = re.compile(r"\+?[0-9]+")
_U32_MAX = 2**32 - 1


@dataclass(frozen=True)
class MapTilesetGid:
    """A tileset used by a map, along with the first global tile ID it covers."""

    first_gid: int
    tileset: Any


def get_tileset_for_gid(
    tilesets: Sequence[MapTilesetGid], gid: int
) -> tuple[int, MapTilesetGid] | None:
    """Return the index and entry of the tileset holding ``gid``, or None."""
    for index in reversed(range(len(tilesets))):
        if tilesets[index].first_gid <= gid:
            return index, tilesets[index]
    return None


@dataclass(frozen=True)
class LayerTileData:
    """A tile placed in a layer: its tileset, local ID and flip flags."""

    tileset_index: int
    """Index of the tileset in the map's tileset list."""
    id: int
    """Local ID of the tile within its tileset."""
    flip_h: bool = False
    flip_v: bool = False
    flip_d: bool = False

    @classmethod
    def from_bits(
        cls, bits: int, tilesets: Sequence[MapTilesetGid]
    ) -> LayerTileData | None:
        """Decode a raw gid with flip bits; None for empty or unknown tiles."""
        flags = bits & ALL_FLIP_FLAGS
        gid = bits & ~ALL_FLIP_FLAGS & _U32_MAX
        if gid == EMPTY_GID:
            return None
        found = get_tileset_for_gid(tilesets, gid)
        if found is None:
            return None
        tileset_index, entry = found
        return cls(
            tileset_index=tileset_index,
            id=gid - entry.first_gid,
            flip_h=bool(flags & FLIPPED_HORIZONTALLY_FLAG),
            flip_v=bool(flags & FLIPPED_VERTICALLY_FLAG),
            flip_d=bool(flags & FLIPPED_DIAGONALLY_FLAG),
        )


def decode_base64(text: str) -> bytes:
    """Decode padded standard base64, ignoring surrounding whitespace."""
    try:
        return base64.b64decode(text.strip(), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise Base64DecodingError(str(exc)) from exc


def decode_csv(
    text: str, tilesets: Sequence[MapTilesetGid]
) -> list[LayerTileData | None]:
    """Decode comma separated gids into layer tiles."""
    tiles: list[LayerTileData | None] = []
    for value in text.split(","):
        value = value.strip()
        if not _UNSIGNED.fullmatch(value) or int(value) > _U32_MAX:
            raise CsvDecodingError(f"invalid tile gid: {value!r}")
        tiles.append(LayerTileData.from_bits(int(value), tilesets))
    return tiles


def convert_to_tiles(
    data: bytes, tilesets: Sequence[MapTilesetGid]
) -> list[LayerTileData | None]:
    """Decode little-endian 32-bit gids; trailing partial words are ignored."""
    usable = len(data) - len(data) % 4
    return [
        LayerTileData.from_bits(bits, tilesets)
        for (bits,) in struct.iter_unpack("<I", data[:usable])
    ]


def _decompress_zstd(data: bytes) -> bytes:
    return zstandard.ZstdDecompressor().decompressobj().decompress(data)


_DECOMPRESSORS: dict[str | None, Callable[[bytes], bytes]] = {
    None: lambda data: data,
    "zlib": zlib.decompress,
    "gzip": gzip.decompress,
    "zstd": _decompress_zstd,
}


def _decompress(compression: str | None, data: bytes) -> bytes:
    try:
        return _DECOMPRESSORS[compression](data)
    except (zlib.error, OSError, EOFError, zstandard.ZstdError) as exc:
        raise DecompressingError(str(exc)) from exc


def _element_text(element: Element) -> str | None:
    text = element.text
    if text is None or not text.strip():
        return None
    return text


def parse_data_line(
    encoding: str | None,
    compression: str | None,
    element: Element,
    tilesets: Sequence[MapTilesetGid],
) -> list[LayerTileData | None]:
    """Decode the tile payload held as text in ``element``."""
    if encoding == "csv" and compression is None:
        text = _element_text(element)
        return [] if text is None else decode_csv(text, tilesets)
    if encoding == "base64" and compression in _DECOMPRESSORS:
        text = _element_text(element)
        if text is None:
            return []
        return convert_to_tiles(_decompress(compression, decode_base64(text)), tilesets)
    raise InvalidEncodingFormatError(encoding, compression)


def _all_tiles(values: Iterable[int], tilesets: Sequence[MapTilesetGid]) -> list:
    return [LayerTileData.from_bits(v, tilesets) for v in values]