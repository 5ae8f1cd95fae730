import base64
import gzip
import struct
import zlib
from xml.etree.ElementTree import fromstring

import pytest
import zstandard

from tmxlayers.errors import (
    Base64DecodingError,
    CsvDecodingError,
    DecompressingError,
    InvalidEncodingFormatError,
)
from tmxlayers.tile_data import (
    LayerTileData,
    MapTilesetGid,
    convert_to_tiles,
    decode_base64,
    decode_csv,
    get_tileset_for_gid,
    parse_data_line,
)

TILESETS = [MapTilesetGid(1, "first"), MapTilesetGid(10, "second")]
GIDS = [0, 1, 5, 10, 12, 0x80000001, 0x40000002, 0x2000000B]


def _packed(gids):
    return b"".join(struct.pack("<I", g) for g in gids)


def _element(text):
    return fromstring(f"<data>{text}</data>")


def _csv_result():
    return parse_data_line(
        "csv", None, _element(",".join(str(g) for g in GIDS)), TILESETS
    )


def test_empty_gid_is_none():
    assert LayerTileData.from_bits(0, TILESETS) is None


def test_gid_maps_to_tileset_and_local_id():
    tile = LayerTileData.from_bits(10, TILESETS)
    assert tile.tileset_index == 1
    assert tile.id == 0
    first = LayerTileData.from_bits(1, TILESETS)
    assert (first.tileset_index, first.id) == (0, 0)


def test_flip_flags():
    tile = LayerTileData.from_bits(0x80000001, TILESETS)
    assert (tile.flip_h, tile.flip_v, tile.flip_d) == (True, False, False)
    tile = LayerTileData.from_bits(0x40000001, TILESETS)
    assert (tile.flip_h, tile.flip_v, tile.flip_d) == (False, True, False)
    tile = LayerTileData.from_bits(0x20000001, TILESETS)
    assert (tile.flip_h, tile.flip_v, tile.flip_d) == (False, False, True)
    assert tile.id == 0


def test_flip_bits_alone_are_empty():
    assert LayerTileData.from_bits(0xE0000000, TILESETS) is None


def test_gid_before_first_tileset_is_none():
    assert LayerTileData.from_bits(3, [MapTilesetGid(5, "x")]) is None
    assert get_tileset_for_gid([MapTilesetGid(5, "x")], 3) is None


def test_get_tileset_for_gid_picks_last_matching():
    assert get_tileset_for_gid(TILESETS, 9) == (0, TILESETS[0])
    assert get_tileset_for_gid(TILESETS, 100) == (1, TILESETS[1])


def test_csv_length_and_empties():
    tiles = _csv_result()
    assert len(tiles) == len(GIDS)
    assert tiles[0] is None
    assert tiles[1] == LayerTileData.from_bits(1, TILESETS)


@pytest.mark.parametrize(
    "compression, compress",
    [
        (None, lambda b: b),
        ("zlib", zlib.compress),
        ("gzip", gzip.compress),
        ("zstd", lambda b: zstandard.ZstdCompressor().compress(b)),
    ],
)
def test_base64_matches_csv(compression, compress):
    text = base64.b64encode(compress(_packed(GIDS))).decode()
    tiles = parse_data_line("base64", compression, _element(f"\n  {text}\n"), TILESETS)
    assert tiles == _csv_result()


def test_decode_csv_tolerates_whitespace():
    assert decode_csv(" 1 ,\n10 ", TILESETS) == decode_csv("1,10", TILESETS)


@pytest.mark.parametrize("text", ["1,abc", "1,,2", "-1", "4294967296"])
def test_decode_csv_rejects_bad_values(text):
    with pytest.raises(CsvDecodingError):
        decode_csv(text, TILESETS)


def test_decode_base64_round_trip():
    raw = _packed([1, 2, 3])
    assert decode_base64("  " + base64.b64encode(raw).decode() + "\n") == raw


def test_decode_base64_rejects_garbage():
    with pytest.raises(Base64DecodingError):
        decode_base64("not*base64!")


def test_convert_to_tiles_ignores_trailing_bytes():
    tiles = convert_to_tiles(_packed([1, 10]) + b"\x01", TILESETS)
    assert tiles == [
        LayerTileData.from_bits(1, TILESETS),
        LayerTileData.from_bits(10, TILESETS),
    ]


def test_corrupt_zlib_raises():
    text = base64.b64encode(b"definitely not zlib").decode()
    with pytest.raises(DecompressingError):
        parse_data_line("base64", "zlib", _element(text), TILESETS)


def test_empty_element_gives_no_tiles():
    assert parse_data_line("csv", None, fromstring("<data/>"), TILESETS) == []
    assert parse_data_line("base64", "zlib", fromstring("<data>  </data>"), TILESETS) == []


def test_unknown_encoding_raises():
    with pytest.raises(InvalidEncodingFormatError) as info:
        parse_data_line("xml", None, _element("1"), TILESETS)
    assert info.value.encoding == "xml"
    assert info.value.compression is None


def test_csv_with_compression_raises():
    with pytest.raises(InvalidEncodingFormatError):
        parse_data_line("csv", "zlib", _element("1"), TILESETS)


def test_missing_encoding_is_deprecated():
    with pytest.raises(InvalidEncodingFormatError) as info:
        parse_data_line(None, None, _element("1"), TILESETS)
    assert str(info.value) == "Deprecated combination of encoding and compression"