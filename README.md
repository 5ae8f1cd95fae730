# tmxlayers

Read the layer data of maps made with the Tiled map editor (TMX files)
from `xml.etree.ElementTree` elements: finite and infinite tile layers,
image layers, group layers, tile animation frames and image references.

Tile data may be stored as CSV, or as base64 with no compression or with
zlib, gzip or zstd compression.

## Installation

```
pip install tmxlayers
```

To run the tests:

```
pip install "tmxlayers[test]"
pytest
```

## Modules

- `tmxlayers.layers` — `LayerData`, `LayerType`, `ImageLayerData`,
  `GroupLayerData` and `parse_tile_layer`.
- `tmxlayers.finite` — `FiniteTileLayerData`.
- `tmxlayers.infinite` — `InfiniteTileLayerData` and `ChunkData`.
- `tmxlayers.tile_data` — `MapTilesetGid`, `LayerTileData`,
  `get_tileset_for_gid`, `parse_data_line`, `decode_csv`, `decode_base64`
  and `convert_to_tiles`.
- `tmxlayers.image` — `Image`.
- `tmxlayers.animation` — `Frame` and `parse_animation`.
- `tmxlayers.cache` — `ResourceCache` and `DefaultResourceCache`.
- `tmxlayers.errors` — `TiledError` and its subclasses.

## Usage

The tilesets a map uses are described by a list of `MapTilesetGid`
values. Each one gives the first global tile ID of a tileset and holds
whatever object you use for that tileset. A decoded tile records the
index of its tileset in that list and its local ID within the tileset.

```python
import xml.etree.ElementTree as ET
from pathlib import Path

from tmxlayers.layers import LayerData, LayerType
from tmxlayers.tile_data import MapTilesetGid

map_path = Path("maps/level1.tmx")
root = ET.parse(map_path).getroot()
infinite = root.get("infinite") == "1"
tilesets = [MapTilesetGid(first_gid=1, tileset="terrain")]

supported = {kind.value for kind in LayerType}
for element in root:
    if element.tag not in supported:
        continue
    layer = LayerData.from_element(element, infinite, map_path, tilesets)
    print(layer.name, layer.layer_type, layer.visible, layer.opacity)

    tiles = layer.as_tile_layer()
    if tiles is not None:
        tile = tiles.get_tile_data(0, 0)
        if tile is not None:
            print(tile.tileset_index, tile.id, tile.flip_h, tile.flip_v, tile.flip_d)

    image_layer = layer.as_image_layer()
    if image_layer is not None and image_layer.image is not None:
        print(image_layer.image.source)
```

`LayerData.from_element` accepts `layer`, `imagelayer` and `group`
elements and raises `ValueError` for any other tag. A group layer keeps
its `layer`, `imagelayer` and `group` children, in document order, in
`GroupLayerData.layers`.

Image paths are not canonicalized: an image's `source` is the directory
of the map path joined with the path written in the file. The
transparent colour of an image and the tint colour of a layer are kept
as the strings written in the file.

### Finite layers

`FiniteTileLayerData` has a `width` and `height` in tiles;
`get_tile_data(x, y)` returns `None` for empty or out-of-bounds
positions.

### Infinite layers

Infinite tile layers are stored in chunks of `ChunkData.WIDTH` by
`ChunkData.HEIGHT` tiles (16 by 16). `ChunkData.tile_to_chunk_pos(x, y)`
returns the position of the chunk holding a tile,
`InfiniteTileLayerData.get_chunk_data(x, y)` returns the chunk at a chunk
position, and `InfiniteTileLayerData.chunk_data()` yields every chunk
with its position, in no particular order.

### Animations

`parse_animation(element)` reads the `frame` children of an `animation`
element into `Frame` values holding a `tile_id` and a `duration` in
milliseconds.

### Caching

`DefaultResourceCache` stores tilesets and templates in dictionaries
keyed by path, through `get_tileset`, `insert_tileset`, `get_template`
and `insert_template`. `ResourceCache` is the abstract base for other
caches.

### Errors

Parsing problems raise subclasses of `tmxlayers.errors.TiledError`, for
example `InvalidEncodingFormatError` for an unknown encoding or
compression, `CsvDecodingError` and `Base64DecodingError` for bad tile
data, `DecompressingError` for corrupt compressed data,
`InvalidTileFoundError` for a chunk with too few tiles,
`PathIsNotFileError` for a map path with no parent directory, and
`MalformedAttributesError` for a missing or badly formatted attribute.

## What this package does not do

- It does not open or load map or tileset files itself; you parse the
  XML and pass in elements, and you build the `MapTilesetGid` list.
- It does not read object layers (`objectgroup`), objects or templates.
- It does not read custom `properties` of layers; they are ignored.
- It does not read tilesets, Wang sets or embedded image data.
- It does not render anything.