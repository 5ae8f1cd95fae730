"""Map layers: tile, image and group layers, and their common attributes."""

from __future__ import annotations

import enum
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Union
from xml.etree.ElementTree import Element

from .errors import MalformedAttributesError, PathIsNotFileError
from .finite import FiniteTileLayerData
from .image import Image
from .infinite import InfiniteTileLayerData
from .tile_data import MapTilesetGid

_SIGNED = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"\+?[0-9]+")
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_U32_MAX = 2**32 - 1

TileLayerData = Union[FiniteTileLayerData, InfiniteTileLayerData]


class LayerType(enum.Enum):
    """The kind of content a layer holds."""

    TILES = "layer"
    IMAGE = "imagelayer"
    GROUP = "group"


def _parse_float(element: Element, name: str, default: float) -> float:
    text = element.get(name)
    if text is None:
        return default
    if text != text.strip() or "_" in text:
        raise MalformedAttributesError(f"{name} attribute is not a number: {text!r}")
    try:
        return float(text)
    except ValueError:
        raise MalformedAttributesError(
            f"{name} attribute is not a number: {text!r}"
        ) from None


def _parse_i32(element: Element, name: str) -> int | None:
    text = element.get(name)
    if text is None:
        return None
    if not _SIGNED.fullmatch(text) or not _I32_MIN <= int(text) <= _I32_MAX:
        raise MalformedAttributesError(
            f"{name} attribute is not a 32-bit integer: {text!r}"
        )
    return int(text)


def _parse_u32(element: Element, name: str) -> int | None:
    text = element.get(name)
    if text is None:
        return None
    if not _UNSIGNED.fullmatch(text) or int(text) > _U32_MAX:
        raise MalformedAttributesError(
            f"{name} attribute is not an unsigned 32-bit integer: {text!r}"
        )
    return int(text)


def _required_u32(element: Element, name: str) -> int:
    value = _parse_u32(element, name)
    if value is None:
        raise MalformedAttributesError(f"layer must have a {name} attribute")
    return value


def _map_directory(map_path: str | PathLike[str]) -> Path:
    if str(map_path) == "":
        raise PathIsNotFileError()
    path = Path(map_path)
    if path.parent == path:
        raise PathIsNotFileError()
    return path.parent


def parse_tile_layer(
    element: Element, infinite: bool, tilesets: Sequence[MapTilesetGid]
) -> TileLayerData:
    """Read the tile data of a ``layer`` element."""
    width = _required_u32(element, "width")
    height = _required_u32(element, "height")
    result: TileLayerData = FiniteTileLayerData()
    for child in element:
        if child.tag != "data":
            continue
        if infinite:
            result = InfiniteTileLayerData.from_element(child, tilesets)
        else:
            result = FiniteTileLayerData.from_element(child, width, height, tilesets)
    return result


@dataclass
class ImageLayerData:
    """A layer consisting of a single image."""

    image: Image | None = None

    @classmethod
    def from_element(
        cls, element: Element, map_path: str | PathLike[str]
    ) -> ImageLayerData:
        """Read an ``imagelayer`` element; image paths are relative to the map."""
        directory = _map_directory(map_path)
        image: Image | None = None
        for child in element:
            if child.tag == "image":
                image = Image.from_element(child, directory)
        return cls(image=image)


@dataclass
class GroupLayerData:
    """A layer that holds other layers, in display order."""

    layers: list[LayerData] = field(default_factory=list)

    @classmethod
    def from_element(
        cls,
        element: Element,
        infinite: bool,
        map_path: str | PathLike[str],
        tilesets: Sequence[MapTilesetGid],
    ) -> GroupLayerData:
        """Read the supported child layers of a ``group`` element."""
        tags = {kind.value for kind in LayerType}
        return cls(
            layers=[
                LayerData.from_element(child, infinite, map_path, tilesets)
                for child in element
                if child.tag in tags
            ]
        )


@dataclass
class LayerData:
    """A map layer with its common attributes and its typed content."""

    layer_type: LayerType
    data: TileLayerData | ImageLayerData | GroupLayerData
    name: str = ""
    id: int = 0
    """Unique within the map; valid only if greater than 0."""
    visible: bool = True
    offset_x: float = 0.0
    offset_y: float = 0.0
    parallax_x: float = 1.0
    parallax_y: float = 1.0
    opacity: float = 1.0
    tint_color: str | None = None
    """The tint colour as written in the file."""
    user_type: str | None = None

    @classmethod
    def from_element(
        cls,
        element: Element,
        infinite: bool,
        map_path: str | PathLike[str],
        tilesets: Sequence[MapTilesetGid],
    ) -> LayerData:
        """Read a ``layer``, ``imagelayer`` or ``group`` element."""
        try:
            kind = LayerType(element.tag)
        except ValueError:
            raise ValueError(f"unsupported layer element: {element.tag!r}") from None

        opacity = _parse_float(element, "opacity", 1.0)
        visible_raw = _parse_i32(element, "visible")
        offset_x = _parse_float(element, "offsetx", 0.0)
        offset_y = _parse_float(element, "offsety", 0.0)
        parallax_x = _parse_float(element, "parallaxx", 1.0)
        parallax_y = _parse_float(element, "parallaxy", 1.0)
        layer_id = _parse_u32(element, "id")
        user_type = element.get("type")
        if user_type is None:
            user_type = element.get("class")

        data: TileLayerData | ImageLayerData | GroupLayerData
        if kind is LayerType.TILES:
            data = parse_tile_layer(element, infinite, tilesets)
        elif kind is LayerType.IMAGE:
            data = ImageLayerData.from_element(element, map_path)
        else:
            data = GroupLayerData.from_element(element, infinite, map_path, tilesets)

        return cls(
            layer_type=kind,
            data=data,
            name=element.get("name", ""),
            id=0 if layer_id is None else layer_id,
            visible=True if visible_raw is None else visible_raw == 1,
            offset_x=offset_x,
            offset_y=offset_y,
            parallax_x=parallax_x,
            parallax_y=parallax_y,
            opacity=opacity,
            tint_color=element.get("tintcolor"),
            user_type=user_type,
        )

    def as_tile_layer(self) -> TileLayerData | None:
        """Return the tile data if this is a tile layer, else None."""
        if self.layer_type is LayerType.TILES:
            return self.data  # type: ignore[return-value]
        return None

    def as_image_layer(self) -> ImageLayerData | None:
        """Return the image layer data if this is an image layer, else None."""
        if self.layer_type is LayerType.IMAGE:
            return self.data  # type: ignore[return-value]
        return None

    def as_group_layer(self) -> GroupLayerData | None:
        """Return the group data if this is a group layer, else None."""
        if self.layer_type is LayerType.GROUP:
            return self.data  # type: ignore[return-value]
        return None