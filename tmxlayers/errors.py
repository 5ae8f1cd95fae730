"""Exceptions raised while reading Tiled maps and tilesets."""

from __future__ import annotations

from os import PathLike
from pathlib import Path


class TiledError(Exception):
    """Base class of every error raised while parsing Tiled files."""

    default_message = "Error while parsing a Tiled file"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(self.default_message if message is None else message)


class MalformedAttributesError(TiledError):
    """An attribute was missing, had the wrong type or was badly formatted."""

    default_message = "Malformed attributes"


class DecompressingError(TiledError):
    """Decompressing layer data failed."""

    default_message = "Could not decompress data"


class Base64DecodingError(TiledError):
    """Decoding a base64 dataset failed."""

    default_message = "Invalid base64 data"


class CsvDecodingError(TiledError):
    """Parsing tile data from a csv dataset failed."""

    default_message = "Invalid csv tile data"


class XmlDecodingError(TiledError):
    """The XML of a TMX or TSX file could not be parsed."""

    default_message = "Invalid XML"


class PrematureEndError(TiledError):
    """The XML stream ended before the document was fully parsed."""

    default_message = "Ran out of XML data"


class PathIsNotFileError(TiledError):
    """The path given is not contained in any folder."""

    default_message = (
        "The path given is invalid because it isn't contained in any folder."
    )


class ResourceLoadingError(TiledError):
    """A resource could not be read."""

    def __init__(self, path: str | PathLike[str], err: object) -> None:
        self.path = Path(path)
        self.err = err
        super().__init__(f"Could not open '{self.path}'. Error: {err}")
        if isinstance(err, BaseException):
            self.__cause__ = err


class InvalidTileFoundError(TiledError):
    """An invalid tile was found in the map."""

    default_message = "Invalid tile found in map being parsed"


class InvalidEncodingFormatError(TiledError):
    """Unknown encoding or compression, or an invalid combination of both."""

    def __init__(self, encoding: str | None, compression: str | None) -> None:
        self.encoding = encoding
        self.compression = compression
        if encoding is None and compression is None:
            message = "Deprecated combination of encoding and compression"
        else:
            message = (
                "Unknown encoding or compression format or invalid combination "
                "of both (for tile layers): "
                f"{encoding or 'no'} encoding with {compression or 'no'} compression"
            )
        super().__init__(message)


class InvalidPropertyValueError(TiledError):
    """A property value could not be parsed."""

    def __init__(self, description: str) -> None:
        self.description = description
        super().__init__(f"Invalid property value: {description}")


class UnknownPropertyTypeError(TiledError):
    """A property declared a type that is not supported."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"Unknown property value type '{type_name}'")


class TemplateHasNoObjectError(TiledError):
    """A template holds no object element."""

    default_message = "A template was found with no object element"


class InvalidWangIdEncodingError(TiledError):
    """A WangId was not properly formatted."""

    def __init__(self, read_string: str) -> None:
        self.read_string = read_string
        super().__init__(f'"{read_string}" is not a valid WangId format')


class InvalidObjectDataError(TiledError):
    """An object's data could not be parsed."""

    def __init__(self, description: str) -> None:
        self.description = description
        super().__init__(f"Invalid object data: {description}")


class InvalidTilesetError(TiledError):
    """A tileset had invalid contents, such as a zero tile dimension."""

    default_message = (
        "An invalid width or height (0) dimension was found in the input."
    )