from pathlib import Path

import pytest

from tmxlayers.errors import (
    InvalidEncodingFormatError,
    InvalidPropertyValueError,
    InvalidTileFoundError,
    InvalidTilesetError,
    InvalidWangIdEncodingError,
    MalformedAttributesError,
    PathIsNotFileError,
    PrematureEndError,
    ResourceLoadingError,
    TemplateHasNoObjectError,
    TiledError,
    UnknownPropertyTypeError,
)


def test_path_is_not_file_message():
    assert str(PathIsNotFileError()) == (
        "The path given is invalid because it isn't contained in any folder."
    )


def test_invalid_tile_message():
    assert str(InvalidTileFoundError()) == "Invalid tile found in map being parsed"


def test_template_has_no_object_message():
    assert str(TemplateHasNoObjectError()) == (
        "A template was found with no object element"
    )


def test_invalid_tileset_message():
    assert str(InvalidTilesetError()) == (
        "An invalid width or height (0) dimension was found in the input."
    )


def test_premature_end_keeps_given_message():
    assert str(PrematureEndError("Ran out of XML data")) == "Ran out of XML data"


def test_malformed_attributes_uses_message():
    assert str(MalformedAttributesError("bad width")) == "bad width"


def test_encoding_format_both_missing():
    err = InvalidEncodingFormatError(None, None)
    assert str(err) == "Deprecated combination of encoding and compression"


def test_encoding_format_with_values():
    err = InvalidEncodingFormatError("base64", None)
    assert "base64 encoding with no compression" in str(err)
    assert err.encoding == "base64"
    assert err.compression is None


def test_described_errors_include_their_subject():
    assert "abc" in str(InvalidPropertyValueError("abc"))
    assert "'vector'" in str(UnknownPropertyTypeError("vector"))
    assert str(InvalidWangIdEncodingError("1,2")).startswith('"1,2"')


def test_resource_loading_error_chains_cause():
    cause = FileNotFoundError("missing")
    err = ResourceLoadingError("maps/a.tmx", cause)
    assert err.path == Path("maps/a.tmx")
    assert err.__cause__ is cause
    assert "missing" in str(err)


@pytest.mark.parametrize(
    ("error", "message"),
    [
        (
            PathIsNotFileError(),
            "The path given is invalid because it isn't contained in any folder.",
        ),
        (InvalidTileFoundError(), "Invalid tile found in map being parsed"),
        (
            InvalidEncodingFormatError("x", "y"),
            "Unknown encoding or compression format or invalid combination of both "
            "(for tile layers): x encoding with y compression",
        ),
    ],
)
def test_all_errors_share_base(error, message):
    with pytest.raises(TiledError) as info:
        raise error
    assert info.value is error
    assert str(info.value) == message