import re

import pytest

from frame_registry.encoders import (
    EncodingKind,
    decode,
    decode_bool,
    decode_geometry,
    encode,
    encode_bool,
    encode_function,
    encode_geometry,
    encode_int,
    encode_object,
)
from frame_registry.errors import EncodeError, SourceUnavailable
from frame_registry.host import MappingHost


def test_encode_bool_uses_on_off_tokens() -> None:
    assert encode_bool(True) == "on"
    assert encode_bool(False) == "off"
    assert encode_bool(None) == "off"
    assert encode_bool([1]) == "on"


def test_encode_int_only_accepts_real_integers() -> None:
    assert encode_int(12) == "12"
    assert encode_int(-3) == "-3"
    assert encode_int(None) is None
    assert encode_int(True) is None
    assert encode_int("12") is None
    assert encode_int(1.5) is None


def test_encode_object_requires_readable_literal() -> None:
    assert encode_object("right") == "'right'"
    assert encode_object((1, "a")) == "(1, 'a')"
    assert encode_object(None) is None
    with pytest.raises(EncodeError):
        encode_object(object())


def test_encode_function_treats_empty_result_as_absent() -> None:
    assert encode_function("800x600+0+0") == "800x600+0+0"
    assert encode_function("") is None
    assert encode_function(None) is None


def test_encode_dispatches_on_kind() -> None:
    assert encode(EncodingKind.BOOL, 0) == "off"
    assert encode(EncodingKind.INT, 4) == "4"
    assert encode(EncodingKind.OBJECT, [1, 2]) == "[1, 2]"
    assert encode(EncodingKind.FUNCTION, "x") == "x"


def test_encode_geometry_formats_window_position() -> None:
    host = MappingHost(parameters={"width": 800, "height": 600, "left": 10, "top": 25})
    text = encode_geometry(host)
    assert text == "800x600+10+25"
    assert re.match(r"^\d+x\d+\+\d+\+\d+$", text)
    assert decode_geometry(text) == (800, 600, 10, 25)


def test_encode_geometry_fails_when_a_query_fails() -> None:
    with pytest.raises(SourceUnavailable):
        encode_geometry(MappingHost(parameters={"width": 800, "height": 600, "left": 10}))
    with pytest.raises(SourceUnavailable):
        encode_geometry(MappingHost(parameters={"width": 800, "height": None, "left": 0, "top": 0}))


def test_decoders() -> None:
    assert decode_bool("on") is True
    assert decode_bool("off") is False
    assert decode_bool("maybe") is None
    assert decode(EncodingKind.INT, "7") == 7
    assert decode(EncodingKind.INT, "x") is None
    assert decode(EncodingKind.OBJECT, "'left'") == "left"
    assert decode(EncodingKind.FUNCTION, "10x10+0+0") == "10x10+0+0"
    assert decode(EncodingKind.BOOL, None) is None


def test_encode_wraps_failures_of_the_value() -> None:
    class Unprintable:
        def __repr__(self) -> str:
            raise RuntimeError("boom")

        def __str__(self) -> str:
            raise RuntimeError("boom")

        def __bool__(self) -> bool:
            raise RuntimeError("boom")

    for kind in (EncodingKind.BOOL, EncodingKind.OBJECT, EncodingKind.FUNCTION):
        with pytest.raises(EncodeError):
            encode(kind, Unprintable())


def test_encode_geometry_rejects_negative_offsets() -> None:
    host = MappingHost(parameters={"width": 800, "height": 600, "left": -1920, "top": 0})
    with pytest.raises(SourceUnavailable):
        encode_geometry(host)
