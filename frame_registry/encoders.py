"""
String encodings for settings written to the registry.

Booleans use the xrdb convention ("on"/"off"), integers are decimal text and
arbitrary objects use ``repr`` restricted to values ``ast.literal_eval`` can
read back. Encoders return ``None`` when a value is absent; the caller
deletes the key in that case.
"""

from __future__ import annotations

import ast
import re
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from .errors import EncodeError, SourceUnavailable

BOOL_ON = "on"
BOOL_OFF = "off"

_GEOMETRY_RE = re.compile(r"^(\d+)x(\d+)\+(\d+)\+(\d+)$")
_GEOMETRY_PARAMETERS = ("width", "height", "left", "top")


class EncodingKind(Enum):
    BOOL = "bool"
    INT = "int"
    OBJECT = "object"
    FUNCTION = "function"


def encode_bool(value: Any) -> str:
    return BOOL_ON if value else BOOL_OFF


def encode_int(value: Any) -> Optional[str]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return str(value)


def encode_object(value: Any) -> Optional[str]:
    """Return ``repr(value)`` if it reads back as an equal literal."""
    if value is None:
        return None
    text = repr(value)
    try:
        parsed = ast.literal_eval(text)
    except (ValueError, SyntaxError) as exc:
        raise EncodeError(f"{type(value).__name__} value {text} is not a readable literal") from exc
    if parsed != value:
        raise EncodeError(f"{text} does not read back as the same value")
    return text


def encode_function(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    return text or None


_ENCODERS: Dict[EncodingKind, Callable[[Any], Optional[str]]] = {
    EncodingKind.BOOL: encode_bool,
    EncodingKind.INT: encode_int,
    EncodingKind.OBJECT: encode_object,
    EncodingKind.FUNCTION: encode_function,
}
_MISSING_ENCODERS = set(EncodingKind) - set(_ENCODERS)
if _MISSING_ENCODERS:
    raise TypeError(f"No encoder registered for {sorted(k.name for k in _MISSING_ENCODERS)}")


def encode(kind: EncodingKind, value: Any) -> Optional[str]:
    """Encode ``value`` as ``kind``; any failure of the value itself surfaces as ``EncodeError``."""
    try:
        return _ENCODERS[kind](value)
    except EncodeError:
        raise
    except Exception as exc:
        raise EncodeError(f"Cannot encode {type(value).__name__} value as {kind.value}: {exc}") from exc


def encode_geometry(host) -> str:
    """
    Format the host window geometry as ``<w>x<h>+<left>+<top>``.

    ``host`` is any object with a ``frame_parameter(name)`` accessor.
    """
    values = []
    for name in _GEOMETRY_PARAMETERS:
        try:
            value = host.frame_parameter(name)
        except Exception as exc:
            raise SourceUnavailable(f"Cannot read frame parameter {name!r}: {exc}") from exc
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise SourceUnavailable(f"Frame parameter {name!r} is not a non-negative integer: {value!r}")
        values.append(value)
    return "%dx%d+%d+%d" % tuple(values)


def decode_bool(text: Optional[str]) -> Optional[bool]:
    if text == BOOL_ON:
        return True
    if text == BOOL_OFF:
        return False
    return None


def decode_geometry(text: Optional[str]) -> Optional[Tuple[int, int, int, int]]:
    match = _GEOMETRY_RE.match(text or "")
    if not match:
        return None
    width, height, left, top = (int(part) for part in match.groups())
    return width, height, left, top


def decode(kind: EncodingKind, text: Optional[str]) -> Any:
    """Best-effort inverse of ``encode`` for restore-side callers."""
    if text is None:
        return None
    if kind is EncodingKind.BOOL:
        return decode_bool(text)
    if kind is EncodingKind.INT:
        try:
            return int(text)
        except ValueError:
            return None
    if kind is EncodingKind.OBJECT:
        try:
            return ast.literal_eval(text)
        except (ValueError, SyntaxError):
            return None
    return text
