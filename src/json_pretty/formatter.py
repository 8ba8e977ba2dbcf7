"""Formatter: renders a Value as indented, key-order-preserving JSON text.

Layout rules::

    {                      [
      "key": value,          value,
      "key": [               {
        value                  "key": value
      ]                      }
    }                      ]

- Objects close with ``}`` and no trailing line break.
- Arrays close with ``]`` followed by a line break; the line break is
  dropped where the array is embedded in a parent container.
- Strings are written between double quotes exactly as they are, unless
  ``FormatOptions.escape_strings`` is set.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, NamedTuple

from .errors import NumericRepresentationError, UnsupportedValueError
from .model import Scalar, Value, VArray, VBool, VNull, VNumber, VObject, VString
from .reader import to_value

logger = logging.getLogger(__name__)

INDENT_WIDTH = 2

# Floats at or above this magnitude switch to exponent notation.
_EXPONENT_THRESHOLD = 1e21


@dataclass(frozen=True)
class FormatOptions:
    indent_width: int = INDENT_WIDTH
    escape_strings: bool = False
    allow_nan: bool = False

    def __post_init__(self) -> None:
        if self.indent_width < 0:
            raise ValueError(f"indent_width must be >= 0, got {self.indent_width}")


DEFAULT_OPTIONS = FormatOptions()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def format_json(value: Value | Any, options: FormatOptions | None = None) -> str:
    """Return the pretty-printed text of *value*.

    Plain Python data (dicts, lists, scalars) is converted with
    :func:`~json_pretty.reader.to_value` first. Arrays render through the
    array path and objects through the object path at depth 0; a
    top-level scalar renders as its scalar text.
    """
    options = options or DEFAULT_OPTIONS
    value = to_value(value)
    text = format_value(value, 0, False, options)
    logger.debug("formatted %s into %d characters", type(value).__name__, len(text))
    return text


def format_value(
    value: Value,
    depth: int,
    as_property_value: bool = False,
    options: FormatOptions | None = None,
) -> str:
    """Render *value* at *depth* indent units.

    *as_property_value* suppresses the indentation before an opening
    brace or bracket, for containers that follow a ``"key": `` prefix.
    Scalars never carry indentation of their own.

    Nested containers are expanded from an explicit work stack of text
    pieces and pending containers, so deep input does not recurse.
    """
    options = options or DEFAULT_OPTIONS
    if not isinstance(value, (VArray, VObject)):
        return format_scalar(value, options)

    out: list[str] = []
    stack: list[str | _Pending] = [_Pending(value, depth, as_property_value, False)]
    while stack:
        piece = stack.pop()
        if isinstance(piece, str):
            out.append(piece)
        elif isinstance(piece.value, VArray):
            stack.extend(reversed(_array_pieces(piece, options)))
        else:
            stack.extend(reversed(_object_pieces(piece, options)))
    return "".join(out)


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

class _Pending(NamedTuple):
    """A container still to be expanded; *embedded* drops the array's closing line break."""

    value: VArray | VObject
    depth: int
    as_property_value: bool
    embedded: bool


def _indent(depth: int, options: FormatOptions) -> str:
    return " " * (depth * options.indent_width)


def _array_pieces(p: _Pending, options: FormatOptions) -> list[str | _Pending]:
    pad = _indent(p.depth, options)
    child_pad = _indent(p.depth + 1, options)
    pieces: list[str | _Pending] = ["[\n" if p.as_property_value else pad + "[\n"]

    last = len(p.value.items) - 1
    for i, item in enumerate(p.value.items):
        if isinstance(item, (VArray, VObject)):
            pieces.append(_Pending(item, p.depth + 1, False, True))
        else:
            pieces.append(child_pad + format_scalar(item, options))
        pieces.append("\n" if i == last else ",\n")

    pieces.append(pad + "]" if p.embedded else pad + "]\n")
    return pieces


def _object_pieces(p: _Pending, options: FormatOptions) -> list[str | _Pending]:
    pad = _indent(p.depth, options)
    child_pad = _indent(p.depth + 1, options)
    pieces: list[str | _Pending] = ["{\n" if p.as_property_value else pad + "{\n"]

    for i, (key, val) in enumerate(p.value.entries):
        if i:
            pieces.append(",\n")
        pieces.append(child_pad + _format_string(key, options) + ": ")
        if isinstance(val, (VArray, VObject)):
            pieces.append(_Pending(val, p.depth + 1, True, True))
        else:
            pieces.append(format_scalar(val, options))
    if p.value.entries:
        pieces.append("\n")

    pieces.append(pad + "}")
    return pieces


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

def format_scalar(value: Scalar, options: FormatOptions | None = None) -> str:
    """Render a null, boolean, number or string."""
    options = options or DEFAULT_OPTIONS
    if isinstance(value, VNull):
        return "null"
    if isinstance(value, VBool):
        return "true" if value.value else "false"
    if isinstance(value, VNumber):
        return format_number(value.value, options)
    if isinstance(value, VString):
        return _format_string(value.value, options)
    raise UnsupportedValueError(f"Not a JSON scalar: {value!r}")


def format_number(number: int | float, options: FormatOptions | None = None) -> str:
    """Minimal decimal text of *number*; integral floats drop the fraction."""
    options = options or DEFAULT_OPTIONS
    if isinstance(number, bool):
        raise UnsupportedValueError("bool is not a JSON number")
    if isinstance(number, int):
        try:
            return str(number)
        except ValueError as exc:
            # beyond the int/str digit limit
            raise NumericRepresentationError(str(exc)) from exc

    if math.isnan(number) or math.isinf(number):
        if not options.allow_nan:
            raise NumericRepresentationError(f"Out of range float value: {number!r}")
        if math.isnan(number):
            return "NaN"
        return "Infinity" if number > 0 else "-Infinity"

    if number.is_integer() and abs(number) < _EXPONENT_THRESHOLD:
        return str(int(number))
    return repr(number)


def _format_string(text: str, options: FormatOptions) -> str:
    if options.escape_strings:
        return json.dumps(text, ensure_ascii=False)
    return '"' + text + '"'
