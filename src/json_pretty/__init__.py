"""json_pretty — key-order-preserving JSON pretty-printer."""

from .errors import (
    JSONPrettyError,
    JSONReadError,
    NumericRepresentationError,
    UnsupportedValueError,
)
from .formatter import FormatOptions, format_json, format_value
from .model import (
    Null,
    Value,
    VArray,
    VBool,
    VNull,
    VNumber,
    VObject,
    VString,
)
from .reader import from_value, read_json, read_json_file, to_value
from .repl import FormatterSession

__all__ = [
    "format_json",
    "format_value",
    "FormatOptions",
    "read_json",
    "read_json_file",
    "to_value",
    "from_value",
    "Null",
    "Value",
    "VArray",
    "VBool",
    "VNull",
    "VNumber",
    "VObject",
    "VString",
    "JSONPrettyError",
    "JSONReadError",
    "NumericRepresentationError",
    "UnsupportedValueError",
    "FormatterSession",
]
