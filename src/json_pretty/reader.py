"""Reader layer: converts raw JSON text and plain Python data to Values."""

from __future__ import annotations

import json
import logging
import os
from typing import IO, Any, Iterator

from .errors import JSONReadError, UnsupportedValueError
from .model import Null, Value, VArray, VBool, VNull, VNumber, VObject, VString

logger = logging.getLogger(__name__)

_VALUE_TYPES = (VNull, VBool, VNumber, VString, VArray, VObject)
_DONE = object()


class _Pairs(list):
    """Key/value pairs of one JSON object, in source order."""


# ---------------------------------------------------------------------------
# Text → Value
# ---------------------------------------------------------------------------

def read_json(text: str | bytes) -> Value:
    """Parse *text* with the standard parser and convert it to a Value.

    Object keys keep their source order; duplicate keys are all kept.
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise JSONReadError(f"Input is not valid UTF-8 ({exc.reason})") from exc

    try:
        raw = json.loads(text, object_pairs_hook=_Pairs)
    except json.JSONDecodeError as exc:
        raise JSONReadError(exc.msg, exc.lineno, exc.colno) from exc
    except RecursionError as exc:
        raise JSONReadError("Input is nested too deeply") from exc
    except ValueError as exc:
        # e.g. integer literals beyond the int/str digit limit
        raise JSONReadError(str(exc)) from exc

    logger.debug("parsed %d characters of JSON", len(text))
    return to_value(raw)


def read_json_file(source: str | os.PathLike | IO[str] | IO[bytes]) -> Value:
    """Read JSON from a path or an open (text or binary) file object."""
    if hasattr(source, "read"):
        content = source.read()
        return read_json(content)

    path = os.fspath(source)
    try:
        with open(path, "rb") as fh:
            content = fh.read()
    except OSError as exc:
        raise JSONReadError(f"Cannot read '{path}': {exc.strerror}") from exc
    logger.debug("read %d bytes from %s", len(content), path)
    return read_json(content)


# ---------------------------------------------------------------------------
# Python data ↔ Value
# ---------------------------------------------------------------------------

def _leaf(obj: Any) -> Value | None:
    """Scalar Value for *obj*, or ``None`` if *obj* is a container to descend into."""
    if isinstance(obj, _VALUE_TYPES):
        return obj
    if obj is None:
        return Null
    if isinstance(obj, bool):
        return VBool(obj)
    if isinstance(obj, (int, float)):
        return VNumber(obj)
    if isinstance(obj, str):
        return VString(obj)
    if isinstance(obj, (dict, list, tuple)):
        return None
    raise UnsupportedValueError(
        f"Object of type {type(obj).__name__} has no JSON representation"
    )


def _is_object(obj: Any) -> bool:
    return isinstance(obj, (_Pairs, dict))


def _children(obj: Any) -> Iterator[tuple[str | None, Any]]:
    if isinstance(obj, _Pairs):
        return iter(obj)
    if isinstance(obj, dict):
        return ((_key(k), v) for k, v in obj.items())
    return ((None, v) for v in obj)


def _key(key: Any) -> str:
    if not isinstance(key, str):
        raise UnsupportedValueError(
            f"Object keys must be str, not {type(key).__name__}"
        )
    return key


def to_value(obj: Any) -> Value:
    """Convert plain Python data to a Value.

    - ``None`` → Null
    - ``bool`` → VBool (checked before ``int``)
    - ``int`` / ``float`` → VNumber
    - ``str`` → VString
    - ``list`` / ``tuple`` → VArray
    - ``dict`` or parser pairs → VObject, keeping iteration order

    Values are returned unchanged. Containers are walked with an explicit
    stack, so nesting depth is not bounded by the interpreter's recursion
    limit.
    """
    leaf = _leaf(obj)
    if leaf is not None:
        return leaf

    # frame: [is_object, pending children, converted (key, value) pairs, key in parent]
    stack = [[_is_object(obj), _children(obj), [], None]]
    while True:
        frame = stack[-1]
        is_object, pending, done, parent_key = frame
        child = next(pending, _DONE)
        if child is _DONE:
            stack.pop()
            if is_object:
                value: Value = VObject(tuple(done))
            else:
                value = VArray(tuple(v for _, v in done))
            if not stack:
                return value
            stack[-1][2].append((parent_key, value))
            continue

        key, item = child
        leaf = _leaf(item)
        if leaf is None:
            stack.append([_is_object(item), _children(item), [], key])
        else:
            done.append((key, leaf))


def from_value(value: Value) -> Any:
    """Convert a Value back to plain Python data (dicts keep the last duplicate)."""
    if not isinstance(value, (VArray, VObject)):
        return _plain(value)

    root: Any = {} if isinstance(value, VObject) else []
    stack = [(value, root)]
    while stack:
        source, target = stack.pop()
        pairs = source.entries if isinstance(source, VObject) else enumerate(source.items)
        for key, item in pairs:
            if isinstance(item, (VArray, VObject)):
                child: Any = {} if isinstance(item, VObject) else []
                stack.append((item, child))
            else:
                child = _plain(item)
            if isinstance(target, dict):
                target[key] = child
            else:
                target.append(child)
    return root


def _plain(value: Value) -> Any:
    if isinstance(value, VNull):
        return None
    if isinstance(value, (VBool, VNumber, VString)):
        return value.value
    raise UnsupportedValueError(f"Not a JSON value: {value!r}")
