"""JSON wire codec for whole-value request and response bodies.

``encode`` turns a handler result (or client payload) into JSON bytes.
``decode`` parses JSON bytes and checks the value against a declared
type, building dataclass instances where the type asks for one.

Supported declared types: ``Any``/``object``, ``None``, ``bool``, ``int``,
``float``, ``str``, ``list[X]``, ``tuple[X, ...]``, ``tuple[A, B]``,
``dict[str, X]``, unions (``X | None``), ``Literal[...]`` and dataclasses
built from those.
"""

import dataclasses
import json
import types
from typing import Any, Literal, Union, get_args, get_origin, get_type_hints

from duet.errors import DecodeError


def encode(value: Any) -> bytes:
    """Encode *value* as compact UTF-8 JSON.

    Dataclass instances become objects and tuples become arrays.
    Raises ``TypeError`` for values JSON cannot represent.
    """
    return json.dumps(
        _to_jsonable(value),
        separators=(",", ":"),
        ensure_ascii=False,
    ).encode("utf-8")


def _to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {key: _to_jsonable(item) for key, item in value.items()}
    return value


def decode(raw: bytes | str, kind: Any) -> Any:
    """Parse *raw* as JSON and convert it to *kind*.

    Raises ``DecodeError`` if *raw* is not JSON or the parsed value does
    not fit *kind*.
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        msg = f"Invalid JSON: {exc}"
        raise DecodeError(msg) from exc
    return convert(data, kind)


def convert(data: Any, kind: Any) -> Any:
    """Check parsed JSON *data* against *kind*, returning the typed value."""
    if kind is Any or kind is object:
        return data

    if kind is None or kind is type(None):
        if data is not None:
            _mismatch(data, "null")
        return None

    if kind is bool:
        if not isinstance(data, bool):
            _mismatch(data, "boolean")
        return data

    if kind is int:
        if isinstance(data, bool) or not isinstance(data, int):
            _mismatch(data, "integer")
        return data

    if kind is float:
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            _mismatch(data, "number")
        return float(data)

    if kind is str:
        if not isinstance(data, str):
            _mismatch(data, "string")
        return data

    origin = get_origin(kind)
    args = get_args(kind)

    if kind is list or origin is list:
        if not isinstance(data, list):
            _mismatch(data, "array")
        item_kind = args[0] if args else Any
        return [convert(item, item_kind) for item in data]

    if kind is tuple or origin is tuple:
        if not isinstance(data, list):
            _mismatch(data, "array")
        if not args:
            return tuple(data)
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(convert(item, args[0]) for item in data)
        if len(args) != len(data):
            msg = f"Expected array of length {len(args)}, got {len(data)}"
            raise DecodeError(msg)
        return tuple(convert(item, item_kind) for item_kind, item in zip(args, data, strict=True))

    if kind is dict or origin is dict:
        if not isinstance(data, dict):
            _mismatch(data, "object")
        value_kind = args[1] if len(args) == 2 else Any
        return {key: convert(item, value_kind) for key, item in data.items()}

    if origin is Union or origin is types.UnionType:
        for arm in args:
            try:
                return convert(data, arm)
            except DecodeError:
                continue
        _mismatch(data, " | ".join(getattr(a, "__name__", str(a)) for a in args))

    if origin is Literal:
        if data not in args:
            msg = f"Expected one of {args!r}, got {data!r}"
            raise DecodeError(msg)
        return data

    if isinstance(kind, type) and dataclasses.is_dataclass(kind):
        return _convert_dataclass(data, kind)

    msg = f"Unsupported type for JSON decoding: {kind!r}"
    raise DecodeError(msg)


def _convert_dataclass(data: Any, cls: type) -> Any:
    """Build a dataclass instance from a JSON object.

    Keys without a matching field are ignored. A missing key falls back to
    the field default; a missing key without a default is an error.
    """
    if not isinstance(data, dict):
        _mismatch(data, f"{cls.__name__} object")

    hints = get_type_hints(cls)
    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        if f.name in data:
            kwargs[f.name] = convert(data[f.name], hints.get(f.name, Any))
        elif f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            msg = f"{cls.__name__}: missing required field {f.name!r}"
            raise DecodeError(msg)
    return cls(**kwargs)


def _mismatch(data: Any, expected: str) -> None:
    msg = f"Expected {expected}, got {type(data).__name__}"
    raise DecodeError(msg)
