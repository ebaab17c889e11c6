"""
objects.py

Responsibility: Small object helpers that sit next to the selector builder.

- `Rectangle`: width/height value object with a derived area.
- `get_json`: compact JSON text for a value (same shape as `JSON.stringify`).
- `from_json`: rebuild an instance of a given class from JSON text, copying the
  parsed fields onto it without calling `__init__`.
"""

from __future__ import annotations

import json
import math
from typing import Any, TypeVar

T = TypeVar("T")


class MalformedInput(ValueError):
    pass


class Rectangle:
    def __init__(self, width: float, height: float) -> None:
        self.width = width
        self.height = height

    def get_area(self) -> float:
        return self.height * self.width

    def __repr__(self) -> str:
        return f"Rectangle(width={self.width!r}, height={self.height!r})"


def _finite(obj: Any) -> Any:
    # Non-finite floats become null, as with JSON.stringify.
    if isinstance(obj, float) and not math.isfinite(obj):
        return None
    if isinstance(obj, dict):
        return {k: _finite(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_finite(v) for v in obj]
    return obj


def _default(obj: Any) -> Any:
    # Plain objects serialize as their instance fields.
    if hasattr(obj, "__dict__"):
        return _finite(dict(vars(obj)))
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _reject_constant(name: str) -> Any:
    raise MalformedInput(f"Invalid JSON: non-standard constant {name}")


def get_json(obj: Any) -> str:
    """
    Return the JSON representation of `obj`.

    Examples:
    - [1, 2, 3] -> '[1,2,3]'
    - {"height": 10, "width": 20} -> '{"height":10,"width":20}'
    - {"x": float("nan")} -> '{"x":null}'
    """
    return json.dumps(
        _finite(obj),
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
        default=_default,
    )


def from_json(proto: type[T], text: str) -> T:
    """
    Return a `proto` instance whose fields are exactly the keys of the JSON object.

    The fields are copied as parsed and are not re-validated; behavior (methods)
    comes from `proto`:

        r = from_json(Rectangle, '{"width":10, "height":20}')
        r.get_area()  # => 200
    """
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise MalformedInput(f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})") from e
    if not isinstance(data, dict):
        raise MalformedInput(f"JSON must be an object at the top level, got {type(data).__name__}.")

    obj = proto.__new__(proto)
    obj.__dict__.update(data)
    return obj
