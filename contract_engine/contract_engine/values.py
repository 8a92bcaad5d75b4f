"""Classification and comparison of generic JSON values.

Values are the plain Python objects produced by :func:`json.loads`:
``None``, ``bool``, ``int``, ``float``, ``str``, ``list`` and ``dict``.
"""

from __future__ import annotations

from typing import Any

from contract_engine.models.contract import ValueType


def detect_value_type(value: Any) -> ValueType:
    """Return the JSON kind of *value*.

    ``bool`` is checked before numbers because it subclasses ``int``.

    Raises
    ------
    TypeError
        If *value* is not a JSON value.
    """
    if value is None:
        return ValueType.NULL
    if isinstance(value, bool):
        return ValueType.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueType.NUMBER
    if isinstance(value, str):
        return ValueType.STRING
    if isinstance(value, list):
        return ValueType.ARRAY
    if isinstance(value, dict):
        return ValueType.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def json_equal(left: Any, right: Any) -> bool:
    """Structural equality over JSON values without type coercion.

    ``True`` never equals ``1`` and an integer never equals a float, even
    when numerically equal (``1`` vs ``1.0``).
    """
    left_kind = detect_value_type(left)
    if left_kind != detect_value_type(right):
        return False

    if left_kind == ValueType.NUMBER:
        return isinstance(left, int) == isinstance(right, int) and left == right
    if left_kind == ValueType.ARRAY:
        return len(left) == len(right) and all(json_equal(a, b) for a, b in zip(left, right))
    if left_kind == ValueType.OBJECT:
        if left.keys() != right.keys():
            return False
        return all(json_equal(left[key], right[key]) for key in left)
    return left == right


def is_empty_value(value: Any) -> bool:
    """Return True when *value* carries no content.

    ``null``, whitespace-only strings, ``[]`` and ``{}`` are empty;
    numbers and booleans never are.
    """
    kind = detect_value_type(value)
    if kind == ValueType.NULL:
        return True
    if kind == ValueType.STRING:
        return not value.strip()
    if kind in (ValueType.ARRAY, ValueType.OBJECT):
        return len(value) == 0
    return False


def is_empty_row(row: dict[str, Any]) -> bool:
    """Return True for ``{}`` or an object whose every value is empty."""
    return all(is_empty_value(v) for v in row.values())
