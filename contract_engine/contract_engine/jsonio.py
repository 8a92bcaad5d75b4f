"""Strict JSON text decoding shared by the contract and output parsers.

:func:`json.loads` is lenient in ways that let non-JSON values through:
it accepts ``NaN``/``Infinity``, turns overflowing literals such as
``1e999`` into ``inf`` and decodes unpaired ``\\uD800``-style escapes
into lone surrogates.  None of those can be written back out as a
UTF-8 JSON document, so they are rejected here.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any

_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant '{name}'")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"number out of range: {text}")
    return value


def _check_strings(value: Any) -> None:
    if isinstance(value, str):
        if _LONE_SURROGATE.search(value):
            raise ValueError("unpaired surrogate escape in string")
    elif isinstance(value, list):
        for item in value:
            _check_strings(item)
    elif isinstance(value, dict):
        for key, item in value.items():
            _check_strings(key)
            _check_strings(item)


def loads_strict(text: str | bytes) -> Any:
    """Decode *text* as standard JSON.

    Raises
    ------
    ValueError
        If *text* is malformed, uses a non-standard constant, holds a
        number outside the float range or a string with an unpaired
        surrogate.
    """
    value = json.loads(text, parse_constant=_reject_constant, parse_float=_parse_finite_float)
    _check_strings(value)
    return value
