"""Textual override adapter.

Purpose
-------
Translate ``PATH=VALUE`` assignments typed on a command line into
``(AccessPath, value)`` pairs for :meth:`Builder.set`.

Key behaviours
--------------
* Splits on the first ``=`` only, so values may contain ``=``.
* Values that look like JSON containers or quoted strings are parsed as JSON.
* Performs light type coercion for common scalars (bools, ints, floats,
  ``null``/``none``); anything else stays a string.
"""

from __future__ import annotations

import json
from typing import Any

from ..domain.paths import AccessPath

_JSON_PREFIXES = ("{", "[", '"')


def parse_assignment(text: str) -> tuple[AccessPath, Any]:
    """Split ``PATH=VALUE`` into a path and a coerced value.

    Raises
    ------
    ValueError
        When ``=`` is missing or the path part is empty.

    Examples
    --------
    >>> path, value = parse_assignment("orders.0.id=2")
    >>> str(path), value
    ('orders.0.id', 2)
    >>> parse_assignment('address={"city": "San Jose"}')[1]
    {'city': 'San Jose'}
    """

    raw_path, separator, raw_value = text.partition("=")
    raw_path = raw_path.strip()
    if not separator or not raw_path:
        raise ValueError(f"Expected PATH=VALUE, got {text!r}")
    return AccessPath.parse(raw_path), coerce_value(raw_value)


def coerce_value(value: str) -> Any:
    """Coerce a textual value to a Python primitive where possible.

    Examples
    --------
    >>> coerce_value('true'), coerce_value('10'), coerce_value('3.5'), coerce_value('San Jose')
    (True, 10, 3.5, 'San Jose')
    >>> coerce_value('null') is None, coerce_value('[1, 2]')
    (True, [1, 2])
    """

    stripped = value.strip()
    if stripped.startswith(_JSON_PREFIXES):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return value
    lowered = stripped.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"null", "none"}:
        return None
    try:
        if stripped.isdigit() or (stripped.startswith("-") and stripped[1:].isdigit()):
            return int(stripped)
        return float(stripped)
    except ValueError:
        return value
