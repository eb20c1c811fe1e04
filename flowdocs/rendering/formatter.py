"""Pure helpers turning raw field values into display text.

``humanize_key`` produces row labels from camel-style keys, ``format_row``
pairs such a label with a scalar's text, and ``pretty_print`` lays out nested
structures with two-space indentation in insertion order (the same layout as
``JSON.stringify(value, null, 2)``).

Examples
--------
>>> humanize_key("appointmentDate")
'Appointment Date'
>>> print(pretty_print({"b": 1, "a": [True]}))
{
  "b": 1,
  "a": [
    true
  ]
}
"""

from __future__ import annotations

import dataclasses as dc
import json
import math
import re

from flowdocs.catalog.values import (
    ListValue,
    MapValue,
    ScalarValue,
    Value,
    format_scalar,
    to_value,
)

INDENT = "  "
_INTERNAL_CAPITAL = re.compile(r"(?<=.)([A-Z])")


@dc.dataclass(frozen=True, slots=True)
class Row:
    """A label/value pair rendered on one line.

    ``tone`` is an optional styling hook (``"closed"``, ``"emphasis"``...).
    """

    label: str
    value: str
    tone: str | None = None


def humanize_key(key: str) -> str:
    """Return ``key`` with spaces before internal capitals, first letter upper."""
    spaced = _INTERNAL_CAPITAL.sub(r" \1", key)
    return spaced[:1].upper() + spaced[1:]


def format_row(key: str, value: object, *, tone: str | None = None) -> Row:
    """Pair the humanized ``key`` with the text of ``value``."""
    return Row(label=humanize_key(key), value=format_scalar(value), tone=tone)


def pretty_print(value: object) -> str:
    """Return an indented rendering of a nested value.

    Parameters
    ----------
    value : object
        A tagged value, or plain mappings/lists/scalars which are converted
        first.

    Returns
    -------
    str
        Multi-line text with two spaces per nesting level and mapping keys in
        insertion order.
    """
    if isinstance(value, ScalarValue | ListValue | MapValue):
        tagged: Value = value
    else:
        tagged = to_value(value)
    return "\n".join(_layout(tagged, depth=0))


def _layout(value: Value, *, depth: int) -> list[str]:
    match value:
        case ScalarValue(inner):
            return [_json_scalar(inner)]
        case ListValue(items) if not items:
            return ["[]"]
        case MapValue(entries) if not entries:
            return ["{}"]
        case ListValue(items):
            children = [_layout(item, depth=depth + 1) for item in items]
            return _wrap("[", "]", children, depth=depth)
        case MapValue(entries):
            children = []
            for key, item in entries:
                nested = _layout(item, depth=depth + 1)
                nested[0] = f"{json.dumps(key, ensure_ascii=False)}: {nested[0]}"
                children.append(nested)
            return _wrap("{", "}", children, depth=depth)
    msg = f"not a tagged value: {value!r}"
    raise TypeError(msg)


def _wrap(
    opening: str, closing: str, children: list[list[str]], *, depth: int
) -> list[str]:
    inner = INDENT * (depth + 1)
    lines = [opening]
    for position, child in enumerate(children):
        child[0] = inner + child[0]
        if position < len(children) - 1:
            child[-1] = child[-1] + ","
        lines.extend(child)
    lines.append(INDENT * depth + closing)
    return lines


def _json_scalar(value: object) -> str:
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, float) and not math.isfinite(value):
        return "null"
    return format_scalar(value)


__all__ = ["INDENT", "Row", "format_row", "format_scalar", "humanize_key", "pretty_print"]
