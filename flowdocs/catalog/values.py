"""Tagged value variant for illustrative structured content.

Request bodies, webhook payloads and database documents shown by the viewer
are arbitrary nested structures. They are converted once, at catalog load
time, into a closed set of shapes so the pretty-printer only ever has to deal
with scalars, ordered lists, and ordered key/value maps.

Examples
--------
>>> value = to_value({"b": 1, "a": [True, None]})
>>> [key for key, _ in value.entries]
['b', 'a']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import datetime as dt
import math
import typing as typ

Scalar: typ.TypeAlias = str | int | float | bool | None


class ValueShapeError(TypeError):
    """Raised when raw content cannot be expressed as a tagged value."""

    def __init__(self, path: str, kind: str) -> None:
        self.path = path
        self.kind = kind
        super().__init__(f"unsupported value of type '{kind}' at '{path}'")


@dc.dataclass(frozen=True, slots=True)
class ScalarValue:
    """A leaf value: text, number, boolean, or null."""

    value: Scalar


@dc.dataclass(frozen=True, slots=True)
class ListValue:
    """An ordered sequence of values."""

    items: tuple[Value, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class MapValue:
    """An ordered mapping of string keys to values."""

    entries: tuple[tuple[str, Value], ...] = ()

    def get(self, key: str) -> Value | None:
        """Return the value stored under ``key`` or ``None``."""
        for entry_key, entry_value in self.entries:
            if entry_key == key:
                return entry_value
        return None

    def keys(self) -> list[str]:
        """Return the keys in insertion order."""
        return [key for key, _ in self.entries]


Value: typ.TypeAlias = ScalarValue | ListValue | MapValue


def to_value(raw: object, *, path: str = "$") -> Value:
    """Convert parsed YAML/JSON data into a tagged value.

    Parameters
    ----------
    raw : object
        Mapping, sequence, or scalar as produced by a safe YAML loader.
    path : str, optional
        Location of ``raw`` inside the enclosing document, used in errors.

    Returns
    -------
    Value
        The equivalent tagged value with insertion order preserved.

    Raises
    ------
    ValueShapeError
        If ``raw`` (or anything nested in it) is not a string, number,
        boolean, null, list, or string-keyed mapping.
    """
    match raw:
        case ScalarValue() | ListValue() | MapValue():
            return raw
        case None | bool() | int() | float() | str() | dt.date():
            return ScalarValue(to_scalar(raw))
        case cabc.Mapping():
            entries: list[tuple[str, Value]] = []
            for key, item in raw.items():
                if not isinstance(key, str):
                    raise ValueShapeError(f"{path}.{key}", type(key).__name__)
                entries.append((key, to_value(item, path=f"{path}.{key}")))
            return MapValue(tuple(entries))
        case list() | tuple():
            return ListValue(
                tuple(
                    to_value(item, path=f"{path}[{index}]")
                    for index, item in enumerate(raw)
                )
            )
        case _:
            raise ValueShapeError(path, type(raw).__name__)


def to_scalar(raw: object) -> object:
    """Return ``raw`` with unquoted YAML dates and timestamps as ISO 8601 text."""
    if isinstance(raw, dt.date):
        return raw.isoformat()
    return raw


def format_scalar(value: object) -> str:
    """Render a scalar the way it reads in JSON, strings left unquoted."""
    match value:
        case None:
            return "null"
        case bool():
            return "true" if value else "false"
        case float() if math.isfinite(value) and value.is_integer():
            return str(int(value))
        case dt.date():
            return value.isoformat()
        case ScalarValue(inner):
            return format_scalar(inner)
        case _:
            return str(value)


def to_plain(value: Value) -> object:
    """Convert a tagged value back into plain dicts, lists and scalars."""
    match value:
        case ScalarValue(inner):
            return inner
        case ListValue(items):
            return [to_plain(item) for item in items]
        case MapValue(entries):
            return {key: to_plain(item) for key, item in entries}
    msg = f"not a tagged value: {value!r}"
    raise TypeError(msg)


__all__ = [
    "ListValue",
    "MapValue",
    "Scalar",
    "ScalarValue",
    "Value",
    "ValueShapeError",
    "format_scalar",
    "to_plain",
    "to_scalar",
    "to_value",
]
