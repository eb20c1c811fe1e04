"""Field coercion helpers shared by the catalog loader.

Each helper validates one field of a raw step record and raises
:class:`CatalogError` naming the step and field when the shape is wrong.
"""

from __future__ import annotations

import collections.abc as cabc
import datetime as dt
import types
import typing as typ

from .models import (
    CatalogError,
    DepositCalculation,
    Endpoint,
    FormField,
    ResponseExample,
    UrlParts,
)
from .values import MapValue, ValueShapeError, format_scalar, to_scalar, to_value

if typ.TYPE_CHECKING:
    from .values import Scalar, Value

_SCALAR_TYPES = (str, int, float, bool, dt.date)


def _fail(step_id: int, field: str, problem: str) -> typ.NoReturn:
    msg = f"Step {step_id}: field '{field}' {problem}."
    raise CatalogError(msg, step_id=step_id, field=field)


def _require_str(value: object, *, step_id: int, field: str) -> str:
    """Return ``value`` when it is a non-empty string."""
    if not isinstance(value, str) or not value.strip():
        _fail(step_id, field, "must be a non-empty string")
    return value


def _optional_str(value: object, *, step_id: int, field: str) -> str | None:
    """Return ``value`` as text, or ``None`` when absent."""
    if value is None:
        return None
    if not isinstance(value, str):
        _fail(step_id, field, "must be a string")
    return value


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _str_list(value: object, *, step_id: int, field: str) -> tuple[str, ...]:
    """Return an ordered tuple of strings."""
    if not isinstance(value, list):
        _fail(step_id, field, "must be a list of strings")
    for index, item in enumerate(value, start=1):
        if not isinstance(item, str):
            _fail(step_id, field, f"item {index} must be a string")
    return tuple(value)


def _scalar_map(
    value: object, *, step_id: int, field: str
) -> cabc.Mapping[str, Scalar]:
    """Return a read-only flat mapping of string keys to scalar values."""
    if not isinstance(value, cabc.Mapping):
        _fail(step_id, field, "must be a mapping")
    for key, item in value.items():
        if not isinstance(key, str):
            _fail(step_id, field, f"key {key!r} must be a string")
        if item is not None and not isinstance(item, _SCALAR_TYPES):
            _fail(step_id, field, f"entry '{key}' must be a scalar")
    return types.MappingProxyType(
        {key: to_scalar(item) for key, item in value.items()}
    )


def _text_map(value: object, *, step_id: int, field: str) -> cabc.Mapping[str, str]:
    """Return a read-only mapping whose keys and values are all strings."""
    mapping = _scalar_map(value, step_id=step_id, field=field)
    for key, item in mapping.items():
        if not isinstance(item, str):
            _fail(step_id, field, f"entry '{key}' must be a string")
    return typ.cast("cabc.Mapping[str, str]", mapping)


def _structured(value: object, *, step_id: int, field: str) -> Value:
    """Convert nested content into a tagged value."""
    try:
        return to_value(value, path=field)
    except ValueShapeError as exc:
        _fail(step_id, field, f"holds an {exc}")


def _structured_map(value: object, *, step_id: int, field: str) -> MapValue:
    if not isinstance(value, cabc.Mapping):
        _fail(step_id, field, "must be a mapping")
    return typ.cast("MapValue", _structured(value, step_id=step_id, field=field))


def _endpoint(value: object, *, step_id: int) -> Endpoint:
    field = "endpoint"
    match value:
        case {"method": str(method), "url": str(url), **rest}:
            pass
        case _:
            _fail(step_id, field, "requires string 'method' and 'url'")
    params = rest.get("params") or ""
    if not isinstance(params, str):
        _fail(step_id, field, "'params' must be a string")
    return Endpoint(method=method.upper(), url=url, params=params)


def _form_fields(value: object, *, step_id: int) -> tuple[FormField, ...]:
    field = "form_fields"
    if not isinstance(value, list):
        _fail(step_id, field, "must be a list of mappings")
    fields: list[FormField] = []
    for index, entry in enumerate(value, start=1):
        match entry:
            case {"name": str(name), **rest} if name:
                pass
            case _:
                _fail(step_id, field, f"item {index} requires 'name'")
        required = rest.get("required", False)
        if not isinstance(required, bool):
            _fail(step_id, field, f"item {index} 'required' must be a boolean")
        example = rest.get("example", "")
        if not isinstance(example, _SCALAR_TYPES):
            _fail(step_id, field, f"item {index} 'example' must be a scalar")
        fields.append(
            FormField(name=name, required=required, example=format_scalar(example))
        )
    return tuple(fields)


def _response_example(value: object, *, step_id: int) -> ResponseExample:
    field = "response_example"
    if not isinstance(value, cabc.Mapping) or "body" not in value:
        _fail(step_id, field, "requires a 'body'")
    status = value.get("status")
    if status is not None and (not isinstance(status, int) or isinstance(status, bool)):
        _fail(step_id, field, "'status' must be an integer")
    body = _structured(value["body"], step_id=step_id, field=field)
    return ResponseExample(body=body, status=status)


def _deposit_calculation(value: object, *, step_id: int) -> DepositCalculation:
    field = "deposit_calculation"
    if not isinstance(value, cabc.Mapping):
        _fail(step_id, field, "must be a mapping")
    numbers: dict[str, int | float] = {}
    for key in ("full_price", "deposit_percent", "deposit_amount", "remaining_balance"):
        number = value.get(key)
        if not _is_number(number):
            _fail(step_id, field, f"requires numeric '{key}'")
        numbers[key] = typ.cast("int | float", number)
    currency = value.get("currency", "£")
    if not isinstance(currency, str):
        _fail(step_id, field, "'currency' must be a string")
    return DepositCalculation(currency=currency, **numbers)


def _url_parts(value: object, *, step_id: int) -> UrlParts:
    field = "url_parts"
    match value:
        case {"base": str(base), **rest}:
            pass
        case _:
            _fail(step_id, field, "requires a string 'base'")
    query = _structured_map(rest.get("query") or {}, step_id=step_id, field=field)
    return UrlParts(base=base, query=query)


__all__ = [
    "_deposit_calculation",
    "_endpoint",
    "_fail",
    "_form_fields",
    "_is_number",
    "_optional_str",
    "_require_str",
    "_response_example",
    "_scalar_map",
    "_str_list",
    "_structured",
    "_structured_map",
    "_text_map",
    "_url_parts",
]
