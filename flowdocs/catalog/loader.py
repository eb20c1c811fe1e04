"""Load and validate step catalog YAML into typed records."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import types
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _deposit_calculation,
    _endpoint,
    _fail,
    _form_fields,
    _optional_str,
    _require_str,
    _response_example,
    _scalar_map,
    _str_list,
    _structured,
    _structured_map,
    _text_map,
    _url_parts,
)
from .models import HEADER_FIELDS, Actor, CatalogError, Step, StepCatalog

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parents[1] / "data" / "payment_flow.yaml"

_FieldParser: typ.TypeAlias = cabc.Callable[..., object]

_DETAIL_PARSERS: dict[str, _FieldParser] = {
    "component": _require_str,
    "details": _scalar_map,
    "form_fields": lambda value, *, step_id, field: _form_fields(value, step_id=step_id),
    "request_example": _structured,
    "response_example": lambda value, *, step_id, field: _response_example(
        value, step_id=step_id
    ),
    "logic": _str_list,
    "business_hours": _text_map,
    "deposit_calculation": lambda value, *, step_id, field: _deposit_calculation(
        value, step_id=step_id
    ),
    "stripe_metadata": _structured_map,
    "code_snippet": _require_str,
    "payment_details": _scalar_map,
    "user_actions": _str_list,
    "webhook_payload": _structured,
    "webhook_processing": _str_list,
    "booking_document": _structured,
    "availability_update": _structured,
    "displayed_info": _scalar_map,
    "actions": _str_list,
    "backend_code": _require_str,
    "note": _require_str,
    "redirect_url": _require_str,
    "url_parts": lambda value, *, step_id, field: _url_parts(value, step_id=step_id),
}


@dc.dataclass(frozen=True, slots=True)
class CatalogDocument:
    """A loaded catalog together with its optional page copy."""

    catalog: StepCatalog
    title: str | None = None
    subtitle: str | None = None
    timing_notes: tuple[str, ...] = ()


def default_catalog_path() -> Path:
    """Return the path of the bundled payment flow catalog."""
    return DEFAULT_CATALOG_PATH


def load_catalog(path: Path) -> StepCatalog:
    """Load the step catalog stored at ``path``.

    Parameters
    ----------
    path : Path
        YAML file with a top-level ``steps`` list.

    Returns
    -------
    StepCatalog
        Validated steps in file order.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    CatalogError
        If any step record is malformed.
    """
    return load_catalog_document(path).catalog


def load_catalog_document(path: Path) -> CatalogDocument:
    """Load a catalog file including its ``page`` heading and timing notes."""
    if not path.exists():
        msg = f"Catalog file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level catalog YAML structure must be a mapping."
        raise TypeError(msg)

    records = loaded.get("steps")
    if not isinstance(records, list):
        msg = f"Catalog file '{path}' requires a 'steps' list."
        raise CatalogError(msg)
    catalog = build_catalog(records)

    page = loaded.get("page") or {}
    if not isinstance(page, dict):
        msg = "Catalog 'page' block must be a mapping."
        raise CatalogError(msg)
    notes = page.get("timing_notes") or []
    if not isinstance(notes, list) or not all(isinstance(n, str) for n in notes):
        msg = "Catalog 'page.timing_notes' must be a list of strings."
        raise CatalogError(msg)
    return CatalogDocument(
        catalog=catalog,
        title=_page_text(page, "title"),
        subtitle=_page_text(page, "subtitle"),
        timing_notes=tuple(notes),
    )


def build_catalog(records: cabc.Iterable[object]) -> StepCatalog:
    """Validate raw step records and return them as a catalog.

    Ids must be unique and form the sequence ``1, 2, 3, ...`` in record order.
    """
    steps: list[Step] = []
    seen: set[int] = set()
    for position, record in enumerate(records, start=1):
        step = _build_step(record, position=position)
        if step.id in seen:
            msg = f"Step {step.id}: duplicate id."
            raise CatalogError(msg, step_id=step.id, field="id")
        if step.id != position:
            msg = (
                f"Step {step.id}: ids must be contiguous from 1 in catalog order; "
                f"expected {position}."
            )
            raise CatalogError(msg, step_id=step.id, field="id")
        seen.add(step.id)
        steps.append(step)
    return StepCatalog(steps)


def _build_step(record: object, *, position: int) -> Step:
    if not isinstance(record, cabc.Mapping):
        msg = f"Step record #{position} must be a mapping."
        raise CatalogError(msg)
    raw_id = record.get("id")
    if not isinstance(raw_id, int) or isinstance(raw_id, bool) or raw_id < 1:
        msg = f"Step record #{position}: 'id' must be a positive integer."
        raise CatalogError(msg, field="id")
    step_id = raw_id

    try:
        actor = Actor(str(record.get("actor", "")).upper())
    except ValueError:
        known = ", ".join(member.value for member in Actor)
        _fail(step_id, "actor", f"must be one of {known}")

    endpoint = record.get("endpoint")
    values: dict[str, typ.Any] = {
        "id": step_id,
        "actor": actor,
        "title": _require_str(record.get("title"), step_id=step_id, field="title"),
        "description": _require_str(
            record.get("description"), step_id=step_id, field="description"
        ),
        "badge": _optional_str(record.get("badge"), step_id=step_id, field="badge"),
        "icon": _optional_str(record.get("icon"), step_id=step_id, field="icon"),
        "endpoint": None if endpoint is None else _endpoint(endpoint, step_id=step_id),
    }
    extras: dict[str, typ.Any] = {}
    for key, raw in record.items():
        if key in HEADER_FIELDS:
            continue
        parser = _DETAIL_PARSERS.get(key)
        if parser is None:
            extras[key] = raw
            continue
        if raw is None:
            continue
        values[key] = parser(raw, step_id=step_id, field=key)
    return Step(**values, extras=types.MappingProxyType(extras))


def _page_text(page: cabc.Mapping[str, typ.Any], key: str) -> str | None:
    value = page.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        msg = f"Catalog 'page.{key}' must be a string."
        raise CatalogError(msg)
    return value


__all__ = [
    "DEFAULT_CATALOG_PATH",
    "CatalogDocument",
    "build_catalog",
    "default_catalog_path",
    "load_catalog",
    "load_catalog_document",
]
