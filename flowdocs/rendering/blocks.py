"""Presence-driven dispatch from step detail fields to rendered blocks.

:data:`BLOCK_REGISTRY` lists one :class:`BlockSpec` per optional step field in
display order. :func:`render_blocks` walks the registry once and builds a
:class:`Block` for every field the step carries, so the order of blocks never
depends on the order of fields in the source record or on the step's actor.

Examples
--------
>>> from flowdocs.catalog import Actor, Step
>>> step = Step(1, Actor.USER, "Pick", "Pick a date", note="hi", component="X")
>>> [block.field for block in render_blocks(step)]
['component', 'note']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import typing as typ

from .formatter import Row, format_row, format_scalar, pretty_print

if typ.TYPE_CHECKING:
    from flowdocs.catalog import (
        DepositCalculation,
        FormField,
        ResponseExample,
        Step,
        UrlParts,
        Value,
    )


class BlockKind(enum.StrEnum):
    """Layout used to present a block body."""

    LABEL = "label"
    ROWS = "rows"
    FORM_FIELDS = "form_fields"
    STRUCTURED = "structured"
    RESPONSE = "response"
    NUMBERED = "numbered"
    CHECKLIST = "checklist"
    CODE = "code"
    NOTE = "note"
    URL_PARTS = "url_parts"


@dc.dataclass(frozen=True, slots=True)
class Block:
    """One titled unit of detail content for an expanded step.

    Attributes
    ----------
    field : str
        Step field the block was built from.
    title : str
        Heading shown above the body; empty for untitled blocks.
    kind : BlockKind
        Body layout.
    text : str
        Literal body text (labels, code, notes, pretty-printed structures).
    rows : tuple[Row, ...]
        Label/value rows for ``ROWS`` blocks.
    items : tuple[str, ...]
        Ordered entries for ``NUMBERED`` and ``CHECKLIST`` blocks.
    form_fields : tuple[FormField, ...]
        Inputs for ``FORM_FIELDS`` blocks.
    status : int or None
        Response status for ``RESPONSE`` blocks.
    tone : str or None
        Styling hook (response status tone).
    base : str
        Base URL for ``URL_PARTS`` blocks.
    """

    field: str
    title: str
    kind: BlockKind
    text: str = ""
    rows: tuple[Row, ...] = ()
    items: tuple[str, ...] = ()
    form_fields: tuple[FormField, ...] = ()
    status: int | None = None
    tone: str | None = None
    base: str = ""


BlockBuilder: typ.TypeAlias = cabc.Callable[[str, str, typ.Any], Block]


@dc.dataclass(frozen=True, slots=True)
class BlockSpec:
    """Registry entry binding a step field to its title and builder."""

    field: str
    title: str
    kind: BlockKind
    build: BlockBuilder
    suppressed_by: str | None = None

    def applies_to(self, step: Step) -> bool:
        """Return whether ``step`` should get this block."""
        if not step.has(self.field):
            return False
        return not (self.suppressed_by and step.has(self.suppressed_by))


def _label(field: str, title: str, value: str) -> Block:
    return Block(field, title, BlockKind.LABEL, text=value)


def _rows(field: str, title: str, value: cabc.Mapping[str, object]) -> Block:
    rows = tuple(format_row(key, item) for key, item in value.items())
    return Block(field, title, BlockKind.ROWS, rows=rows)


def _business_hours(field: str, title: str, value: cabc.Mapping[str, str]) -> Block:
    # Day names are shown as written, not humanized.
    rows = tuple(
        Row(label=day, value=hours, tone="closed" if hours == "CLOSED" else "open")
        for day, hours in value.items()
    )
    return Block(field, title, BlockKind.ROWS, rows=rows)


def _deposit(field: str, title: str, value: DepositCalculation) -> Block:
    percent = format_scalar(value.deposit_percent)
    currency = value.currency
    rows = (
        Row("Full Price", f"{currency}{format_scalar(value.full_price)}"),
        Row(
            f"Deposit ({percent}%)",
            f"{currency}{format_scalar(value.deposit_amount)}",
            tone="emphasis",
        ),
        Row(
            "Remaining Balance",
            f"{currency}{format_scalar(value.remaining_balance)}",
            tone="muted",
        ),
    )
    return Block(field, f"{title} ({percent}%)", BlockKind.ROWS, rows=rows)


def _form_fields(field: str, title: str, value: tuple[FormField, ...]) -> Block:
    return Block(field, title, BlockKind.FORM_FIELDS, form_fields=value)


def _structured(field: str, title: str, value: Value) -> Block:
    return Block(field, title, BlockKind.STRUCTURED, text=pretty_print(value))


def _response(field: str, title: str, value: ResponseExample) -> Block:
    tone = None
    if value.status is not None:
        tone = "success" if value.status == 200 else "error"
    return Block(
        field,
        title,
        BlockKind.RESPONSE,
        text=pretty_print(value.body),
        status=value.status,
        tone=tone,
    )


def _numbered(field: str, title: str, value: tuple[str, ...]) -> Block:
    return Block(field, title, BlockKind.NUMBERED, items=value)


def _checklist(field: str, title: str, value: tuple[str, ...]) -> Block:
    return Block(field, title, BlockKind.CHECKLIST, items=value)


def _code(field: str, title: str, value: str) -> Block:
    return Block(field, title, BlockKind.CODE, text=value)


def _note(field: str, title: str, value: str) -> Block:
    return Block(field, title, BlockKind.NOTE, text=value)


def _url_parts(field: str, title: str, value: UrlParts) -> Block:
    return Block(
        field,
        title,
        BlockKind.URL_PARTS,
        text=pretty_print(value.query),
        base=value.base,
    )


BLOCK_REGISTRY: tuple[BlockSpec, ...] = (
    BlockSpec("component", "Component", BlockKind.LABEL, _label),
    BlockSpec("details", "Details", BlockKind.ROWS, _rows),
    BlockSpec("form_fields", "Form Fields", BlockKind.FORM_FIELDS, _form_fields),
    BlockSpec("request_example", "Request", BlockKind.STRUCTURED, _structured),
    BlockSpec("response_example", "Response", BlockKind.RESPONSE, _response),
    BlockSpec("logic", "Processing Logic", BlockKind.NUMBERED, _numbered),
    BlockSpec("business_hours", "Business Hours", BlockKind.ROWS, _business_hours),
    BlockSpec("deposit_calculation", "Deposit Calculation", BlockKind.ROWS, _deposit),
    BlockSpec(
        "stripe_metadata", "Stripe Customer Metadata", BlockKind.STRUCTURED, _structured
    ),
    BlockSpec("code_snippet", "Code Snippet", BlockKind.CODE, _code),
    BlockSpec("payment_details", "Payment Details", BlockKind.ROWS, _rows),
    BlockSpec("user_actions", "User Actions", BlockKind.CHECKLIST, _checklist),
    BlockSpec("webhook_payload", "Webhook Payload", BlockKind.STRUCTURED, _structured),
    BlockSpec(
        "webhook_processing", "Webhook Processing Steps", BlockKind.NUMBERED, _numbered
    ),
    BlockSpec(
        "booking_document", "Created Booking Document", BlockKind.STRUCTURED, _structured
    ),
    BlockSpec(
        "availability_update", "Availability Update", BlockKind.STRUCTURED, _structured
    ),
    BlockSpec("displayed_info", "Success Page Display", BlockKind.ROWS, _rows),
    BlockSpec("actions", "Available Actions", BlockKind.CHECKLIST, _checklist),
    BlockSpec("backend_code", "Backend Code", BlockKind.CODE, _code),
    BlockSpec("note", "", BlockKind.NOTE, _note),
    BlockSpec(
        "redirect_url", "Redirect", BlockKind.LABEL, _label, suppressed_by="url_parts"
    ),
    BlockSpec("url_parts", "Redirect URL Breakdown", BlockKind.URL_PARTS, _url_parts),
)

BLOCK_ORDER: tuple[str, ...] = tuple(spec.field for spec in BLOCK_REGISTRY)


def render_blocks(step: Step) -> tuple[Block, ...]:
    """Return the detail blocks for ``step`` in registry order."""
    return tuple(
        spec.build(spec.field, spec.title, step.value_of(spec.field))
        for spec in BLOCK_REGISTRY
        if spec.applies_to(step)
    )


__all__ = [
    "BLOCK_ORDER",
    "BLOCK_REGISTRY",
    "Block",
    "BlockKind",
    "BlockSpec",
    "render_blocks",
]
