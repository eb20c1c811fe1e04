"""Tests for presence-driven block dispatch.

These tests check the fixed block order, the redirect/url-parts precedence
rule, the per-field layouts (rows vs. pretty-printed vs. verbatim text), and
that dispatch ignores the actor and unknown fields.

Usage
-----
Run ``pytest tests/test_blocks.py -v``.
"""

from __future__ import annotations

import dataclasses as dc
import itertools
import random

import pytest

from flowdocs.catalog import (
    DETAIL_FIELDS,
    Actor,
    Step,
    build_catalog,
    default_catalog_path,
    load_catalog,
)
from flowdocs.rendering import BLOCK_ORDER, BLOCK_REGISTRY, BlockKind, render_blocks

SAMPLE_VALUES: dict[str, object] = {
    "component": "DatePicker Component",
    "details": {"trigger": "click", "nextStep": "fetch slots"},
    "form_fields": [{"name": "email", "required": True, "example": "a@b.c"}],
    "request_example": {"url": "/api/x", "headers": {"Content-Type": "json"}},
    "response_example": {"status": 404, "body": {"error": "missing"}},
    "logic": ["first", "second"],
    "business_hours": {"Monday": "CLOSED", "Tuesday": "10:00 - 18:00"},
    "deposit_calculation": {
        "full_price": 80,
        "deposit_percent": 30,
        "deposit_amount": 24,
        "remaining_balance": 56,
    },
    "stripe_metadata": {"userId": "u1", "email": "e@x"},
    "code_snippet": "const a = 1;\n  return a;",
    "payment_details": {"fullAmount": "£80.00"},
    "user_actions": ["enter card"],
    "webhook_payload": {"type": "checkout.session.completed"},
    "webhook_processing": ["verify", "store"],
    "booking_document": {"_id": "b1"},
    "availability_update": {"date": "2026-02-18", "slots": []},
    "displayed_info": {"depositPaid": "£24.00"},
    "actions": ["print"],
    "backend_code": "router.get('/x')",
    "note": "runs in the background",
    "redirect_url": "/done",
    "url_parts": {"base": "/done", "query": {"session_id": "cs_1"}},
}


def _step(**fields: object) -> Step:
    record = {"id": 1, "actor": "USER", "title": "T", "description": "D", **fields}
    return build_catalog([record]).lookup(1)


def test_registry_covers_every_detail_field_once() -> None:
    assert sorted(BLOCK_ORDER) == sorted(DETAIL_FIELDS)
    assert len(set(BLOCK_ORDER)) == len(BLOCK_ORDER)
    assert set(SAMPLE_VALUES) == DETAIL_FIELDS


def test_registry_order_matches_layout() -> None:
    assert BLOCK_ORDER[:5] == (
        "component",
        "details",
        "form_fields",
        "request_example",
        "response_example",
    )
    assert BLOCK_ORDER[-3:] == ("note", "redirect_url", "url_parts")


def test_step_without_optional_fields_renders_nothing() -> None:
    assert render_blocks(_step()) == ()


@pytest.mark.parametrize("seed", range(5))
def test_block_order_ignores_record_field_order(seed: int) -> None:
    """Blocks follow the registry no matter how the record is ordered."""
    fields = [name for name in SAMPLE_VALUES if name != "url_parts"]
    random.Random(seed).shuffle(fields)
    step = _step(**{name: SAMPLE_VALUES[name] for name in fields})
    rendered = [block.field for block in render_blocks(step)]
    assert rendered == [name for name in BLOCK_ORDER if name in fields]


@pytest.mark.parametrize(
    ("first", "second"),
    list(itertools.combinations(["logic", "code_snippet", "note", "details"], 2)),
)
def test_pairwise_order(first: str, second: str) -> None:
    step = _step(**{second: SAMPLE_VALUES[second], first: SAMPLE_VALUES[first]})
    fields = [block.field for block in render_blocks(step)]
    expected = sorted([first, second], key=BLOCK_ORDER.index)
    assert fields == expected


def test_block_kind_matches_registry() -> None:
    step = _step(**SAMPLE_VALUES)
    kinds = {spec.field: spec.kind for spec in BLOCK_REGISTRY}
    for block in render_blocks(step):
        assert block.kind is kinds[block.field], block.field


def test_url_parts_suppresses_redirect_url() -> None:
    step = _step(redirect_url="/done?x=1", url_parts=SAMPLE_VALUES["url_parts"])
    fields = [block.field for block in render_blocks(step)]
    assert fields == ["url_parts"]


def test_redirect_url_alone_renders_label() -> None:
    (block,) = render_blocks(_step(redirect_url="window.location.href = url"))
    assert block.kind is BlockKind.LABEL
    assert block.title == "Redirect"
    assert block.text == "window.location.href = url"


def test_url_parts_block_content() -> None:
    (block,) = render_blocks(_step(url_parts=SAMPLE_VALUES["url_parts"]))
    assert block.base == "/done"
    assert block.text == '{\n  "session_id": "cs_1"\n}'


def test_dispatch_ignores_actor() -> None:
    fields = {"logic": ["a"], "note": "n"}
    rendered = {
        actor: [block.field for block in render_blocks(_step(actor=actor.value, **fields))]
        for actor in Actor
    }
    assert all(value == ["logic", "note"] for value in rendered.values())


def test_unknown_fields_produce_no_block() -> None:
    step = _step(note="kept", colour="amber", actorColor="bg-blue-600")
    assert [block.field for block in render_blocks(step)] == ["note"]


def test_empty_containers_still_render_blocks() -> None:
    step = _step(details={}, logic=[], actions=[], webhook_payload={})
    blocks = {block.field: block for block in render_blocks(step)}
    assert set(blocks) == {"details", "logic", "actions", "webhook_payload"}
    assert blocks["details"].rows == ()
    assert blocks["logic"].items == ()
    assert blocks["webhook_payload"].text == "{}"


def test_detail_rows_are_humanized() -> None:
    (block,) = render_blocks(_step(details=SAMPLE_VALUES["details"]))
    assert block.kind is BlockKind.ROWS
    assert [(row.label, row.value) for row in block.rows] == [
        ("Trigger", "click"),
        ("Next Step", "fetch slots"),
    ]


def test_stripe_metadata_is_pretty_printed_not_rows() -> None:
    (block,) = render_blocks(_step(stripe_metadata=SAMPLE_VALUES["stripe_metadata"]))
    assert block.kind is BlockKind.STRUCTURED
    assert block.rows == ()
    assert block.text == '{\n  "userId": "u1",\n  "email": "e@x"\n}'


def test_business_hours_mark_closed_days() -> None:
    (block,) = render_blocks(_step(business_hours=SAMPLE_VALUES["business_hours"]))
    assert [(row.label, row.tone) for row in block.rows] == [
        ("Monday", "closed"),
        ("Tuesday", "open"),
    ]


def test_deposit_calculation_rows() -> None:
    (block,) = render_blocks(
        _step(deposit_calculation=SAMPLE_VALUES["deposit_calculation"])
    )
    assert block.title == "Deposit Calculation (30%)"
    assert [(row.label, row.value) for row in block.rows] == [
        ("Full Price", "£80"),
        ("Deposit (30%)", "£24"),
        ("Remaining Balance", "£56"),
    ]
    assert block.rows[1].tone == "emphasis"


def test_response_block_status_tone() -> None:
    (failed,) = render_blocks(_step(response_example=SAMPLE_VALUES["response_example"]))
    assert failed.status == 404
    assert failed.tone == "error"
    (ok,) = render_blocks(_step(response_example={"status": 200, "body": [1]}))
    assert ok.tone == "success"
    (bare,) = render_blocks(_step(response_example={"body": "x"}))
    assert bare.status is None
    assert bare.tone is None


def test_code_is_kept_verbatim() -> None:
    code = SAMPLE_VALUES["code_snippet"]
    (block,) = render_blocks(_step(code_snippet=code))
    assert block.kind is BlockKind.CODE
    assert block.text == code


def test_form_fields_block() -> None:
    (block,) = render_blocks(_step(form_fields=SAMPLE_VALUES["form_fields"]))
    (field,) = block.form_fields
    assert (field.name, field.required, field.example) == ("email", True, "a@b.c")


def test_note_block_is_untitled() -> None:
    (block,) = render_blocks(_step(note="heads up"))
    assert block.kind is BlockKind.NOTE
    assert block.title == ""


def test_rendering_does_not_mutate_step() -> None:
    step = _step(**SAMPLE_VALUES)
    snapshot = dc.replace(step)
    render_blocks(step)
    render_blocks(step)
    assert step == snapshot


def test_bundled_step_nine_blocks_in_order() -> None:
    step = load_catalog(default_catalog_path()).lookup(9)
    fields = [block.field for block in render_blocks(step)]
    assert fields == ["code_snippet", "webhook_processing", "booking_document"]
