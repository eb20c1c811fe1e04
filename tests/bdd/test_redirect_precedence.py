"""Behaviour tests for the redirect URL and breakdown precedence rule."""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from flowdocs.catalog import CatalogDocument, build_catalog
from flowdocs.config import ViewerConfig
from flowdocs.page import FlowPageBuilder
from flowdocs.state import ExpansionState

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "redirect_precedence.feature"
)
scenarios(FEATURE_FILE)

REDIRECT = "/booking-success?session_id=cs_test_1"


@pytest.fixture
def scenario_state() -> dict[str, object]:
    return {}


def _record(**fields: object) -> dict[str, object]:
    return {
        "id": 1,
        "actor": "STRIPE",
        "title": "Redirect to Success Page",
        "description": "Stripe redirects the user",
        **fields,
    }


@given("a step with both a redirect URL and a redirect breakdown")
def given_both_redirects(scenario_state: dict[str, object]) -> None:
    scenario_state["record"] = _record(
        url_parts={"base": "/booking-success", "query": {"session_id": "cs_test_1"}},
        redirect_url=REDIRECT,
    )


@given("a step with only a redirect URL")
def given_plain_redirect(scenario_state: dict[str, object]) -> None:
    scenario_state["record"] = _record(redirect_url=REDIRECT)


@when("the step is rendered expanded")
def when_rendered(scenario_state: dict[str, object]) -> None:
    document = CatalogDocument(catalog=build_catalog([scenario_state["record"]]))
    builder = FlowPageBuilder(document, ViewerConfig(), ExpansionState([1]))
    scenario_state["soup"] = BeautifulSoup(builder.render(), "html.parser")


@then(parsers.parse('only the "{field}" block is shown'))
def then_only_block(scenario_state: dict[str, object], field: str) -> None:
    soup = scenario_state["soup"]
    sections = soup.select("#step-1-body section.block")
    assert [section["data-field"] for section in sections] == [field]


@then(parsers.parse('the breakdown base is "{base}"'))
def then_breakdown_base(scenario_state: dict[str, object], base: str) -> None:
    soup = scenario_state["soup"]
    assert soup.select_one(".block__url-base code").get_text() == base
