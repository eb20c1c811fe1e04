"""Unit tests for the per-session expansion state store."""

from __future__ import annotations

import pytest

from flowdocs.state import ExpansionState


@pytest.mark.parametrize("step_id", [1, 9, 13, 999, 0, -4])
def test_never_toggled_steps_are_collapsed(step_id: int) -> None:
    assert ExpansionState().is_expanded(step_id) is False


@pytest.mark.parametrize("initial", [(), (9,)])
def test_double_toggle_restores_previous_value(initial: tuple[int, ...]) -> None:
    state = ExpansionState(initial)
    before = state.is_expanded(9)
    state.toggle(9)
    state.toggle(9)
    assert state.is_expanded(9) is before


def test_first_toggle_opens_and_returns_new_value() -> None:
    state = ExpansionState()
    assert state.toggle(9) is True
    assert state.is_expanded(9) is True
    assert state.toggle(9) is False


def test_toggling_unknown_id_never_raises() -> None:
    state = ExpansionState()
    assert state.toggle(10_000) is True
    assert state.expanded_ids() == [10_000]


def test_toggles_are_independent_per_step() -> None:
    state = ExpansionState()
    state.toggle(3)
    assert state.is_expanded(3) is True
    assert state.is_expanded(4) is False


def test_expand_all_and_collapse_all() -> None:
    state = ExpansionState([2])
    state.expand_all([5, 1])
    assert state.expanded_ids() == [1, 2, 5]
    state.collapse_all()
    assert state.expanded_ids() == []
    assert state.toggle(2) is True, "collapse_all should reset to never-toggled"


def test_separate_sessions_do_not_share_state() -> None:
    first, second = ExpansionState(), ExpansionState()
    first.toggle(1)
    assert second.is_expanded(1) is False
