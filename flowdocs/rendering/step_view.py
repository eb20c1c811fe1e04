"""Compose step headers and, for open steps, their detail blocks."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .blocks import Block, render_blocks

if typ.TYPE_CHECKING:
    from flowdocs.catalog import Actor, Endpoint, Step, StepCatalog
    from flowdocs.state import ExpansionState

TERMINAL_GLYPH = "✓"


@dc.dataclass(frozen=True, slots=True)
class StepView:
    """Everything the page needs to draw one step.

    ``blocks`` is empty while the step is collapsed.
    """

    id: int
    number_label: str
    actor: Actor
    title: str
    description: str
    badge: str | None
    icon: str | None
    endpoint: Endpoint | None
    expanded: bool
    blocks: tuple[Block, ...]

    @property
    def anchor(self) -> str:
        """Fragment identifier of the step on the page."""
        return f"step-{self.id}"

    @property
    def actor_tone(self) -> str:
        """Color family of the step's actor."""
        return self.actor.tone

    @property
    def method_tone(self) -> str | None:
        """Styling hook for the endpoint method: ``get`` or ``write``."""
        if self.endpoint is None:
            return None
        return "get" if self.endpoint.method == "GET" else "write"


def compose_step_view(
    step: Step, state: ExpansionState, *, terminal_id: int | None = None
) -> StepView:
    """Build the view of ``step`` for the current expansion ``state``.

    Parameters
    ----------
    step : Step
        Catalog record to present.
    state : ExpansionState
        Session state deciding whether the body is shown.
    terminal_id : int, optional
        Id of the catalog's final step; that step is labelled with a
        checkmark instead of its number.

    Returns
    -------
    StepView
        Header data plus the ordered detail blocks when expanded.
    """
    expanded = state.is_expanded(step.id)
    return StepView(
        id=step.id,
        number_label=TERMINAL_GLYPH if step.id == terminal_id else str(step.id),
        actor=step.actor,
        title=step.title,
        description=step.description,
        badge=step.badge,
        icon=step.icon,
        endpoint=step.endpoint,
        expanded=expanded,
        blocks=render_blocks(step) if expanded else (),
    )


def compose_page(catalog: StepCatalog, state: ExpansionState) -> list[StepView]:
    """Return a view for every catalog step, in catalog order."""
    terminal_id = catalog.terminal_id
    return [
        compose_step_view(step, state, terminal_id=terminal_id) for step in catalog
    ]


__all__ = ["TERMINAL_GLYPH", "StepView", "compose_page", "compose_step_view"]
