"""HTTP surface letting a viewer expand and collapse steps in a browser.

The app holds exactly one :class:`~flowdocs.state.ExpansionState` for its
lifetime; toggle requests are its only writer. Handlers are coroutines with
no await points, so the event loop runs them one at a time and the state
needs no lock.

Example
-------
>>> from flowdocs.catalog import default_catalog_path, load_catalog_document
>>> from flowdocs.config import ViewerConfig
>>> app = create_app(load_catalog_document(default_catalog_path()), ViewerConfig())
>>> sorted(route.path for route in app.routes if route.path.startswith("/api"))
['/api/steps', '/api/steps/{step_id}/blocks']
"""

from __future__ import annotations

import typing as typ

from fastapi import FastAPI, HTTPException, status
from fastapi.responses import HTMLResponse, RedirectResponse

from .page import FlowPageBuilder
from .rendering import render_blocks
from .state import ExpansionState

if typ.TYPE_CHECKING:
    from .catalog import CatalogDocument
    from .config import ViewerConfig


def create_app(
    document: CatalogDocument,
    config: ViewerConfig,
    state: ExpansionState | None = None,
) -> FastAPI:
    """Build the viewer application for one catalog and one session.

    Parameters
    ----------
    document : CatalogDocument
        Loaded catalog plus its page copy.
    config : ViewerConfig
        Presentation settings shared with static rendering.
    state : ExpansionState, optional
        Initial expansion state; a fresh all-collapsed state when omitted.

    Returns
    -------
    FastAPI
        Application exposing the page, the toggle endpoint and JSON summaries.
    """
    session = state if state is not None else ExpansionState(config.expanded)
    catalog = document.catalog
    builder = FlowPageBuilder(document, config, session, interactive=True)

    app = FastAPI(title="flowdocs", docs_url=None, redoc_url=None)
    app.state.expansion = session

    @app.get("/", response_class=HTMLResponse)
    async def page() -> str:
        """Render the flow page for the current expansion state."""
        return builder.render()

    @app.post("/steps/{step_id}/toggle")
    async def toggle(step_id: int) -> RedirectResponse:
        """Flip one step and send the browser back to it."""
        session.toggle(step_id)
        return RedirectResponse(
            url=f"/#step-{step_id}", status_code=status.HTTP_303_SEE_OTHER
        )

    @app.get("/api/steps")
    async def list_steps() -> list[dict[str, typ.Any]]:
        """Summarize every step with its expansion flag."""
        return [
            {
                "id": step.id,
                "actor": step.actor.value,
                "title": step.title,
                "expanded": session.is_expanded(step.id),
            }
            for step in catalog
        ]

    @app.get("/api/steps/{step_id}/blocks")
    async def list_blocks(step_id: int) -> list[dict[str, str]]:
        """List the blocks a step renders when expanded, in display order."""
        step = catalog.get(step_id)
        if step is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Unknown step {step_id}",
            )
        return [
            {
                "field": block.field,
                "title": block.title,
                "kind": block.kind.value,
            }
            for block in render_blocks(step)
        ]

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app


__all__ = ["create_app"]
