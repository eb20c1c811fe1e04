"""Cyclopts CLI entrypoint for rendering and serving the flow documentation.

The ``flowdocs`` console script defined here can write a static HTML snapshot
of the step catalog (``flowdocs render``), serve the interactive viewer where
each step toggles open and closed (``flowdocs serve``), and list the detail
blocks each step would show (``flowdocs blocks``). Every parameter can also
be supplied through a ``FLOWDOCS_*`` environment variable.

Examples
--------
Render the bundled walkthrough with step 9 expanded:

>>> from flowdocs.cli import app
>>> app(["render", "--expand", "9"])  # doctest: +SKIP

Serve the viewer locally:

>>> app(["serve", "--port", "8080"])  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
import uvicorn
from cyclopts import App, Parameter

from .catalog import default_catalog_path, load_catalog_document
from .config import ViewerConfig, load_viewer_config
from .page import FlowPageBuilder
from .rendering import render_blocks
from .server import create_app
from .state import ExpansionState

if typ.TYPE_CHECKING:
    from .catalog import CatalogDocument

DEFAULT_CONFIG = Path("config/flowdocs.yaml")

app = App(name="flowdocs", config=cyclopts.config.Env("FLOWDOCS_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _load(config: Path, catalog: Path | None) -> tuple[ViewerConfig, CatalogDocument]:
    """Load the viewer config (when present) and the catalog it points at."""
    viewer_config = load_viewer_config(config) if config.exists() else ViewerConfig()
    catalog_path = catalog or viewer_config.catalog_path or default_catalog_path()
    return viewer_config, load_catalog_document(catalog_path)


def _initial_state(
    document: CatalogDocument,
    viewer_config: ViewerConfig,
    expand: list[int] | None,
    *,
    expand_all: bool,
) -> ExpansionState:
    """Build the starting expansion state, rejecting ids the catalog lacks."""
    wanted = list(expand) if expand else list(viewer_config.expanded)
    unknown = [step_id for step_id in wanted if document.catalog.get(step_id) is None]
    if unknown:
        known = ", ".join(str(step_id) for step_id in document.catalog.ids)
        msg = f"Cannot expand unknown step(s) {unknown}. Known steps: {known}"
        raise ValueError(msg)
    state = ExpansionState(wanted)
    if expand_all:
        state.expand_all(document.catalog.ids)
    return state


@app.command(help="Render the flow page to a static HTML file.")
def render(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to viewer config", env_var="FLOWDOCS_CONFIG")
    ] = DEFAULT_CONFIG,
    catalog: typ.Annotated[
        Path | None, Parameter(help="Override the step catalog YAML")
    ] = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Override the output HTML path")
    ] = None,
    expand: typ.Annotated[
        list[int] | None, Parameter(help="Step ids shown expanded")
    ] = None,
    expand_all: typ.Annotated[
        bool, Parameter(help="Expand every step")
    ] = False,
) -> None:
    """Write the flow page with the requested steps expanded.

    Parameters
    ----------
    config : Path, optional
        Viewer configuration file; defaults are used when it does not exist.
    catalog : Path or None, optional
        Catalog YAML overriding the configured (or bundled) catalog.
    output : Path or None, optional
        Destination overriding ``render.output`` from the config.
    expand : list[int] or None, optional
        Step ids to show expanded; replaces ``render.expanded`` when given.
    expand_all : bool, optional
        Expand every step in the catalog.

    Raises
    ------
    ValueError
        If ``expand`` names a step id the catalog does not contain.
    """
    viewer_config, document = _load(config, catalog)
    state = _initial_state(document, viewer_config, expand, expand_all=expand_all)
    written = FlowPageBuilder(document, viewer_config, state).run(output)
    print(f"wrote {_format_path(written)}")


@app.command(help="Serve the interactive viewer over HTTP.")
def serve(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to viewer config", env_var="FLOWDOCS_CONFIG")
    ] = DEFAULT_CONFIG,
    catalog: typ.Annotated[
        Path | None, Parameter(help="Override the step catalog YAML")
    ] = None,
    host: typ.Annotated[str | None, Parameter(help="Interface to bind")] = None,
    port: typ.Annotated[int | None, Parameter(help="Port to listen on")] = None,
) -> None:
    """Run the viewer until interrupted; every session starts collapsed."""
    viewer_config, document = _load(config, catalog)
    state = _initial_state(document, viewer_config, None, expand_all=False)
    bind_host = host or viewer_config.host
    bind_port = port or viewer_config.port
    print(f"serving {len(document.catalog)} steps on http://{bind_host}:{bind_port}/")
    uvicorn.run(create_app(document, viewer_config, state), host=bind_host, port=bind_port)


@app.command(help="List the detail blocks each step renders when expanded.")
def blocks(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to viewer config", env_var="FLOWDOCS_CONFIG")
    ] = DEFAULT_CONFIG,
    catalog: typ.Annotated[
        Path | None, Parameter(help="Override the step catalog YAML")
    ] = None,
    step: typ.Annotated[int | None, Parameter(help="Only list this step")] = None,
) -> None:
    """Print ``<id>. <title>`` followed by one line per block.

    Raises
    ------
    KeyError
        If ``step`` is given and the catalog has no such step.
    """
    _viewer_config, document = _load(config, catalog)
    steps = [document.catalog.lookup(step)] if step is not None else document.catalog
    for entry in steps:
        print(f"{entry.id}. {entry.title}")
        for block in render_blocks(entry):
            label = block.title or block.field
            print(f"   - {block.field}: {label} [{block.kind.value}]")


def main() -> None:
    """Invoke the Cyclopts application behind the ``flowdocs`` console command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
