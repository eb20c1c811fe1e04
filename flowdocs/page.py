"""Flow page rendering pipeline.

This module turns a loaded step catalog, the viewer configuration, and one
session's :class:`~flowdocs.state.ExpansionState` into the HTML page listing
every step. ``FlowPageBuilder`` wires the Jinja environment, the Pygments
highlighter used for code and structured blocks, and the filesystem write for
static snapshots. The same builder backs ``flowdocs serve``, where headers
become toggle buttons posting to ``/steps/<id>/toggle``.

Typical usage mirrors the ``render`` command:

>>> from flowdocs.catalog import default_catalog_path, load_catalog_document
>>> from flowdocs.config import ViewerConfig
>>> from flowdocs.state import ExpansionState
>>> document = load_catalog_document(default_catalog_path())  # doctest: +SKIP
>>> builder = FlowPageBuilder(document, ViewerConfig(), ExpansionState([9]))  # doctest: +SKIP
>>> builder.run()  # doctest: +SKIP
PosixPath('public/payment-flow.html')

Templates live under ``flowdocs/templates`` unless a custom directory is
provided. Rendering reads templates only; ``run`` additionally writes the
UTF-8 HTML file.
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from .catalog import Actor
from .config import DEFAULT_SUBTITLE, DEFAULT_TITLE
from .rendering import CodeHighlighter, compose_page

if typ.TYPE_CHECKING:
    from .catalog import CatalogDocument
    from .config import ViewerConfig
    from .state import ExpansionState

STRUCTURED_LANGUAGE = "json"


@dc.dataclass(frozen=True, slots=True)
class PageCopy:
    """Heading, subtitle and footer notes shown around the steps."""

    title: str
    subtitle: str
    timing_notes: tuple[str, ...]


def resolve_page_copy(document: CatalogDocument, config: ViewerConfig) -> PageCopy:
    """Pick page copy from the config, then the catalog, then the defaults."""
    notes = config.timing_notes
    if notes is None:
        notes = document.timing_notes
    return PageCopy(
        title=config.title or document.title or DEFAULT_TITLE,
        subtitle=config.subtitle or document.subtitle or DEFAULT_SUBTITLE,
        timing_notes=tuple(notes),
    )


class FlowPageBuilder:
    """Render the flow page from catalog content and expansion state."""

    def __init__(
        self,
        document: CatalogDocument,
        config: ViewerConfig,
        state: ExpansionState,
        *,
        templates_dir: Path | None = None,
        interactive: bool = False,
    ) -> None:
        """Initialize the builder and Jinja environment.

        Parameters
        ----------
        document : CatalogDocument
            Loaded catalog and the page copy stored with it.
        config : ViewerConfig
            Output path, page copy overrides and highlighting options.
        state : ExpansionState
            Session state deciding which steps show their detail blocks. The
            builder only reads it.
        templates_dir : Path, optional
            Directory containing the Jinja templates; defaults to
            ``flowdocs/templates``.
        interactive : bool, optional
            Render step headers as toggle buttons for the HTTP viewer.
        """
        self.document = document
        self.config = config
        self.state = state
        self.interactive = interactive
        self.highlighter = CodeHighlighter(config.pygments_style)
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.globals["highlight_code"] = self._highlight_code
        self.env.globals["highlight_structured"] = self._highlight_structured
        self.template = self.env.get_template("flow_page.jinja")

    def render(self) -> str:
        """Return the page HTML for the current state."""
        context = {
            "copy": resolve_page_copy(self.document, self.config),
            "actors": list(Actor),
            "steps": compose_page(self.document.catalog, self.state),
            "interactive": self.interactive,
            "stylesheet": Markup(self.highlighter.stylesheet),
            "generated_at": dt.datetime.now(dt.UTC),
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        return html

    def run(self, output: Path | None = None) -> Path:
        """Render and write the page, returning the output path."""
        output_path = output or self.config.output
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(), encoding="utf-8")
        return output_path

    def _highlight_code(self, text: str) -> Markup:
        return Markup(self.highlighter.code_block(text, self.config.code_language))

    def _highlight_structured(self, text: str) -> Markup:
        return Markup(self.highlighter.code_block(text, STRUCTURED_LANGUAGE))


__all__ = ["FlowPageBuilder", "PageCopy", "resolve_page_copy"]
