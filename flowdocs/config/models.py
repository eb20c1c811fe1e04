"""Typed dataclasses describing flow viewer configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

DEFAULT_TITLE = "Complete Payment Flow"
DEFAULT_SUBTITLE = "Detailed breakdown with request/response bodies and code snippets"


class ViewerConfigError(ValueError):
    """Raised when the viewer configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class ViewerConfig:
    """Presentation settings for the flow page and viewer.

    ``title``, ``subtitle`` and ``timing_notes`` left unset fall back to the
    copy stored alongside the catalog, then to the built-in defaults.
    """

    catalog_path: Path | None = None
    output: Path = Path("public/payment-flow.html")
    title: str | None = None
    subtitle: str | None = None
    timing_notes: tuple[str, ...] | None = None
    pygments_style: str = "monokai"
    code_language: str = "text"
    expanded: tuple[int, ...] = ()
    host: str = "127.0.0.1"
    port: int = 8000


__all__ = ["DEFAULT_SUBTITLE", "DEFAULT_TITLE", "ViewerConfig", "ViewerConfigError"]
