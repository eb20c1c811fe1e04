"""Load viewer configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .models import ViewerConfig, ViewerConfigError


def load_viewer_config(path: Path) -> ViewerConfig:
    """Load the YAML file describing how the flow page is rendered and served.

    Parameters
    ----------
    path : Path
        Filesystem path to the configuration file (for example,
        ``config/flowdocs.yaml``).

    Returns
    -------
    ViewerConfig
        Parsed configuration with defaults applied to absent keys.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    ViewerConfigError
        If a value has the wrong type.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_viewer_config(Path("config/flowdocs.yaml"))  # doctest: +SKIP
    >>> config.pygments_style  # doctest: +SKIP
    'monokai'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    return build_viewer_config(loaded)


def build_viewer_config(raw: typ.Mapping[str, typ.Any]) -> ViewerConfig:
    """Build a :class:`ViewerConfig` from an already parsed mapping."""
    base = ViewerConfig()
    page = raw.get("page", {}) or {}
    render = raw.get("render", {}) or {}
    serve = raw.get("serve", {}) or {}
    for name, block in (("page", page), ("render", render), ("serve", serve)):
        if not isinstance(block, dict):
            msg = f"'{name}' configuration must be a mapping."
            raise ViewerConfigError(msg)

    catalog = raw.get("catalog")
    notes = page.get("timing_notes")
    if notes is not None and (
        not isinstance(notes, list) or not all(isinstance(n, str) for n in notes)
    ):
        msg = "'page.timing_notes' must be a list of strings."
        raise ViewerConfigError(msg)

    return ViewerConfig(
        catalog_path=Path(_as_str(catalog, "catalog")) if catalog else None,
        output=Path(_as_str(render.get("output", base.output), "render.output")),
        title=_optional_text(page.get("title"), "page.title"),
        subtitle=_optional_text(page.get("subtitle"), "page.subtitle"),
        timing_notes=tuple(notes) if notes is not None else None,
        pygments_style=_as_str(
            render.get("pygments_style", base.pygments_style), "render.pygments_style"
        ),
        code_language=_as_str(
            render.get("code_language", base.code_language), "render.code_language"
        ),
        expanded=_step_ids(render.get("expanded", [])),
        host=_as_str(serve.get("host", base.host), "serve.host"),
        port=_as_int(serve.get("port", base.port), "serve.port"),
    )


def _as_str(value: object, key: str) -> str:
    match value:
        case str() | Path():
            return str(value)
        case _:
            msg = f"'{key}' must be a string."
            raise ViewerConfigError(msg)


def _optional_text(value: object, key: str) -> str | None:
    if value is None:
        return None
    return _as_str(value, key)


def _as_int(value: object, key: str) -> int:
    if isinstance(value, bool):
        msg = f"'{key}' must be an integer."
        raise ViewerConfigError(msg)
    try:
        return int(typ.cast("int | str", value))
    except (TypeError, ValueError) as exc:
        msg = f"'{key}' must be an integer."
        raise ViewerConfigError(msg) from exc


def _step_ids(value: object) -> tuple[int, ...]:
    if not isinstance(value, list):
        msg = "'render.expanded' must be a list of step ids."
        raise ViewerConfigError(msg)
    return tuple(_as_int(item, "render.expanded") for item in value)


__all__ = ["build_viewer_config", "load_viewer_config"]
