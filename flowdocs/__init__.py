"""Interactive documentation viewer for a payment and booking workflow.

The package loads an ordered catalog of workflow steps, decides which detail
blocks each step shows, and renders them as HTML, either as a static snapshot
or through a small HTTP viewer where steps expand and collapse on demand.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from flowdocs import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
