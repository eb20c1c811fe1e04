"""Formatting, block dispatch, and step composition for the flow viewer."""

from .blocks import BLOCK_ORDER, BLOCK_REGISTRY, Block, BlockKind, BlockSpec, render_blocks
from .formatter import Row, format_row, format_scalar, humanize_key, pretty_print
from .highlight import CodeHighlighter
from .step_view import TERMINAL_GLYPH, StepView, compose_page, compose_step_view

__all__ = [
    "BLOCK_ORDER",
    "BLOCK_REGISTRY",
    "TERMINAL_GLYPH",
    "Block",
    "BlockKind",
    "BlockSpec",
    "CodeHighlighter",
    "Row",
    "StepView",
    "compose_page",
    "compose_step_view",
    "format_row",
    "format_scalar",
    "humanize_key",
    "pretty_print",
    "render_blocks",
]
