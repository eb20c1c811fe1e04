"""Syntax highlighting for preformatted detail blocks."""

from __future__ import annotations

import re
from html import escape

from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')


class CodeHighlighter:
    """Render literal text as highlighted, HTML-escaped ``<pre>`` blocks.

    Highlighting only wraps tokens in styling spans; the visible text is the
    input verbatim.
    """

    def __init__(self, pygments_style: str = "monokai") -> None:
        """Initialize a highlighter for the given Pygments style.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for highlighting. Defaults to
            ``"monokai"``.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def code_block(self, code: str, language: str | None = None) -> str:
        """Render ``code`` into highlighted HTML tagged with its language.

        Parameters
        ----------
        code : str
            Text to display.
        language : str, optional
            Pygments lexer name; defaults to ``"text"`` when not provided or
            when the lexer lookup fails.

        Returns
        -------
        str
            HTML for the block with a ``data-language`` attribute.
        """
        lang = language or "text"
        try:
            lexer = get_lexer_by_name(lang, stripnl=False, ensurenl=False)
        except ClassNotFound:
            lang = "text"
            lexer = get_lexer_by_name(lang, stripnl=False, ensurenl=False)
        html = highlight(code, lexer, self._formatter)
        return self._attach_language_attribute(html, lang)

    @staticmethod
    def _attach_language_attribute(html: str, language: str) -> str:
        safe_lang = escape(language, quote=True)

        def _repl(_match: re.Match[str]) -> str:
            return f'<div class="codehilite" data-language="{safe_lang}">'

        return CODEHILITE_OPEN_TAG.sub(_repl, html, 1)


__all__ = ["CODEHILITE_OPEN_TAG", "CodeHighlighter"]
