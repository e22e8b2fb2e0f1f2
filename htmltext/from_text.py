"""Escaping and plain-text to HTML conversion."""

from __future__ import annotations

from jinja2 import Environment
from markupsafe import Markup
from markupsafe import escape as _escape

_ENV = Environment(autoescape=True)
_PARAGRAPHS = _ENV.from_string(
    "{% for paragraph in paragraphs %}"
    "<{{ tag }}>{{ paragraph }}</{{ tag }}>{% if not loop.last %}\n{% endif %}"
    "{% endfor %}"
)


def escape(text: str) -> str:
    """Escape ``& < > " '`` for safe inclusion in HTML."""
    return str(_escape(text))


def _paragraph(text: str, escape_text: bool) -> Markup:
    lines = text.split("\n")
    if escape_text:
        return Markup("<br>").join(_escape(line) for line in lines)
    return Markup("<br>".join(lines))


def from_text(text: str, tag: str = "p", escape: bool = True) -> str:
    """Wrap blank-line separated paragraphs in ``tag``; single newlines become ``<br>``."""
    text = text.replace("\r\n", "\n")
    paragraphs = [_paragraph(block, escape) for block in text.split("\n\n")]
    return _PARAGRAPHS.render(paragraphs=paragraphs, tag=tag)


__all__ = ["escape", "from_text"]
