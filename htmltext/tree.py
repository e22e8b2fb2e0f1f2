"""BeautifulSoup-backed tree adapter used by the minifier and text renderer."""

from __future__ import annotations

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup, NavigableString, PageElement, Tag
from bs4.element import PreformattedString
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

logger = logging.getLogger(__name__)

DEFAULT_PARSER = "lxml"
PARSERS = ("html.parser", "lxml", "html5lib")

SERIALIZE_FAILED = "An error occured"

# Characters removed by trim operations (ASCII whitespace plus NUL).
TRIM_CHARS = " \t\n\r\x00\x0b"

_FORMATTER = HTMLFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix=None,
    empty_attributes_are_booleans=True,
)

_HTML_OPEN_RE = re.compile(r"<html[^>]*>", re.IGNORECASE)
_HEAD_OPEN_RE = re.compile(r"<head(?:\s[^>]*)?>", re.IGNORECASE)
_BODY_OPEN_RE = re.compile(r"<body[^>]*>", re.IGNORECASE)


def parse(html: str, parser: str = DEFAULT_PARSER) -> BeautifulSoup:
    """Parse markup into a mutable tree. Malformed input still yields a tree."""
    if parser not in PARSERS:
        raise ValueError(f"unknown parser {parser!r}; expected one of {', '.join(PARSERS)}")
    logger.debug("parsing %d characters with %s", len(html), parser)
    return BeautifulSoup(html, parser)


def serialize(soup: Tag) -> str:
    """Render a tree back to HTML, falling back to a placeholder on failure."""
    try:
        return soup.decode(formatter=_FORMATTER)
    except (RecursionError, ValueError, UnicodeError):
        logger.error("could not serialize document tree", exc_info=True)
        return SERIALIZE_FAILED


def _unwrap(html: str, name: str) -> str:
    opening, closing = f"<{name}>", f"</{name}>"
    if html.startswith(opening) and html.endswith(closing):
        return html[len(opening) : -len(closing)]
    return html


def remove_wrapper(original: str, html: str) -> str:
    """Strip the html/head/body wrappers a parser implied but the input never had.

    An implied ``head`` keeps whatever the parser moved into it (a leading
    ``<script>`` or ``<title>``); only the tags themselves are dropped.
    """
    html = html.strip(TRIM_CHARS)
    if not _HTML_OPEN_RE.search(original):
        html = _unwrap(html, "html")
    if not _HEAD_OPEN_RE.search(original) and html.startswith("<head>"):
        end = html.find("</head>")
        if end != -1:
            html = html[len("<head>") : end] + html[end + len("</head>") :]
    if not _BODY_OPEN_RE.search(original) and html.endswith("</body>"):
        start = html.find("<body>")
        if start != -1:
            html = html[:start] + html[start + len("<body>") : -len("</body>")]
    return html


def is_text(node: Optional[PageElement]) -> bool:
    """True for character data; comments, doctypes and CDATA do not count."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def node_name(node: Optional[PageElement]) -> Optional[str]:
    if isinstance(node, Tag):
        return node.name
    return None


def set_text(node: NavigableString, value: str) -> NavigableString:
    """Replace a text node's payload in place, keeping its string class."""
    if value == str(node):
        return node
    replacement = type(node)(value)
    node.replace_with(replacement)
    return replacement


def is_attached(node: PageElement, root: Tag) -> bool:
    current: Optional[PageElement] = node
    while current is not None:
        if current is root:
            return True
        current = current.parent
    return False


__all__ = [
    "DEFAULT_PARSER",
    "PARSERS",
    "SERIALIZE_FAILED",
    "TRIM_CHARS",
    "is_attached",
    "is_text",
    "node_name",
    "parse",
    "remove_wrapper",
    "serialize",
    "set_text",
]
