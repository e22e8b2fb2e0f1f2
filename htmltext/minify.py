"""Whitespace minification for HTML documents.

Text nodes are visited in document order. Comments are dropped, whitespace
inside text is collapsed according to :class:`MinifyOptions`, and whitespace
next to block boundaries is trimmed. Content of ``address``, ``pre``,
``script`` and ``style`` is left untouched.

Inline element list follows
https://www.w3.org/TR/REC-html40/struct/text.html#h-9.1 merged with
https://developer.mozilla.org/en-US/docs/Web/HTML/Inline_elements
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup, Comment, NavigableString

from .models import MinifyOptions
from .tree import DEFAULT_PARSER, TRIM_CHARS, is_text, node_name, parse, remove_wrapper, serialize, set_text

logger = logging.getLogger(__name__)

KEEP_WHITESPACE = frozenset({"address", "pre", "script", "style"})

INLINE_ELEMENTS = frozenset(
    {
        "a",
        "abbr",
        "acronym",
        "audio",
        "b",
        "bdi",
        "bdo",
        "big",
        "br",
        "button",
        "canvas",
        "cite",
        "code",
        "data",
        "datalist",
        "del",
        "dfn",
        "em",
        "embed",
        "i",
        "iframe",
        "img",
        "input",
        "ins",
        "kbd",
        "label",
        "map",
        "mark",
        "meter",
        "noscript",
        "object",
        "output",
        "picture",
        "progress",
        "q",
        "ruby",
        "s",
        "samp",
        "script",
        "select",
        "small",
        "span",
        "strong",
        "sub",
        "sup",
        "textarea",
        "time",
        "tt",
        "var",
    }
)

# Whitespace classes are ASCII only so that &nbsp; survives.
_BREAKING_WS_RE = re.compile(r"[\t\n\r\f\v]+")
_WS_RUN_RE = re.compile(r"([ \t\n\r\f\v])+")
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENT_RE = re.compile(r"// .*")


def _is_inline(node) -> bool:
    return node_name(node) in INLINE_ELEMENTS


def _collapse(value: str, replacement: str) -> str:
    value = _BREAKING_WS_RE.sub(replacement, value)
    return _WS_RUN_RE.sub(r"\1", value)


def _strip_code_noise(value: str, conservative: bool) -> str:
    value = _BLOCK_COMMENT_RE.sub("", value)
    value = _LINE_COMMENT_RE.sub("", value)
    return _collapse(value, " " if conservative else "")


def _keeps_whitespace(node: NavigableString) -> bool:
    parent = node.parent
    if node_name(parent) in KEEP_WHITESPACE:
        return True
    return parent is not None and node_name(parent.parent) in KEEP_WHITESPACE


def _minify_text(node: NavigableString, options: MinifyOptions) -> None:
    value = str(node)
    parent_name = node_name(node.parent)

    if (options.minify_js and parent_name == "script") or (options.minify_css and parent_name == "style"):
        value = _strip_code_noise(value, options.conservative_collapse)
        node = set_text(node, value)

    if _keeps_whitespace(node):
        return

    previous, following = node.previous_sibling, node.next_sibling
    previous_is_inline = previous is not None and _is_inline(previous)
    next_is_inline = following is not None and _is_inline(following)
    between_inline = previous_is_inline and next_is_inline

    # Whitespace between inline elements renders as a space, between blocks it is ignored.
    replacement = " " if options.conservative_collapse or between_inline else ""
    value = _collapse(value, replacement)

    if options.conservative_collapse:
        set_text(node, value)
        return

    if options.collapse_whitespace and value != " ":
        if previous is not None and not previous_is_inline:
            value = value.lstrip(TRIM_CHARS)
        if following is not None and not next_is_inline:
            value = value.rstrip(TRIM_CHARS)
        if previous is None and following is None and not _is_inline(node.parent):
            value = value.strip(TRIM_CHARS)
        set_text(node, value)
        return

    if value == " " and (options.collapse_inline_tag_whitespace or not between_inline):
        value = ""
    set_text(node, value)


def _remove_comments(soup: BeautifulSoup) -> int:
    comments = [node for node in soup.descendants if isinstance(node, Comment)]
    for comment in comments:
        comment.extract()
    return len(comments)


def minify_tree(soup: BeautifulSoup, options: Optional[MinifyOptions] = None) -> BeautifulSoup:
    """Minify a parsed tree in place and return it."""
    options = options or MinifyOptions()
    soup.smooth()
    # Text on either side of a removed comment stays as two nodes.
    removed = _remove_comments(soup)

    # Collected up front: each node is classified from its original neighbours.
    texts: List[NavigableString] = [node for node in soup.descendants if is_text(node)]
    for node in texts:
        _minify_text(node, options)
    logger.debug("minified %d text nodes, removed %d comments", len(texts), removed)
    return soup


def minify(html: str, options: Optional[MinifyOptions] = None, *, parser: str = DEFAULT_PARSER) -> str:
    """Return a whitespace-collapsed rendition of ``html``."""
    soup = minify_tree(parse(html, parser), options)
    return remove_wrapper(html, serialize(soup))


__all__ = ["INLINE_ELEMENTS", "KEEP_WHITESPACE", "minify", "minify_tree"]
