"""Plain-text rendering of HTML documents.

The document is minified, re-parsed and then rewritten one tag kind at a
time: every anchor first, then every image, and so on. Inline annotations
(links, images) must be in place before block containers flatten their
children into text, so the order of :data:`FORMATTED_ORDER` matters.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List, Optional, Sequence

from bs4 import BeautifulSoup, Tag

from .layout import format_table, indent_level
from .minify import minify
from .models import RenderOptions
from .sanitize import strip_tags
from .tree import DEFAULT_PARSER, TRIM_CHARS, is_attached, node_name, parse

logger = logging.getLogger(__name__)

SKIPPED_TAGS = ("script", "style", "iframe")
HEADINGS = ("h1", "h2", "h3", "h4", "h5", "h6")
LISTS = ("ul", "ol")

FORMATTED_ORDER = ("a", "img", "br", "code", "p", *HEADINGS, "table", "li", "ul", "ol", "blockquote")
PLAIN_ORDER = ("img", "a", "ul", "ol")

_LEADING_SPACES_RE = re.compile(r"^ +", re.MULTILINE)
_BLOCK_CLOSE_RE = re.compile(r"(</(?:h[1-6]|tr|blockquote|dt|dd|table|p)>)")
_BLOCK_OPEN_RE = re.compile(r"(<(?:h[1-6]|table|blockquote|p)(?:\s[^>]*)?>)")
_BR_RE = re.compile(r"(<br\s*/?>)")
_CELL_CLOSE_RE = re.compile(r"(</(?:th|td)>)")

Rule = Callable[["TextRenderer", Tag], None]
RULES: Dict[str, Rule] = {}


def rule(*names: str) -> Callable[[Rule], Rule]:
    """Register a rewrite rule for the given tag names."""

    def register(func: Rule) -> Rule:
        for name in names:
            RULES[name] = func
        return func

    return register


def _child_items(tag: Tag) -> List[Tag]:
    return [child for child in tag.children if node_name(child) == "li"]


class TextRenderer:
    """Rewrites a parsed document in place so its text content reads well."""

    def __init__(self, soup: BeautifulSoup) -> None:
        self.soup = soup
        # Keyed by id(); values keep the tags alive so ids are never reused.
        self._rendered_lists: Dict[int, Tag] = {}

    def run(self, order: Sequence[str]) -> BeautifulSoup:
        for name in order:
            apply = RULES[name]
            count = 0
            for tag in self.soup.find_all(name):
                if not is_attached(tag, self.soup):
                    continue
                apply(self, tag)
                tag.attrs = {}
                count += 1
            logger.debug("rendered %d <%s> elements", count, name)
        return self.soup

    def text(self) -> str:
        return self.soup.get_text().strip(TRIM_CHARS)

    def replace_with_block(self, tag: Tag, text: str) -> None:
        block = self.soup.new_tag("div")
        block.string = text
        tag.replace_with(block)

    def render_list(self, tag: Tag) -> None:
        """Prefix each item with its marker, rendering nested lists first."""
        if id(tag) in self._rendered_lists:
            return
        self._rendered_lists[id(tag)] = tag

        items = _child_items(tag)
        for item in items:
            for nested in item.find_all(list(LISTS), recursive=False):
                self.render_list(nested)

        pad = " " * indent_level(tag)
        line_break = "\n"
        for number, item in enumerate(items, start=1):
            marker = f"{number}. " if tag.name == "ol" else "* "
            value = line_break + pad + marker + item.get_text()
            item.string = value.rstrip(TRIM_CHARS) + "\n"
            line_break = ""
        tag.attrs = {}


@rule("a")
def _anchor(renderer: TextRenderer, tag: Tag) -> None:
    tag.string = f"{tag.get_text()} [{tag.get('href', '')}]"


@rule("img")
def _image(renderer: TextRenderer, tag: Tag) -> None:
    tag.string = f"[image: {tag.get('alt', '')} {tag.get('src', '')}]"


@rule("br")
def _line_break(renderer: TextRenderer, tag: Tag) -> None:
    tag.string = "\n"


@rule("code")
def _code(renderer: TextRenderer, tag: Tag) -> None:
    value = tag.get_text()
    if "\n" in value:
        tag.string = "\n   " + value.replace("\n", "\n   ") + "\n"


@rule("p")
def _paragraph(renderer: TextRenderer, tag: Tag) -> None:
    tag.string = "\n" + tag.get_text() + "\n"


@rule("blockquote")
def _blockquote(renderer: TextRenderer, tag: Tag) -> None:
    tag.string = '\n"' + tag.get_text() + '"\n'


@rule(*HEADINGS)
def _heading(renderer: TextRenderer, tag: Tag) -> None:
    value = tag.get_text()
    underline = ("=" if tag.name == "h1" else "-") * len(value)
    renderer.replace_with_block(tag, f"\n{value}\n{underline}\n")


@rule("table")
def _table(renderer: TextRenderer, tag: Tag) -> None:
    rows: List[List[str]] = []
    has_header = False
    for row in tag.find_all("tr"):
        if row.find_parent("table") is not tag:
            continue
        cells = [child for child in row.children if node_name(child) in ("td", "th")]
        if not cells:
            continue
        has_header = has_header or any(cell.name == "th" for cell in cells)
        rows.append([cell.get_text() for cell in cells])
    lines = format_table(rows, has_header)
    renderer.replace_with_block(tag, "\n" + "\n".join(lines) + "\n")


@rule("li")
def _list_item(renderer: TextRenderer, tag: Tag) -> None:
    for nested in tag.find_all(list(LISTS), recursive=False):
        renderer.render_list(nested)


@rule(*LISTS)
def _list(renderer: TextRenderer, tag: Tag) -> None:
    renderer.render_list(tag)


def _break_blocks(html: str) -> str:
    """Insert line breaks around block markup for the unformatted rendering."""
    html = _LEADING_SPACES_RE.sub("", html)
    html = _BLOCK_CLOSE_RE.sub("\\1\n", html)
    html = _BLOCK_OPEN_RE.sub("\n\\1", html)
    html = html.replace("</tr>\n</table>", "</tr></table>")
    html = _BR_RE.sub("\\1\n", html)
    return _CELL_CLOSE_RE.sub("\\1 ", html)


def to_text(html: str, options: Optional[RenderOptions] = None, *, parser: str = DEFAULT_PARSER) -> str:
    """Render ``html`` as readable plain text."""
    options = options or RenderOptions()
    html = strip_tags(html, SKIPPED_TAGS, parser=parser)
    html = minify(html, parser=parser)
    html = html.replace("\r\n", "\n")
    if not options.format:
        html = _break_blocks(html)

    renderer = TextRenderer(parse(html, parser))
    renderer.run(FORMATTED_ORDER if options.format else PLAIN_ORDER)
    return renderer.text()


__all__ = ["FORMATTED_ORDER", "PLAIN_ORDER", "RULES", "TextRenderer", "to_text"]
