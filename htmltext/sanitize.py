"""Tag stripping and allow-list sanitizing."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping, Optional, Sequence, Union

from .models import SanitizeOptions
from .tree import DEFAULT_PARSER, is_attached, parse, remove_wrapper, serialize

logger = logging.getLogger(__name__)

# Wrappers a parser may imply; they are kept so the document stays well formed.
_WRAPPERS = frozenset({"html", "body"})

AllowList = Union[Mapping[str, Sequence[str]], Sequence[str]]


def strip_tags(html: str, tags: Iterable[str] = (), *, parser: str = DEFAULT_PARSER) -> str:
    """Remove the given elements together with their content.

    With no tag names nothing is removed and the document comes back
    re-serialized.
    """
    soup = parse(html, parser)
    names = list(tags)
    removed = soup.find_all(names) if names else []
    for node in removed:
        node.extract()
    logger.debug("stripped %d elements (%s)", len(removed), ", ".join(names))
    return remove_wrapper(html, serialize(soup))


def _allowed(tags: Optional[AllowList]) -> Dict[str, list]:
    if tags is None:
        return SanitizeOptions().tags
    return SanitizeOptions(tags=tags).tags


def sanitize(html: str, tags: Optional[AllowList] = None, *, parser: str = DEFAULT_PARSER) -> str:
    """Keep only allow-listed tags and attributes.

    ``tags`` is either a list of tag names or a mapping of tag name to the
    attribute names it may keep, e.g. ``{"p": [], "a": ["href"]}``. Elements
    not on the list are removed along with their content.
    """
    allowed = _allowed(tags)
    soup = parse(html, parser)

    dropped = 0
    for tag in soup.find_all(True):
        if not is_attached(tag, soup):
            continue
        if tag.name not in allowed and tag.name not in _WRAPPERS:
            tag.extract()
            dropped += 1
            continue
        keep = allowed.get(tag.name, [])
        tag.attrs = {name: value for name, value in tag.attrs.items() if name in keep}
    logger.debug("sanitize dropped %d elements", dropped)
    return remove_wrapper(html, serialize(soup))


__all__ = ["sanitize", "strip_tags"]
