"""Pure layout helpers for the text renderer: ASCII tables and list indents."""

from __future__ import annotations

from typing import List, Sequence

from bs4 import Tag

LIST_INDENT = 3
CELL_PADDING = 4

_LIST_TAGS = frozenset({"li", "ul", "ol"})


def _pad_rows(rows: Sequence[Sequence[str]]) -> List[List[str]]:
    columns = max((len(row) for row in rows), default=0)
    return [list(row) + [""] * (columns - len(row)) for row in rows]


def column_widths(rows: Sequence[Sequence[str]]) -> List[int]:
    """Widest cell per column plus padding."""
    widths: List[int] = []
    for row in rows:
        for index, cell in enumerate(row):
            if index == len(widths):
                widths.append(0)
            widths[index] = max(widths[index], len(cell) + CELL_PADDING)
    return widths


def _format_row(row: Sequence[str], widths: Sequence[int]) -> str:
    cells = "".join(f" {cell.ljust(width - 2)}|" for cell, width in zip(row, widths))
    return "|" + cells


def format_table(rows: Sequence[Sequence[str]], has_header: bool = False) -> List[str]:
    """Render rows of cell strings as a bordered ASCII grid.

    Short rows are padded with empty cells so every row spans the widest
    one. When ``has_header`` is set the first row is separated from the data
    rows by a border line.

    >>> format_table([["a", "bb"], ["ccc", "d"]], has_header=True)
    ['+------+-----+', '| a    | bb  |', '+------+-----+', '| ccc  | d   |', '+------+-----+']
    """
    grid = _pad_rows(rows)
    if not grid:
        return []
    widths = column_widths(grid)
    separator = "".join("+".ljust(width, "-") for width in widths) + "+"

    lines = [separator]
    if has_header:
        lines.append(_format_row(grid[0], widths))
        lines.append(separator)
        grid = grid[1:]
    lines.extend(_format_row(row, widths) for row in grid)
    lines.append(separator)
    return lines


def indent_level(node: Tag) -> int:
    """Spaces to indent a list: three per enclosing ``li``.

    Only list structure is walked; a list nested inside some other container
    starts again at zero.
    """
    indent = 0
    current = node.parent
    while current is not None and current.name in _LIST_TAGS:
        if current.name == "li":
            indent += LIST_INDENT
        current = current.parent
    return indent


__all__ = ["column_widths", "format_table", "indent_level"]
