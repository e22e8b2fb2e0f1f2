from htmltext.layout import column_widths, format_table, indent_level
from htmltext.tree import parse


def test_table_with_header_has_five_lines() -> None:
    lines = format_table([["Name", "Age"], ["Bob", "42"]], has_header=True)
    assert lines == [
        "+-------+------+",
        "| Name  | Age  |",
        "+-------+------+",
        "| Bob   | 42   |",
        "+-------+------+",
    ]
    assert sum(1 for line in lines if line.startswith("+")) == 3


def test_table_without_header() -> None:
    lines = format_table([["a", "b"]])
    assert lines == ["+----+----+", "| a  | b  |", "+----+----+"]


def test_irregular_rows_are_padded() -> None:
    lines = format_table([["a", "b", "c"], ["d"], ["e", "ffff"]])
    assert len({len(line) for line in lines}) == 1
    assert all(line.count("|") == 4 for line in lines if line.startswith("|"))
    assert lines[2] == "| d  |       |    |"


def test_empty_table_has_no_lines() -> None:
    assert format_table([]) == []
    assert column_widths([]) == []


def test_indent_counts_enclosing_list_items() -> None:
    soup = parse("<ul><li>a<ul><li>b<ol><li>c</li></ol></li></ul></li></ul>")
    outer, middle, inner = soup.find_all(["ul", "ol"])
    assert indent_level(outer) == 0
    assert indent_level(middle) == 3
    assert indent_level(inner) == 6


def test_indent_restarts_outside_list_structure() -> None:
    soup = parse("<ul><li><div><ul><li>x</li></ul></div></li></ul>")
    inner = soup.find_all("ul")[1]
    assert indent_level(inner) == 0
