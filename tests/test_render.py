from __future__ import annotations

from htmltext.layout import format_table
from htmltext.models import RenderOptions
from htmltext.render import FORMATTED_ORDER, RULES, TextRenderer, to_text
from htmltext.tree import parse


# ---------------------------------------------------------------------------
# Headings and blocks
# ---------------------------------------------------------------------------


def test_h1_is_underlined_with_equals() -> None:
    assert to_text("<h1>Title</h1>") == "Title\n====="


def test_lower_headings_use_dashes() -> None:
    assert to_text("<h3>Sub</h3>") == "Sub\n---"


def test_paragraphs_are_separated_by_blank_line() -> None:
    assert to_text("<p>one</p>\n<p>two</p>") == "one\n\ntwo"


def test_unclosed_paragraphs_stay_separate() -> None:
    assert to_text("<p>one<p>two") == "one\n\ntwo"


def test_line_breaks() -> None:
    assert to_text("<p>a<br>b</p>") == "a\nb"


def test_blockquote_is_quoted() -> None:
    assert to_text("<blockquote>wise words</blockquote>") == '"wise words"'


def test_multiline_code_is_indented() -> None:
    result = to_text("<pre><code>a = 1\nb = 2</code></pre>")
    assert result == "a = 1\n   b = 2"


def test_single_line_code_is_inline() -> None:
    assert to_text("<p>run <code>make</code> now</p>") == "run make now"


# ---------------------------------------------------------------------------
# Links and images
# ---------------------------------------------------------------------------


def test_link_shows_href() -> None:
    assert to_text('<a href="http://e.com">e</a>') == "e [http://e.com]"


def test_link_without_href_has_empty_target() -> None:
    assert to_text("<a name='top'>top</a>") == "top []"


def test_image_annotation() -> None:
    assert to_text('<img src="a.png" alt="Logo">') == "[image: Logo a.png]"
    assert to_text('<img src="a.png">') == "[image:  a.png]"
    assert to_text('<img src="a.png" alt="">') == "[image:  a.png]"


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------


def test_unordered_list() -> None:
    assert to_text("<ul><li>x</li><li>y</li></ul>") == "* x\n* y"


def test_unclosed_list_items_stay_separate() -> None:
    assert to_text("<ul><li>x<li>y</ul>") == "* x\n* y"
    assert to_text("<ol><li>one<li>two</ol>") == "1. one\n2. two"


def test_ordered_list_numbers_items() -> None:
    assert to_text("<ol>\n  <li>one</li>\n  <li>two</li>\n</ol>") == "1. one\n2. two"


def test_nested_list_is_indented() -> None:
    assert to_text("<ul><li>a<ul><li>b</li></ul></li></ul>") == "* a\n   * b"


def test_deeply_nested_lists_indent_per_level() -> None:
    html = "<ul><li>a<ul><li>b<ol><li>c</li></ol></li></ul></li><li>d</li></ul>"
    assert to_text(html) == "* a\n   * b\n      1. c\n* d"


def test_list_items_keep_link_annotations() -> None:
    assert to_text('<ul><li><a href="/a">A</a></li></ul>') == "* A [/a]"


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


def test_table_renders_as_grid() -> None:
    html = (
        "<table>"
        "<tr><th>Name</th><th>Age</th></tr>"
        "<tr><td>Bob</td><td>42</td></tr>"
        "</table>"
    )
    expected = format_table([["Name", "Age"], ["Bob", "42"]], has_header=True)
    result = to_text(html)
    assert result == "\n".join(expected)
    assert len(result.splitlines()) == 5


def test_table_without_header_cells() -> None:
    result = to_text("<table><tbody><tr><td>a</td><td>b</td></tr></tbody></table>")
    assert result.splitlines() == format_table([["a", "b"]])


# ---------------------------------------------------------------------------
# Content exclusion and options
# ---------------------------------------------------------------------------


def test_script_style_and_iframe_are_dropped() -> None:
    result = to_text("<p>a</p><script>evil()</script><style>p{}</style><iframe src='x'>f</iframe>")
    assert "a" in result
    assert "evil" not in result
    assert "p{}" not in result
    assert result == "a"


def test_empty_document() -> None:
    assert to_text("") == ""


def test_unformatted_text_skips_headings() -> None:
    result = to_text("<h1>Title</h1><p>Body</p>", RenderOptions(format=False))
    assert result == "Title\n\nBody"


def test_unformatted_text_still_renders_lists_and_links() -> None:
    html = '<ul><li>x</li><li><a href="/y">y</a></li></ul>'
    assert to_text(html, RenderOptions(format=False)) == "* x\n* y [/y]"


def test_unformatted_table_cells_are_spaced() -> None:
    html = "<table><tr><td>a</td><td>b</td></tr><tr><td>c</td><td>d</td></tr></table>"
    assert to_text(html, RenderOptions(format=False)) == "a b \nc d"


def test_rules_cover_formatted_order() -> None:
    assert set(FORMATTED_ORDER) <= set(RULES)


def test_attributes_are_removed_after_rewrite() -> None:
    soup = parse('<p class="x" id="y">hi</p>')
    TextRenderer(soup).run(["p"])
    assert soup.p.attrs == {}
    assert soup.p.get_text() == "\nhi\n"
