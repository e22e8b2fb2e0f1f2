import pytest

from htmltext.tree import is_attached, is_text, node_name, parse, remove_wrapper, set_text


def test_remove_wrapper_strips_implied_html_and_body() -> None:
    assert remove_wrapper("<p>x</p>", "<html><body><p>x</p></body></html>\n") == "<p>x</p>"


def test_remove_wrapper_strips_empty_implied_head() -> None:
    assert remove_wrapper("<p>x</p>", "<html><head></head><body><p>x</p></body></html>") == "<p>x</p>"


def test_remove_wrapper_keeps_wrappers_present_in_input() -> None:
    original = "<BODY class='a'><p>x</p></BODY>"
    assert remove_wrapper(original, "<html><body><p>x</p></body></html>") == "<body><p>x</p></body>"


def test_remove_wrapper_unwraps_implied_head_with_content() -> None:
    serialized = "<html><head><script>x</script></head><body></body></html>"
    assert remove_wrapper("<script>x</script>", serialized) == "<script>x</script>"


def test_remove_wrapper_ignores_header_elements() -> None:
    original = "<header>h</header>"
    assert remove_wrapper(original, "<html><head></head><body><header>h</header></body></html>") == original


def test_default_parser_closes_implied_end_tags() -> None:
    soup = parse("<ul><li>x<li>y</ul>")
    assert [item.get_text() for item in soup.find_all("li")] == ["x", "y"]


def test_parse_rejects_unknown_parser() -> None:
    with pytest.raises(ValueError):
        parse("<p>x</p>", parser="regex")


def test_text_helpers() -> None:
    soup = parse("<!DOCTYPE html><p>a<!-- c --><b>b</b></p>")
    doctype = soup.contents[0]
    paragraph = soup.p
    text, comment, bold = paragraph.contents

    assert not is_text(doctype)
    assert is_text(text)
    assert not is_text(comment)
    assert node_name(bold) == "b"
    assert node_name(text) is None

    replacement = set_text(text, "z")
    assert str(paragraph.contents[0]) == "z"
    assert is_attached(replacement, soup)
    assert not is_attached(text, soup)
