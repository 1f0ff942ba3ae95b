"""Unit tests for core/convert/md_blocks.py and core/convert/md_inline.py"""

import pytest

from mycoconv.core.context import ConvertContext
from mycoconv.core.convert.md_blocks import markdown_to_myco
from mycoconv.core.md.parse import make_parser
from mycoconv.core.myco.models import Text
from mycoconv.core.myco.parse import parse_blocks


def _myco(src: str, context: ConvertContext = None) -> str:
    text, _ = markdown_to_myco(src, context)
    return text


@pytest.mark.parametrize("src,expected", [
    ("# Heading 1",   "= Heading 1\n"),
    ("## Heading 2",  "== Heading 2\n"),
    ("### Heading 3", "=== Heading 3\n"),
])
def test_headings(src, expected):
    assert _myco(src) == expected


@pytest.mark.parametrize("src,expected", [
    ("*italic*",                "//italic//\n"),
    ("_italic_",                "//italic//\n"),
    ("**bold**",                "**bold**\n"),
    ("`code`",                  "`code`\n"),
    ("***bold italic***",       "**//bold italic//**\n"),
    ("~~strikethrough text~~",  "~~strikethrough text~~\n"),
    ("*a **b** c*",             "//a **b** c//\n"),
])
def test_formatting(src, expected):
    assert _myco(src) == expected


@pytest.mark.parametrize("src,expected", [
    ("[Page](Page)",                 "[[Page]]\n"),
    ("[Custom Text](Page)",          "[[Page | Custom Text]]\n"),
    ("[Google](https://google.com)", "[[https://google.com | Google]]\n"),
    ("[](Page)",                     "[[Page]]\n"),
    ("see https://example.org now",  "see [[https://example.org]] now\n"),
    ("[Café](Café)",                 "[[Café]]\n"),
    ("[Текст](страница)",            "[[страница | Текст]]\n"),
    ("[Docs](<My Page>)",            "[[My Page | Docs]]\n"),
    ("[x](https://example.org/a%2Fb)", "[[https://example.org/a%2Fb | x]]\n"),
])
def test_links(src, expected):
    assert _myco(src) == expected


def test_linkify_can_be_disabled():
    ctx = ConvertContext(linkify=False)
    assert _myco("see https://example.org now", ctx) == "see https://example.org now\n"


def test_bare_domains_are_not_linkified():
    assert _myco("edit main.py today") == "edit main.py today\n"


@pytest.mark.parametrize("src,expected", [
    ("- Item 1\n- Item 2\n- Item 3",  "* Item 1\n* Item 2\n* Item 3\n"),
    ("1. First\n2. Second\n3. Third", "*. First\n*. Second\n*. Third\n"),
    ("- a\n  - b\n- c",               "* a\n** b\n* c\n"),
    ("1. a\n   1. b",                 "*. a\n**. b\n"),
    ("- [ ] open\n- [x] done",        "*x open\n*v done\n"),
])
def test_lists(src, expected):
    assert _myco(src) == expected


def test_empty_list_item_has_no_trailing_space():
    text = _myco("- a\n-\n- b")
    assert text == "* a\n*\n* b\n"
    [lst] = parse_blocks(text)
    assert len(lst.items) == 3
    assert lst.items[1].contents == []


def test_list_item_code_block_follows_item_line():
    assert _myco("- a\n\n  ```\n  x\n  ```") == "* a\n```\nx\n```\n"


@pytest.mark.parametrize("src,expected", [
    ("```\ncode here\n```",        "```\ncode here\n```\n"),
    ("```go\nfunc main() {}\n```", "```go\nfunc main() {}\n```\n"),
    ("```python extra\nx\n```",    "```python\nx\n```\n"),
    ("    indented\n",             "```\nindented\n```\n"),
])
def test_code_blocks(src, expected):
    assert _myco(src) == expected


def test_thematic_break():
    assert _myco("---") == "----\n"


def test_blank_line_between_top_level_blocks_only():
    assert _myco("# T\n\npara\n\n- a\n- b\n\n---") == "= T\n\npara\n\n* a\n* b\n\n----\n"


def test_blockquote():
    assert _myco("> This is a quote") == "> This is a quote\n"


def test_blockquote_non_paragraph_child():
    assert _myco("> # Title\n>\n> text") == "> = Title\n> text\n"


def test_blockquote_multiline_paragraph_single_prefix():
    assert _myco("> one\n> two") == "> one\ntwo\n"


def test_table_without_alignment_is_data():
    src = "| Header 1 | Header 2 |\n|----------|----------|\n| Cell 1   | Cell 2   |"
    assert _myco(src) == "table {\n| Header 1 | Header 2\n| Cell 1 | Cell 2\n}\n"


def test_table_alignment_marks_header_column():
    src = "| A | B |\n|:--|---|\n| 1 | 2 |"
    assert _myco(src) == "table {\n! A | B\n! 1 | 2\n}\n"


def test_table_escaped_pipe_stays_in_cell():
    src = "| a \\| b | c |\n|---|---|\n| 1 | 2 |"
    text = _myco(src)
    assert text == "table {\n| a \\| b | c\n| 1 | 2\n}\n"
    [table] = parse_blocks(text)
    assert [len(row.cells) for row in table.rows] == [2, 2]
    [para] = table.rows[0].cells[0].contents
    assert para.formatted.lines == [[Text("a | b")]]


def test_table_cell_link_pipe_is_not_escaped():
    src = "| [x](Page) |\n|---|"
    assert _myco(src) == "table {\n| [[Page | x]]\n}\n"


@pytest.mark.parametrize("src,expected", [
    ("![Alt text](image.png)",          "img { image.png | Alt text }\n"),
    ("![](image.png)",                  "img { image.png }\n"),
    ('![Alt](image.png "The title")',   "img { image.png | The title }\n"),
    ("See ![x](a.png) here",            "See img { a.png | x } here\n"),
    ("![x](café.png)",                  "img { café.png | x }\n"),
])
def test_images(src, expected):
    assert _myco(src) == expected


def test_raw_html_passes_through():
    assert _myco("x<sup>2</sup>") == "x<sup>2</sup>\n"
    assert _myco("<div>\nraw\n</div>") == "<div>\nraw\n</div>\n"


def test_line_breaks_collapse_to_newline():
    assert _myco("a\nb") == "a\nb\n"
    assert _myco("a  \nb") == "a\nb\n"


def test_no_warnings_for_markdown_input():
    _, warnings = markdown_to_myco("# T\n\n| a |\n|---|\n| b |\n\n<div>x</div>")
    assert warnings == []


def test_empty_input():
    assert markdown_to_myco("") == ("", [])


def test_unknown_parser_preset():
    with pytest.raises(ValueError, match="unknown parser preset: nonsense"):
        make_parser("nonsense")
