"""Unit tests for core/convert/convert.py"""

import pytest

from mycoconv.core.context import ConvertContext, LinkResolver
from mycoconv.core.convert.convert import (
    NO_CONVERSION_NEEDED,
    ConversionError,
    UnsupportedFormatPair,
    convert,
)
from mycoconv.core.formats import TextFormat


@pytest.mark.parametrize("fmt", [TextFormat.MARKDOWN, TextFormat.MYCOMARKUP, "md", "myco"])
def test_same_format_returns_input(fmt):
    text, warnings = convert("**anything** //at all//", fmt, fmt)
    assert text == "**anything** //at all//"
    assert warnings == [NO_CONVERSION_NEEDED]


def test_dispatch_by_format_name():
    assert convert("= Title", "mycomarkup", "markdown") == ("# Title\n", [])
    assert convert("# Title", TextFormat.MARKDOWN, TextFormat.MYCOMARKUP) == ("= Title\n", [])


def test_bytes_are_decoded_as_utf8():
    text, _ = convert("= Café".encode("utf-8"), "myco", "md")
    assert text == "# Café\n"


def test_invalid_utf8_is_replaced_not_raised():
    text, _ = convert(b"= bad \xff byte", "myco", "md")
    assert text.startswith("# bad ")
    assert "�" in text


@pytest.mark.parametrize("source,dest", [("html", "markdown"), ("myco", "rst"), (None, "md")])
def test_unsupported_pair(source, dest):
    with pytest.raises(UnsupportedFormatPair) as exc:
        convert("x", source, dest)
    assert isinstance(exc.value, ConversionError)
    assert isinstance(exc.value, ValueError)
    assert "no conversion from" in str(exc.value)


def test_context_is_passed_through():
    ctx = ConvertContext(resolver=LinkResolver(hypha_prefix="/page/"))
    text, _ = convert("=> Home", "myco", "md", ctx)
    assert '<a href="/page/home">Home</a><br>' in text


def test_warnings_are_returned_not_raised():
    text, warnings = convert("= T\n\n<= Elsewhere", "myco", "md")
    assert text.startswith("# T\n")
    assert len(warnings) == 1
