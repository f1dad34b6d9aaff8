"""Tests for utility helpers and source spans."""

import pytest

from blogmark.span import Span
from blogmark.stringbuilder import StringBuilder
from blogmark.utils import escape_html, get_logger, random_id, slugify


class TestSlugify:
    def test_basic(self) -> None:
        assert slugify("Hello World!") == "hello-world"

    def test_unicode_is_kept(self) -> None:
        assert slugify("Café au lait") == "café-au-lait"

    def test_entities_are_decoded(self) -> None:
        assert slugify("Tea &amp; Cake") == "tea-cake"

    def test_empty(self) -> None:
        assert slugify("") == ""


class TestEscapeHtml:
    def test_escapes_markup_characters(self) -> None:
        assert escape_html('<a href="x">&</a>') == "&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;"

    def test_single_quotes_untouched(self) -> None:
        assert escape_html("it's") == "it's"


class TestRandomId:
    def test_length_and_alphabet(self) -> None:
        value = random_id()
        assert len(value) == 8
        assert value.isascii() and value.isalnum()

    def test_custom_length(self) -> None:
        assert len(random_id(12)) == 12


class TestLogger:
    def test_prefix_added(self) -> None:
        assert get_logger("mymodule").name == "blogmark.mymodule"

    def test_prefix_not_doubled(self) -> None:
        assert get_logger("blogmark.parser").name == "blogmark.parser"


class TestSpan:
    def test_slice_and_len(self) -> None:
        span = Span(2, 5)
        assert span.slice("abcdefg") == "cde"
        assert len(span) == 3

    def test_cap_length(self) -> None:
        assert Span(2, 10).cap_length(3) == Span(2, 5)
        assert Span(2, 4).cap_length(10) == Span(2, 4)

    def test_offset_start(self) -> None:
        assert Span(2, 10).offset_start(3) == Span(5, 10)
        assert Span(2, 4).offset_start(10) == Span(4, 4)

    def test_empty(self) -> None:
        assert len(Span.empty(7)) == 0

    def test_invalid(self) -> None:
        with pytest.raises(ValueError):
            Span(5, 2)


class TestStringBuilder:
    def test_build(self) -> None:
        sb = StringBuilder()
        sb.append("<p>").append("").append("x").append("</p>")
        assert sb.build() == "<p>x</p>"
        assert len(sb) == 3

    def test_extend(self) -> None:
        assert StringBuilder().extend(["a", "", "b"]).build() == "ab"
