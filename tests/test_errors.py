"""Tests for the exception hierarchy and where each error surfaces."""

import pytest

from blogmark import (
    BlogmarkError,
    ContentError,
    FrontmatterError,
    InvariantError,
    TemplateError,
    UnsupportedFeatureError,
    parse,
)
from blogmark.span import Span


class TestHierarchy:
    """Content errors and invariant errors are separate families."""

    def test_content_errors(self) -> None:
        assert issubclass(UnsupportedFeatureError, ContentError)
        assert issubclass(FrontmatterError, ContentError)
        assert issubclass(ContentError, BlogmarkError)

    def test_invariant_error_is_not_content_error(self) -> None:
        """Callers that skip bad documents must not swallow bugs."""
        assert issubclass(InvariantError, BlogmarkError)
        assert not issubclass(InvariantError, ContentError)

    def test_template_error(self) -> None:
        err = TemplateError("article", "missing field 'title'")
        assert str(err) == "Template 'article': missing field 'title'"
        assert err.template == "article"


class TestContentErrorMessage:
    """Location formatting of content errors."""

    def test_message_only(self) -> None:
        assert str(ContentError("bad")) == "bad"

    def test_with_file_and_span(self) -> None:
        err = ContentError("bad", Span(12, 15), "post.md")
        assert str(err) == "post.md:12 bad"
        assert err.span == Span(12, 15)

    def test_unsupported_feature(self) -> None:
        err = UnsupportedFeatureError("html block", source_file="post.md")
        assert err.feature == "html block"
        assert str(err) == "post.md Unsupported feature: html block"


class TestRaisedByParser:
    """Unsupported constructs abort only the document being parsed."""

    def test_html_block(self) -> None:
        with pytest.raises(UnsupportedFeatureError) as exc_info:
            parse("<div>\nraw\n</div>\n", source_file="post.md")
        assert exc_info.value.feature == "html block"
        assert exc_info.value.source_file == "post.md"

    def test_metadata_block_in_body(self) -> None:
        """Frontmatter must be split off before parsing the body."""
        with pytest.raises(UnsupportedFeatureError) as exc_info:
            parse("---\ntitle: x\n---\nbody\n")
        assert exc_info.value.feature == "metadata block"

    def test_inline_html_is_supported(self) -> None:
        """Inline html passes through as raw markup."""
        from blogmark import Markdown

        assert Markdown()("a <b>b</b>") == "<p>a <b>b</b></p>"
