"""Tests for post metadata and frontmatter splitting."""

import logging
from datetime import datetime

import pytest

from blogmark.errors import ContentError, FrontmatterError
from blogmark.post import Author, Edit, PostInfo, split_frontmatter

POST = """\
---
title: Hello
description: First post
tags: [intro, meta]
slug: hello-world
author:
  name: Ada
  email: ada@example.com
edits:
  - summary: Typo
    time: 2024-01-02 10:00:00
---
Body *text*
"""


class TestSplitFrontmatter:
    """Separating YAML frontmatter from the body."""

    def test_full_post(self) -> None:
        info, body = split_frontmatter(POST)
        assert body == "Body *text*\n"
        assert info.title == "Hello"
        assert info.description == "First post"
        assert info.tags == ("intro", "meta")
        assert info.slug == "hello-world"
        assert info.authors == (Author("Ada", "ada@example.com"),)
        assert info.edits == (Edit("Typo", datetime(2024, 1, 2, 10, 0)),)

    def test_no_frontmatter(self) -> None:
        text = "# Just a post\n\nBody"
        assert split_frontmatter(text) == (PostInfo(), text)

    def test_short_text(self) -> None:
        assert split_frontmatter("---\n---") == (PostInfo(), "---\n---")

    def test_leading_whitespace(self) -> None:
        info, body = split_frontmatter("\n\n---\ntitle: T\n---\nbody")
        assert info.title == "T"
        assert body == "body"

    def test_closing_fence_at_end(self) -> None:
        info, body = split_frontmatter("---\ntitle: T\n---")
        assert info.title == "T"
        assert body == ""

    def test_unclosed(self) -> None:
        with pytest.raises(FrontmatterError) as exc_info:
            split_frontmatter("---\ntitle: T\nbody text", source_file="a.md")
        assert isinstance(exc_info.value, ContentError)
        assert str(exc_info.value) == "a.md Unclosed frontmatter"

    def test_invalid_yaml_uses_defaults(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="blogmark.post"):
            info, body = split_frontmatter("---\ntitle: [unclosed\n---\nbody")
        assert info == PostInfo()
        assert body == "body"
        assert "Invalid frontmatter" in caplog.text

    def test_non_mapping_uses_defaults(self) -> None:
        info, _ = split_frontmatter("---\n- a\n- b\n---\nbody")
        assert info == PostInfo()

    def test_empty_block(self) -> None:
        info, body = split_frontmatter("---\n\n---\nbody text")
        assert info == PostInfo()
        assert body == "body text"


class TestPostInfo:
    """Building metadata from parsed YAML."""

    def test_string_author_and_tag(self) -> None:
        info = PostInfo.from_dict({"author": "Ada", "tags": "solo"})
        assert info.authors == (Author("Ada"),)
        assert info.tags == ("solo",)
        assert info.author_names == ["Ada"]

    def test_author_list(self) -> None:
        info = PostInfo.from_dict({"author": ["Ada", {"name": "Bob", "web": "b.dev"}, {"email": "x"}]})
        assert info.authors == (Author("Ada"), Author("Bob", web="b.dev"))

    def test_values_become_strings(self) -> None:
        info = PostInfo.from_dict({"title": 2024, "tags": [1, 2]})
        assert info.title == "2024"
        assert info.tags == ("1", "2")

    def test_no_edits(self) -> None:
        assert PostInfo.from_dict({}).edits is None

    def test_merge(self) -> None:
        base = PostInfo(title="Base", tags=("a",), slug="base")
        merged = base.merge(PostInfo(title="Override"))
        assert merged == PostInfo(title="Override", tags=("a",), slug="base")

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            PostInfo().title = "x"  # type: ignore[misc]
