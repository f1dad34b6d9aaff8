"""Tests for the page template engine."""

import pytest

from blogmark.errors import TemplateError
from blogmark.post import Author, PostInfo
from blogmark.template import DEFAULT_TITLE, TemplateEngine


@pytest.fixture
def engine() -> TemplateEngine:
    return TemplateEngine.default()


class TestEngine:
    """Registration and lookup."""

    def test_default_templates(self, engine: TemplateEngine) -> None:
        assert engine.names == ["article", "redirect"]

    def test_frozen_rejects_registration(self, engine: TemplateEngine) -> None:
        with pytest.raises(TemplateError, match="frozen"):
            engine.register("extra", "$x")

    def test_custom_template(self) -> None:
        engine = TemplateEngine().register("greet", "Hello $name").freeze()
        assert engine.render("greet", {"name": "Ada"}) == "Hello Ada"

    def test_unknown_template(self, engine: TemplateEngine) -> None:
        with pytest.raises(TemplateError, match="Template 'missing': no such template"):
            engine.render("missing", {})

    def test_missing_field(self) -> None:
        engine = TemplateEngine().register("greet", "Hello $name")
        with pytest.raises(TemplateError, match="missing field 'name'"):
            engine.render("greet", {})

    def test_bad_placeholder(self) -> None:
        engine = TemplateEngine().register("broken", "cost: $")
        with pytest.raises(TemplateError):
            engine.render("broken", {})


class TestArticle:
    """The article page."""

    def test_fields(self, engine: TemplateEngine) -> None:
        info = PostInfo(
            title="A & B",
            description="About <things>",
            tags=("x", "y"),
            authors=(Author("Ada"), Author("Bob")),
        )
        page = engine.render_article(info, "<p>body</p>")
        assert "<title>A &amp; B</title>" in page
        assert '<meta name="description" content="About &lt;things&gt;"/>' in page
        assert '<meta name="keywords" content="x, y"/>' in page
        assert '<meta name="author" content="Ada, Bob"/>' in page
        assert "<article>\n<p>body</p>\n</article>" in page

    def test_default_title(self, engine: TemplateEngine) -> None:
        page = engine.render_article(PostInfo(), "")
        assert f"<title>{DEFAULT_TITLE}</title>" in page


class TestRedirect:
    """The redirect page."""

    def test_target_and_delay(self, engine: TemplateEngine) -> None:
        page = engine.render_redirect("/new/?a=1&b=2", delay="0")
        assert '<meta http-equiv="refresh" content="0; url=/new/?a=1&amp;b=2"/>' in page
        assert '<a href="/new/?a=1&amp;b=2">' in page

    def test_defaults_fill_missing_fields(self, engine: TemplateEngine) -> None:
        page = engine.render("redirect", {})
        assert 'content="3; url=#"' in page

    def test_extra_head(self, engine: TemplateEngine) -> None:
        page = engine.render_redirect("/x", head='<link rel="canonical" href="/x"/>')
        assert '<link rel="canonical" href="/x"/>' in page
