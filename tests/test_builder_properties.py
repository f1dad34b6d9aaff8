"""Property-based tests for the tree builder and renderer.

Run with: pytest tests/test_builder_properties.py -v
"""

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from blogmark.errors import UnsupportedFeatureError
from blogmark.nodes import CodeBlock, Placeholder, Text
from blogmark.parser import ComponentParser
from blogmark.renderers import HtmlRenderer

markdown = st.text(alphabet="ab *_#->`\n|=$~1.[]", max_size=150)


def walk(components: list) -> list:
    """Every component in the trees, parents before children."""
    seen = []
    stack = list(reversed(components))
    while stack:
        component = stack.pop()
        seen.append(component)
        children = []
        for name in ("children", "items", "headers"):
            children.extend(getattr(component, name, []))
        for row in getattr(component, "rows", []):
            children.extend(row)
        stack.extend(reversed(children))
    return seen


def parse(source: str) -> list:
    try:
        return ComponentParser(source).parse()
    except UnsupportedFeatureError:
        assume(False)
        raise


class TestBuilder:
    """Any input builds a tree without placeholders."""

    @given(markdown)
    @settings(max_examples=300)
    def test_no_placeholder_survives(self, source: str) -> None:
        for component in walk(parse(source)):
            assert not isinstance(component, Placeholder)

    @given(markdown)
    @settings(max_examples=300)
    def test_renders(self, source: str) -> None:
        html = HtmlRenderer(id_factory=lambda: "T").render(parse(source))
        assert isinstance(html, str)

    @given(st.text(alphabet="abc xyz", min_size=1, max_size=50))
    def test_plain_text_is_kept(self, source: str) -> None:
        """Words survive parsing; only whitespace may be normalized."""
        texts = [
            c.plain_text() if isinstance(c, Text) else c.content
            for c in walk(parse(source))
            if isinstance(c, Text | CodeBlock)
        ]
        assert "".join(texts).split() == source.split()
