"""
blogmark: extended Markdown to HTML for blog posts.

CommonMark with tables, strikethrough, task lists and footnotes, plus
``==highlighted==`` text, ``$inline$`` math and ``$$ display $$`` math.

Quick Start:
    >>> from blogmark import parse, render
    >>> render(parse("Some ==marked== text"))
    '<p>Some <mark>marked</mark> text</p>'

    >>> from blogmark import Markdown
    >>> md = Markdown(treat_soft_break_as_newline=True)
    >>> html = md("line one\\nline two")

Posts with YAML frontmatter:
    >>> from blogmark import split_frontmatter
    >>> info, body = split_frontmatter(text)
"""

from collections.abc import Callable, Iterable

from blogmark.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from blogmark.errors import (
    BlogmarkError,
    ContentError,
    FrontmatterError,
    InvariantError,
    TemplateError,
    UnsupportedFeatureError,
)
from blogmark.lexer import BaseTokenizer, ExtendedLexer
from blogmark.nodes import (
    Alignment,
    BlockQuote,
    Chained,
    CodeBlock,
    Component,
    Footnote,
    HorizontalRule,
    Image,
    Latex,
    List,
    Placeholder,
    Raw,
    Style,
    StyleKind,
    Table,
    TexFormat,
    Text,
)
from blogmark.parser import ComponentParser
from blogmark.post import Author, Edit, PostInfo, split_frontmatter
from blogmark.renderers.html import HtmlRenderer
from blogmark.renderers.protocol import ComponentRenderer
from blogmark.span import Span
from blogmark.template import TemplateEngine
from blogmark.tokens import BaseTag, Tag, TagKind, Token, TokenType

__version__ = "0.1.0"


def parse(
    source: str,
    *,
    config: ParseConfig | None = None,
    source_file: str | None = None,
) -> list[Component]:
    """Parse Markdown source into top-level components.

    Args:
        source: Markdown source text (no frontmatter)
        config: Parse configuration; the context's configuration if None
        source_file: Optional source file path for error messages

    Raises:
        ContentError: The document uses an unsupported construct.
    """
    if config is None:
        return ComponentParser(source, source_file=source_file).parse()
    with parse_config_context(config):
        return ComponentParser(source, source_file=source_file).parse()


def render(
    components: Iterable[Component],
    *,
    id_factory: Callable[[], str] | None = None,
) -> str:
    """Render components to HTML.

    Args:
        components: Top-level components, e.g. from parse()
        id_factory: Produces ids for aligned tables (random if None)
    """
    return HtmlRenderer(id_factory=id_factory).render(components)


class Markdown:
    """Parser and renderer with a fixed configuration.

    Usage:
        >>> md = Markdown()
        >>> md("**bold** and $x^2$")

    Thread Safety:
        Configuration is installed through a ContextVar for each call. One
        instance can be shared between threads.
    """

    __slots__ = ("_config", "_renderer")

    def __init__(
        self,
        *,
        treat_soft_break_as_newline: bool = False,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._config = ParseConfig(treat_soft_break_as_newline=treat_soft_break_as_newline)
        self._renderer = HtmlRenderer(id_factory=id_factory)

    @property
    def config(self) -> ParseConfig:
        return self._config

    def __call__(self, source: str) -> str:
        """Parse and render in one call."""
        return self.render(self.parse(source))

    def parse(self, source: str, *, source_file: str | None = None) -> list[Component]:
        return parse(source, config=self._config, source_file=source_file)

    def render(self, components: Iterable[Component]) -> str:
        return self._renderer.render(components)


__all__ = [
    "Alignment",
    "Author",
    "BaseTag",
    "BaseTokenizer",
    "BlockQuote",
    "BlogmarkError",
    "Chained",
    "CodeBlock",
    "Component",
    "ComponentParser",
    "ComponentRenderer",
    "ContentError",
    "Edit",
    "ExtendedLexer",
    "Footnote",
    "FrontmatterError",
    "HorizontalRule",
    "HtmlRenderer",
    "Image",
    "InvariantError",
    "Latex",
    "List",
    "Markdown",
    "ParseConfig",
    "Placeholder",
    "PostInfo",
    "Raw",
    "Span",
    "Style",
    "StyleKind",
    "Table",
    "Tag",
    "TagKind",
    "TemplateEngine",
    "TemplateError",
    "TexFormat",
    "Text",
    "Token",
    "TokenType",
    "UnsupportedFeatureError",
    "__version__",
    "get_parse_config",
    "parse",
    "parse_config_context",
    "render",
    "reset_parse_config",
    "set_parse_config",
    "split_frontmatter",
]
