"""Start-of-element handling: the component each opening tag pushes."""

from __future__ import annotations

from blogmark.errors import UnsupportedFeatureError
from blogmark.nodes import (
    BlockQuote,
    CodeBlock,
    Component,
    Footnote,
    Image,
    Latex,
    List,
    Placeholder,
    Style,
    StyleKind,
    Table,
    TexFormat,
    Text,
)
from blogmark.tokens import BaseTag, Tag, TagKind, Token

_STYLED: dict[TagKind, StyleKind] = {
    TagKind.PARAGRAPH: StyleKind.PARAGRAPH,
    TagKind.EMPHASIS: StyleKind.EMPHASIS,
    TagKind.STRONG: StyleKind.STRONG,
    TagKind.STRIKETHROUGH: StyleKind.STRIKETHROUGH,
}


def seed_for_tag(tag: Tag) -> Component:
    """Seed for a custom tag."""
    if tag is Tag.HIGHLIGHT:
        return Text.styled(Style(StyleKind.HIGHLIGHT))
    return Latex(TexFormat.BLOCK if tag.multiline else TexFormat.INLINE)


def seed_for_base_tag(tag: BaseTag) -> Component | None:
    """Seed for a base tag, None for tags that push nothing."""
    kind = tag.kind
    if kind in _STYLED:
        return Text.styled(Style(_STYLED[kind]))

    match kind:
        case TagKind.HEADING:
            return Text.styled(Style.heading(tag.level))
        case TagKind.LINK:
            return Text.styled(Style.link(tag.url))
        case TagKind.BLOCK_QUOTE:
            return BlockQuote()
        case TagKind.CODE_BLOCK:
            return CodeBlock(tag.language)
        case TagKind.LIST:
            return List(tag.start)
        case TagKind.ITEM | TagKind.TABLE_CELL:
            return Placeholder()
        case TagKind.FOOTNOTE_DEFINITION:
            return Footnote(tag.label)
        case TagKind.TABLE:
            return Table(alignment=list(tag.alignments))
        case TagKind.IMAGE:
            return Image(tag.url, tag.alt or None)
        case _:
            return None


class SeedingMixin:
    """Mixin pushing seeds for opening tags.

    Required Host Attributes:
        - _stack: list[Component]
        - _source_file: str | None

    Required Host Methods:
        - _begin_table_head
    """

    _stack: list[Component]
    _source_file: str | None

    def _start(self, token: Token) -> None:
        tag = token.tag
        if isinstance(tag, Tag):
            self._stack.append(seed_for_tag(tag))
            return
        if not isinstance(tag, BaseTag):
            return

        if tag.kind in (TagKind.HTML_BLOCK, TagKind.METADATA_BLOCK):
            raise UnsupportedFeatureError(
                tag.kind.name.lower().replace("_", " "), token.span, self._source_file
            )
        if tag.kind is TagKind.TABLE_HEAD:
            self._begin_table_head()  # type: ignore[attr-defined]
            return

        seed = seed_for_base_tag(tag)
        if seed is not None:
            self._stack.append(seed)


__all__ = ["SeedingMixin", "seed_for_base_tag", "seed_for_tag"]
