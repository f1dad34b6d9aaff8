"""Component tree for blogmark.

The tree builder produces a list of top-level components. Each component owns
its children; text is held in a small recursive structure (TextPart) so that
styled runs can nest inside each other and consecutive text coalesces into a
single string.

Node Categories:
Text:
    Text: a styled run whose content is a TextPart
    TextPart variants: EmptyPart, NewLinePart, RawPart, MarkupPart,
    ChainedPart, NestedPart

Blocks:
    BlockQuote, CodeBlock, List, Table, Footnote, Latex, Image,
    HorizontalRule, Chained, Raw

Transient:
    Placeholder: stands in for a list item or table cell that has not
    received content yet; never reaches the renderer

Unlike the token layer, components are mutable: the builder appends to the
component on top of its stack while the document is consumed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Alignment(Enum):
    """Table column alignment."""

    NONE = ""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    @property
    def css(self) -> str | None:
        """CSS ``text-align`` value, None for unaligned columns."""
        return self.value or None

    @classmethod
    def from_style(cls, style: str | None) -> Alignment:
        """Parse a ``text-align:<x>`` inline style."""
        if not style:
            return cls.NONE
        _, _, value = style.partition(":")
        try:
            return cls(value.strip().rstrip(";"))
        except ValueError:
            return cls.NONE


class StyleKind(Enum):
    """Kinds of text styling. The value is the html tag name."""

    NONE = ""
    SPAN = "span"
    PARAGRAPH = "p"
    HEADING = "h"
    EMPHASIS = "em"
    STRONG = "strong"
    LINK = "a"
    CODE = "code"
    STRIKETHROUGH = "del"
    HIGHLIGHT = "mark"
    SUPERSCRIPT = "sup"
    SUBSCRIPT = "sub"


BLOCK_STYLES = frozenset({StyleKind.PARAGRAPH, StyleKind.HEADING})


@dataclass(frozen=True, slots=True)
class Style:
    """Styling applied to a text run.

    Attributes:
        kind: Kind of style
        level: Heading level (1-6), only for headings
        target: Link target, only for links
    """

    kind: StyleKind = StyleKind.NONE
    level: int = 0
    target: str = ""

    def __post_init__(self) -> None:
        if self.kind is StyleKind.HEADING and not 1 <= self.level <= 6:
            raise ValueError(f"heading level must be 1-6, got {self.level}")

    @classmethod
    def heading(cls, level: int) -> Style:
        return cls(StyleKind.HEADING, level=level)

    @classmethod
    def link(cls, target: str) -> Style:
        return cls(StyleKind.LINK, target=target)

    @property
    def tag(self) -> str:
        """Html tag name, empty for unstyled text."""
        if self.kind is StyleKind.HEADING:
            return f"h{self.level}"
        return self.kind.value

    @property
    def is_block(self) -> bool:
        return self.kind in BLOCK_STYLES

    def copy(self) -> Style | None:
        """Duplicate a style that carries no payload.

        Links own their target and are not duplicated: returns None for them.
        """
        if self.kind is StyleKind.LINK:
            return None
        return Style(self.kind, self.level)


# =============================================================================
# Text content
# =============================================================================


@dataclass(slots=True)
class EmptyPart:
    pass


@dataclass(slots=True)
class NewLinePart:
    pass


@dataclass(slots=True)
class RawPart:
    """Plain text, escaped when rendered."""

    text: str


@dataclass(slots=True)
class MarkupPart:
    """Pre-rendered markup, emitted verbatim."""

    markup: str


@dataclass(slots=True)
class ChainedPart:
    parts: list[TextPart] = field(default_factory=list)


@dataclass(slots=True)
class NestedPart:
    text: Text


TextPart = EmptyPart | NewLinePart | RawPart | MarkupPart | ChainedPart | NestedPart


def write_part(part: TextPart, value: str) -> TextPart:
    """Write plain text into a part, returning the part that replaces it.

    Text coalesces into the trailing raw run where there is one.
    """
    match part:
        case EmptyPart():
            return RawPart(value)
        case RawPart():
            part.text += value
            return part
        case ChainedPart(parts=parts):
            if parts and isinstance(parts[-1], RawPart):
                parts[-1].text += value
            else:
                parts.append(RawPart(value))
            return part
        case NestedPart(text=text):
            text.push(value)
            return part
        case _:
            return ChainedPart([part, RawPart(value)])


def append_part(part: TextPart, child: TextPart) -> TextPart:
    """Append a part after ``part``, returning the part that replaces it."""
    match part:
        case EmptyPart():
            # A lone nested run would swallow the text written after it
            if isinstance(child, NestedPart):
                return ChainedPart([child])
            return child
        case RawPart() if isinstance(child, RawPart):
            part.text += child.text
            return part
        case ChainedPart(parts=parts):
            if isinstance(child, RawPart) and parts and isinstance(parts[-1], RawPart):
                parts[-1].text += child.text
            elif isinstance(child, ChainedPart):
                for item in child.parts:
                    append_part(part, item)
            else:
                parts.append(child)
            return part
        case _:
            return ChainedPart([part, child])


def part_text(part: TextPart) -> str:
    """Flatten a part to plain text; markup is dropped."""
    match part:
        case RawPart(text=text):
            return text
        case NewLinePart():
            return "\n"
        case ChainedPart(parts=parts):
            return "".join(part_text(p) for p in parts)
        case NestedPart(text=text):
            return part_text(text.content)
        case _:
            return ""


@dataclass(slots=True)
class Text:
    """A styled text run.

    Example:
        >>> t = Text.plain("a")
        >>> t.push("b")
        >>> t.plain_text()
        'ab'
    """

    style: Style = field(default_factory=Style)
    content: TextPart = field(default_factory=EmptyPart)

    @classmethod
    def plain(cls, value: str) -> Text:
        return cls(Style(), RawPart(value))

    @classmethod
    def styled(cls, style: Style) -> Text:
        return cls(style, EmptyPart())

    def push(self, value: str | TextPart | Text) -> None:
        """Append a string, a text part or a nested run."""
        if isinstance(value, str):
            self.content = write_part(self.content, value)
        elif isinstance(value, Text):
            self.content = append_part(self.content, NestedPart(value))
        else:
            self.content = append_part(self.content, value)

    def push_markup(self, markup: str) -> None:
        self.content = append_part(self.content, MarkupPart(markup))

    def plain_text(self) -> str:
        return part_text(self.content)


# =============================================================================
# Components
# =============================================================================


@dataclass(slots=True)
class Placeholder:
    """Empty container content that has not been filled yet."""

    pass


@dataclass(slots=True)
class BlockQuote:
    children: list[Component] = field(default_factory=list)


@dataclass(slots=True)
class Image:
    source: str
    alt: str | None = None


@dataclass(slots=True)
class CodeBlock:
    language: str | None = None
    content: str = ""


@dataclass(slots=True)
class List:
    """Ordered list when ``numbered`` is set (its first number), else bullets."""

    numbered: int | None = None
    items: list[Component] = field(default_factory=list)


@dataclass(slots=True)
class HorizontalRule:
    pass


@dataclass(slots=True)
class Table:
    headers: list[Component] = field(default_factory=list)
    alignment: list[Alignment] = field(default_factory=list)
    rows: list[list[Component]] = field(default_factory=list)

    @property
    def is_aligned(self) -> bool:
        return any(a is not Alignment.NONE for a in self.alignment)


@dataclass(slots=True)
class Footnote:
    id: str
    text: Text = field(default_factory=Text)


class TexFormat(Enum):
    INLINE = "inline"
    BLOCK = "block"


@dataclass(slots=True)
class Latex:
    format: TexFormat = TexFormat.INLINE
    source: str = ""


@dataclass(slots=True)
class Chained:
    """Siblings with no common container."""

    children: list[Component] = field(default_factory=list)


@dataclass(slots=True)
class Raw:
    """Markup emitted verbatim."""

    markup: str = ""


def blank() -> Raw:
    """A fresh empty markup component."""
    return Raw("")


Component = (
    Placeholder
    | Text
    | BlockQuote
    | Image
    | CodeBlock
    | List
    | HorizontalRule
    | Table
    | Footnote
    | Latex
    | Chained
    | Raw
)


__all__ = [
    "Alignment",
    "BlockQuote",
    "Chained",
    "ChainedPart",
    "CodeBlock",
    "Component",
    "EmptyPart",
    "Footnote",
    "HorizontalRule",
    "Image",
    "Latex",
    "List",
    "MarkupPart",
    "NestedPart",
    "NewLinePart",
    "Placeholder",
    "Raw",
    "RawPart",
    "Style",
    "StyleKind",
    "Table",
    "TexFormat",
    "Text",
    "TextPart",
    "append_part",
    "blank",
    "part_text",
    "write_part",
]
