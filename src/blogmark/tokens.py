"""Token definitions shared by the lexers and the tree builder.

The base tokenizer produces a flat stream of Token objects: structural
START/END pairs around block and inline elements, plus leaves (text runs,
code, breaks, rules). The extended lexer passes those through and splices in
START/END pairs of its own custom tags.

Thread Safety:
Token, BaseTag and Tag are immutable and safe to share across threads.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from blogmark.nodes import Alignment
from blogmark.span import Span


class TokenType(Enum):
    """Token types produced by the lexers."""

    # Structure
    START = auto()
    END = auto()

    # Leaves
    TEXT = auto()
    CODE = auto()  # inline code span
    HTML = auto()  # html block body
    INLINE_HTML = auto()
    FOOTNOTE_REFERENCE = auto()
    SOFT_BREAK = auto()
    HARD_BREAK = auto()
    RULE = auto()
    TASK_LIST_MARKER = auto()


class TagKind(Enum):
    """Structural tags reported by the base tokenizer."""

    # Blocks
    PARAGRAPH = auto()
    HEADING = auto()
    BLOCK_QUOTE = auto()
    CODE_BLOCK = auto()
    HTML_BLOCK = auto()
    METADATA_BLOCK = auto()
    LIST = auto()
    ITEM = auto()
    FOOTNOTE_DEFINITION = auto()

    # Tables
    TABLE = auto()
    TABLE_HEAD = auto()
    TABLE_BODY = auto()
    TABLE_ROW = auto()
    TABLE_CELL = auto()

    # Inline
    EMPHASIS = auto()
    STRONG = auto()
    STRIKETHROUGH = auto()
    LINK = auto()
    IMAGE = auto()


@dataclass(frozen=True, slots=True)
class BaseTag:
    """A structural tag from the base tokenizer.

    Only the attributes relevant to ``kind`` are set:

    Attributes:
        kind: Which element this is
        level: Heading level (1-6)
        language: Code block info string, None for indented code
        start: First number of an ordered list, None for bullet lists
        label: Footnote definition label
        url: Link or image destination
        title: Link or image title
        alt: Image alternative text
        alignments: Per-column alignment of a table
    """

    kind: TagKind
    level: int = 0
    language: str | None = None
    start: int | None = None
    label: str = ""
    url: str = ""
    title: str | None = None
    alt: str = ""
    alignments: tuple[Alignment, ...] = ()


class Tag(Enum):
    """Custom delimiter tags recognized by the extended lexer.

    Member order is the scanning priority: highlight, inline math, then
    multi-line math.
    """

    HIGHLIGHT = "=="
    INLINE_TEX = "$"
    MULTILINE_TEX = "$$"

    @property
    def delimiter(self) -> str:
        return self.value

    @property
    def multiline(self) -> bool:
        """True when the construct may span several base tokens."""
        return self is Tag.MULTILINE_TEX

    @property
    def is_tex(self) -> bool:
        return self is not Tag.HIGHLIGHT

    @classmethod
    def tex(cls, multiline: bool) -> Tag:
        return cls.MULTILINE_TEX if multiline else cls.INLINE_TEX


@dataclass(frozen=True, slots=True)
class Token:
    """One event of the token stream.

    Attributes:
        type: The token type
        span: Source range covered by the token
        value: Text of leaf tokens (text, code, html, footnote label)
        tag: Tag of START/END tokens, a BaseTag or a custom Tag
        checked: State of a task list marker
    """

    type: TokenType
    span: Span
    value: str = ""
    tag: BaseTag | Tag | None = None
    checked: bool = False

    @classmethod
    def start(cls, tag: BaseTag | Tag, span: Span) -> Token:
        return cls(TokenType.START, span, tag=tag)

    @classmethod
    def end(cls, tag: BaseTag | Tag, span: Span) -> Token:
        return cls(TokenType.END, span, tag=tag)

    @classmethod
    def text(cls, value: str, span: Span) -> Token:
        return cls(TokenType.TEXT, span, value)

    @property
    def is_structural(self) -> bool:
        return self.type is TokenType.START or self.type is TokenType.END

    @property
    def kind(self) -> TagKind | None:
        """TagKind of a structural base token, None otherwise."""
        if isinstance(self.tag, BaseTag):
            return self.tag.kind
        return None

    def __repr__(self) -> str:
        if self.tag is not None:
            name = self.tag.kind.name if isinstance(self.tag, BaseTag) else self.tag.name
            return f"Token({self.type.name}:{name} @{self.span})"
        return f"Token({self.type.name} {self.value!r} @{self.span})"


__all__ = ["BaseTag", "Tag", "TagKind", "Token", "TokenType"]
