"""Stack-based tree builder.

Consumes the extended lexer's token stream and yields top-level components
in document order.

Architecture:
Every opening tag pushes a seed component. Every closing tag pops the top
and folds it into the component below using the accumulator's merge rules;
with nothing below, the finished component is top-level and is yielded.
Leaf tokens are written into the top of the stack directly.

The builder is split into mixins:
- `SeedingMixin`: seeds for opening tags
- `TableAssemblyMixin`: head/row/cell sequencing for tables
- `LeafEventsMixin`: text coalescing, breaks, code spans and markers

Thread Safety:
    ComponentParser instances are single-use iterators. Configuration is read
    from a ContextVar when the parser is created.
"""

from __future__ import annotations

from blogmark.config import get_parse_config
from blogmark.lexer import ExtendedLexer
from blogmark.nodes import Component, Placeholder, blank
from blogmark.parsing import (
    LeafEventsMixin,
    SeedingMixin,
    TableAssemblyMixin,
    TableStage,
)
from blogmark.tokens import BaseTag, TagKind, Token, TokenType
from blogmark.utils.logger import get_logger

logger = get_logger(__name__)


class ComponentParser(
    TableAssemblyMixin,
    SeedingMixin,
    LeafEventsMixin,
):
    """Iterator of top-level components for one document.

    Usage:
        >>> parser = ComponentParser("# Hello\\n\\nWorld")
        >>> [c.style.tag for c in parser.parse()]
        ['h1', 'p']

    Thread Safety:
        Single-use and not thread-safe. Create one per document.
    """

    __slots__ = (
        "_lexer",
        "_source_file",
        "_stack",
        "_table",
        "_soft_break_as_newline",
        "_done",
    )

    def __init__(
        self,
        source: str | ExtendedLexer,
        *,
        source_file: str | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            source: Markdown source text, or a lexer to consume
            source_file: Optional source file path for error messages
        """
        if isinstance(source, ExtendedLexer):
            self._lexer = source
            self._source_file = source_file or source.source_file
        else:
            self._lexer = ExtendedLexer(source, source_file=source_file)
            self._source_file = source_file
        self._stack: list[Component] = []
        self._table: TableStage | None = None
        self._soft_break_as_newline = get_parse_config().treat_soft_break_as_newline
        self._done = False

    def __iter__(self) -> ComponentParser:
        return self

    def __next__(self) -> Component:
        if self._done:
            raise StopIteration
        for token in self._lexer:
            finished = self._handle(token)
            if finished is not None:
                return finished
        drained = self._drain()
        if drained is None:
            self._done = True
            raise StopIteration
        return drained

    def parse(self) -> list[Component]:
        """Collect all remaining top-level components."""
        return list(self)

    def _handle(self, token: Token) -> Component | None:
        if token.type is TokenType.START:
            self._start(token)
            return None
        if token.type is TokenType.END:
            return self._end(token)
        return self._leaf(token)

    def _end(self, token: Token) -> Component | None:
        tag = token.tag
        if isinstance(tag, BaseTag):
            match tag.kind:
                case TagKind.TABLE_HEAD | TagKind.TABLE_BODY:
                    self._end_table_part(f"{tag.kind.name.lower()} end")
                    return None
                case TagKind.TABLE_ROW:
                    self._end_table_row()
                    return None
                case TagKind.TABLE_CELL:
                    self._end_table_cell()
                    return None
                case TagKind.TABLE:
                    return self._fold(self._end_table())
                case TagKind.ITEM if self._stack and isinstance(self._stack[-1], Placeholder):
                    self._stack.pop()
                    return self._fold(blank())
        return self._fold_top()

    def _fold_top(self) -> Component | None:
        if not self._stack:
            # Nothing open: an unmatched close carries no content
            return None
        return self._fold(self._stack.pop())

    def _drain(self) -> Component | None:
        """Fold components left open at end of input into one."""
        self._table = None
        if not self._stack:
            return None
        if len(self._stack) > 1:
            logger.debug("%d components open at end of input", len(self._stack))
        while len(self._stack) > 1:
            self._fold(self._filled(self._stack.pop()))
        return self._filled(self._stack.pop())

    @staticmethod
    def _filled(component: Component) -> Component:
        return blank() if isinstance(component, Placeholder) else component


__all__ = ["ComponentParser"]
