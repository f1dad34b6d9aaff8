"""Extended lexer: custom delimiter constructs spliced into the base stream.

The base tokenizer knows nothing about ``==highlight==``, ``$inline math$``
or ``$$display math$$``. ExtendedLexer wraps it and rewrites its stream:

- A text token holding a single-line pair is split into leading text, a
  synthetic START, the interior, a synthetic END and trailing text. The
  pieces are queued at the front of the pending queue and scanned again, so
  constructs nest and a text can hold several of them.
- A text token holding ``$$`` opens a multi-line context. Following tokens are
  held back until a text token at the same nesting depth holds the closing
  ``$$``; the construct then becomes one text token covering exactly the
  source between the delimiters.
- If the element holding the opening ends first (or the input does), the
  opening ``$$`` and the rest of its token are emitted as plain text and
  the held-back tokens are replayed unchanged.

Text inside code blocks is never scanned, and neither is a math interior.

Thread Safety:
    ExtendedLexer instances are single-use iterators. Create one per document.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator

from blogmark.lexer.base import BaseTokenizer
from blogmark.lexer.delimiters import MultilineContext, find_tag
from blogmark.span import Span
from blogmark.tokens import Tag, TagKind, Token, TokenType
from blogmark.utils.logger import get_logger

logger = get_logger(__name__)


class ExtendedLexer:
    """Iterator of Tokens with the custom constructs recognized.

    Usage:
        >>> [t.type.name for t in ExtendedLexer("==a==")][1:-1]
        ['START', 'TEXT', 'END']
    """

    __slots__ = (
        "_source",
        "_source_file",
        "_tokens",
        "_remainder",
        "_context",
        "_literal_depth",
    )

    def __init__(
        self,
        source: str | BaseTokenizer,
        *,
        source_file: str | None = None,
    ) -> None:
        base = source if isinstance(source, BaseTokenizer) else BaseTokenizer(source, source_file=source_file)
        self._source = base.source
        self._source_file = base.source_file
        self._tokens: Iterator[Token] = iter(base)
        # (token, scan) pairs computed ahead of the base stream
        self._remainder: deque[tuple[Token, bool]] = deque()
        self._context: MultilineContext | None = None
        self._literal_depth = 0

    @property
    def source(self) -> str:
        return self._source

    @property
    def source_file(self) -> str | None:
        return self._source_file

    def __iter__(self) -> ExtendedLexer:
        return self

    def __next__(self) -> Token:
        while True:
            if self._remainder:
                token, scan = self._remainder.popleft()
            else:
                token = next(self._tokens, None)
                scan = True
                if token is None:
                    if self._context is None:
                        raise StopIteration
                    self._unwind()
                    continue

            if self._context is not None:
                self._suspend(token)
                continue

            emitted = self._process(token, scan)
            if emitted is not None:
                return emitted

    # =========================================================================
    # Scanning
    # =========================================================================

    def _is_scannable(self, token: Token) -> bool:
        """Only text that appears verbatim in the source can be split."""
        return (
            token.type is TokenType.TEXT
            and self._literal_depth == 0
            and token.span.slice(self._source) == token.value
        )

    def _track_literal(self, token: Token) -> None:
        if token.kind is TagKind.CODE_BLOCK:
            if token.type is TokenType.START:
                self._literal_depth += 1
            else:
                self._literal_depth = max(self._literal_depth - 1, 0)

    def _queue_front(self, items: list[tuple[Token, bool]]) -> None:
        self._remainder.extendleft(
            reversed([(t, scan) for t, scan in items if t.type is not TokenType.TEXT or t.value])
        )

    def _process(self, token: Token, scan: bool) -> Token | None:
        """Scan one token outside any multi-line context.

        Returns the token to emit now, or None when nothing is left to emit
        from it (its pieces, if any, are queued).
        """
        self._track_literal(token)
        if not scan or not self._is_scannable(token):
            return token

        text = token.value
        for tag in Tag:
            delimiter = tag.delimiter
            if tag.multiline:
                at = text.find(delimiter)
                if at < 0:
                    continue
                self._open_context(tag, token, at)
                return Token.text(text[:at], token.span.cap_length(at)) if at else None

            found = find_tag(text, tag)
            if found is None:
                continue
            start, end = found
            width = len(delimiter)
            base = token.span.start
            self._queue_front(
                [
                    (Token.start(tag, Span(base + start - width, base + start)), True),
                    (Token.text(text[start:end], Span(base + start, base + end)), not tag.is_tex),
                    (Token.end(tag, Span(base + end, base + end + width)), True),
                    (Token.text(text[end + width :], token.span.offset_start(end + width)), True),
                ]
            )
            leading = start - width
            return Token.text(text[:leading], token.span.cap_length(leading)) if leading else None

        return token

    # =========================================================================
    # Multi-line context
    # =========================================================================

    def _open_context(self, tag: Tag, token: Token, at: int) -> None:
        width = len(tag.delimiter)
        offset = token.span.start + at
        self._context = MultilineContext(
            tag=tag,
            start=offset + width,
            open_span=Span(offset, offset + width),
            opening=Token.text(token.value[at:], token.span.offset_start(at)),
        )
        logger.debug("opened %s at %d", tag.name, offset)
        # The opening token may already hold the close
        self._scan_close(token)

    def _suspend(self, token: Token) -> None:
        context = self._context
        assert context is not None
        if self._scan_close(token):
            return
        context.suspended.append(token)
        if token.type is TokenType.START:
            context.depth += 1
        elif token.type is TokenType.END:
            context.depth -= 1
            if context.depth < 0:
                # The element holding the opening closed first
                self._unwind()

    def _scan_close(self, token: Token) -> bool:
        """Close the context if ``token`` holds the closing delimiter."""
        context = self._context
        assert context is not None
        if context.depth != 0 or token.type is not TokenType.TEXT:
            return False
        if token.span.slice(self._source) != token.value:
            return False

        low = max(token.span.start, context.start)
        high = token.span.end
        at = self._source.find(context.tag.delimiter, low, high)
        if at < 0:
            return False

        width = len(context.tag.delimiter)
        tag = context.tag
        self._context = None
        self._queue_front(
            [
                (Token.start(tag, context.open_span), True),
                (Token.text(self._source[context.start : at], Span(context.start, at)), False),
                (Token.end(tag, Span(at, at + width)), True),
                (Token.text(self._source[at + width : high], Span(at + width, high)), True),
            ]
        )
        logger.debug("closed %s at %d", tag.name, at)
        return True

    def _unwind(self) -> None:
        """Degrade an unterminated construct to literal text."""
        context = self._context
        assert context is not None
        self._context = None
        logger.debug("unterminated %s at %d", context.tag.name, context.open_span.start)
        self._queue_front(
            [(context.opening, False)] + [(token, True) for token in context.suspended]
        )


__all__ = ["ExtendedLexer"]
