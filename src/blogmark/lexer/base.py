"""Base tokenizer: markdown-it-py flattened into a span-carrying token stream.

markdown-it-py produces a list of block tokens whose ``inline`` entries hold
inline children. BaseTokenizer walks that structure and yields blogmark
Tokens in document order: START/END pairs for elements and leaf tokens for
text, code, breaks and rules.

Spans:
    markdown-it reports line ranges (``map``) for blocks but no offsets for
    inline content. Inline leaves are therefore located by a forward search
    from a cursor inside their block's line range. Text runs are exact
    substrings of the source, which is what the extended lexer relies on to
    split them. Structural tokens get zero-width spans at element boundaries.

Configuration:
    CommonMark preset with tables and strikethrough, plus the footnote and
    front matter plugins from mdit-py-plugins. The ``text_join`` core rule is
    disabled so escapes and entities stay separate ``text_special`` tokens.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from functools import lru_cache

from markdown_it import MarkdownIt
from markdown_it.token import Token as MdToken
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.front_matter import front_matter_plugin

from blogmark.errors import UnsupportedFeatureError
from blogmark.nodes import Alignment
from blogmark.span import Span
from blogmark.tokens import BaseTag, TagKind, Token, TokenType
from blogmark.utils.logger import get_logger

logger = get_logger(__name__)

_NEWLINES_RE = re.compile(r"\r\n?")
_TASK_RE = re.compile(r"\[([ xX])\](?=[ \t])")

# Block open/close pairs that map one-to-one onto a tag kind
_SIMPLE_BLOCKS: dict[str, TagKind] = {
    "paragraph": TagKind.PARAGRAPH,
    "blockquote": TagKind.BLOCK_QUOTE,
    "list_item": TagKind.ITEM,
    "thead": TagKind.TABLE_HEAD,
    "tbody": TagKind.TABLE_BODY,
    "tr": TagKind.TABLE_ROW,
    "th": TagKind.TABLE_CELL,
    "td": TagKind.TABLE_CELL,
}

_STYLE_PAIRS: dict[str, TagKind] = {
    "em": TagKind.EMPHASIS,
    "strong": TagKind.STRONG,
    "s": TagKind.STRIKETHROUGH,
}

# Tokens carrying no content of their own
_IGNORED = frozenset({"footnote_block_open", "footnote_block_close", "footnote_anchor"})


def normalize_source(source: str) -> str:
    """Normalize line endings and NUL the way markdown-it does."""
    return _NEWLINES_RE.sub("\n", source).replace("\0", "\ufffd")


@lru_cache(maxsize=1)
def create_markdown() -> MarkdownIt:
    """The markdown-it-py instance shared by all tokenizers.

    The instance is only read after construction.
    """
    md = (
        MarkdownIt("commonmark")
        .enable(["table", "strikethrough"])
        .use(footnote_plugin)
        .use(front_matter_plugin)
    )
    md.disable("text_join", True)
    return md


def _plain_text(children: Sequence[MdToken] | None) -> str:
    """Inline children flattened to text, as used for image alt text."""
    out: list[str] = []
    for child in children or ():
        if child.type in ("text", "text_special", "code_inline"):
            out.append(child.content)
        elif child.type == "image":
            out.append(_plain_text(child.children))
        elif child.type in ("softbreak", "hardbreak"):
            out.append("\n")
    return "".join(out)


def _footnote_label(token: MdToken) -> str:
    meta = token.meta or {}
    label = meta.get("label")
    if label:
        return str(label)
    return str(int(meta.get("id", 0)) + 1)


class BaseTokenizer:
    """Iterate blogmark Tokens for one document.

    Usage:
        >>> tokens = list(BaseTokenizer("# Hi"))
        >>> [t.type.name for t in tokens]
        ['START', 'TEXT', 'END']

    Thread Safety:
        Instances hold per-document cursor state and are single-use.
    """

    __slots__ = (
        "_source",
        "_source_file",
        "_md",
        "_line_starts",
        "_cursor",
        "_limit",
        "_last_map",
        "_task_candidate",
    )

    def __init__(
        self,
        source: str,
        *,
        source_file: str | None = None,
        md: MarkdownIt | None = None,
    ) -> None:
        self._source = normalize_source(source)
        self._source_file = source_file
        self._md = md or create_markdown()
        self._line_starts = [0]
        self._line_starts.extend(i + 1 for i, ch in enumerate(self._source) if ch == "\n")
        self._cursor = 0
        self._limit = len(self._source)
        self._last_map: tuple[int, int] | None = None
        self._task_candidate = False

    @property
    def source(self) -> str:
        """The normalized source all spans index into."""
        return self._source

    @property
    def source_file(self) -> str | None:
        return self._source_file

    def __iter__(self) -> Iterator[Token]:
        tokens = self._md.parse(self._source)
        logger.debug("markdown-it produced %d block tokens", len(tokens))
        return self._walk(tokens)

    # =========================================================================
    # Offsets
    # =========================================================================

    def _line_start(self, line: int) -> int:
        if line < len(self._line_starts):
            return self._line_starts[line]
        return len(self._source)

    def _block_start(self, token: MdToken) -> int:
        if token.map:
            return max(self._line_start(token.map[0]), 0)
        return self._cursor

    def _block_end(self, token: MdToken) -> int:
        if token.map:
            end = self._line_start(token.map[1])
            # Drop the newline that terminates the block's last line
            if end > 0 and self._source[end - 1 : end] == "\n":
                end -= 1
            return max(end, self._line_start(token.map[0]))
        return self._cursor

    def _find(self, needle: str) -> Span:
        """Locate ``needle`` at or after the cursor and move past it."""
        if needle:
            at = self._source.find(needle, self._cursor, self._limit)
            if at >= 0:
                self._cursor = at + len(needle)
                return Span(at, self._cursor)
        return Span.empty(self._cursor)

    def _skip_link_tail(self) -> int:
        """Move the cursor past a ``(destination "title")`` or ``[label]`` tail."""
        pos = self._cursor
        source = self._source
        if pos >= self._limit:
            return pos
        if source[pos] == "[":
            close = source.find("]", pos, self._limit)
            if close >= 0:
                self._cursor = close + 1
        elif source[pos] == "(":
            depth = 0
            quote: str | None = None
            for at in range(pos, self._limit):
                ch = source[at]
                if quote:
                    if ch == quote and source[at - 1] != "\\":
                        quote = None
                elif ch in "\"'" and depth == 1:
                    quote = ch
                elif ch == "(":
                    depth += 1
                elif ch == ")":
                    depth -= 1
                    if depth == 0:
                        self._cursor = at + 1
                        break
        return self._cursor

    # =========================================================================
    # Block walk
    # =========================================================================

    def _walk(self, tokens: Sequence[MdToken]) -> Iterator[Token]:
        ends: list[tuple[BaseTag, int | None]] = []

        for index, token in enumerate(tokens):
            kind = token.type

            if kind == "inline":
                yield from self._inline(token)
                continue

            if kind in _IGNORED:
                continue

            if token.nesting == -1:
                if token.hidden:
                    continue
                if not ends:
                    logger.debug("unbalanced close token %s", kind)
                    continue
                tag, end = ends.pop()
                at = self._cursor if end is None else max(end, self._cursor)
                self._cursor = at
                yield Token.end(tag, Span.empty(at))
                continue

            if kind != "paragraph_open":
                self._task_candidate = False

            if token.nesting == 1:
                if token.hidden:
                    continue
                tag = self._open_tag(token, tokens, index)
                start = self._block_start(token)
                end = self._block_end(token) if token.map else None
                if tag.kind is TagKind.TABLE_CELL:
                    # Cells share their row's line and continue from the cursor
                    start = max(start, self._cursor)
                    end = None
                self._cursor = start
                ends.append((tag, end))
                if tag.kind is TagKind.ITEM:
                    self._task_candidate = True
                yield Token.start(tag, Span.empty(start))
                continue

            yield from self._leaf_block(token)

    def _open_tag(self, token: MdToken, tokens: Sequence[MdToken], index: int) -> BaseTag:
        kind = token.type
        base = kind.removesuffix("_open")

        if base in _SIMPLE_BLOCKS:
            return BaseTag(_SIMPLE_BLOCKS[base])
        if base == "heading":
            return BaseTag(TagKind.HEADING, level=int(token.tag[1:]))
        if base == "bullet_list":
            return BaseTag(TagKind.LIST)
        if base == "ordered_list":
            start = token.attrGet("start")
            return BaseTag(TagKind.LIST, start=1 if start is None else int(start))
        if base == "table":
            return BaseTag(TagKind.TABLE, alignments=self._alignments(tokens, index))
        if base == "footnote":
            return BaseTag(TagKind.FOOTNOTE_DEFINITION, label=_footnote_label(token))

        raise UnsupportedFeatureError(kind, self._span_of(token), self._source_file)

    @staticmethod
    def _alignments(tokens: Sequence[MdToken], index: int) -> tuple[Alignment, ...]:
        """Read column alignments from the header cells ahead of ``index``."""
        found: list[Alignment] = []
        for token in tokens[index + 1 :]:
            if token.type == "th_open":
                style = token.attrGet("style")
                found.append(Alignment.from_style(str(style) if style else None))
            elif token.type in ("tr_close", "table_close"):
                break
        return tuple(found)

    def _span_of(self, token: MdToken) -> Span:
        return Span(self._block_start(token), max(self._block_start(token), self._block_end(token)))

    def _leaf_block(self, token: MdToken) -> Iterator[Token]:
        kind = token.type
        span = self._span_of(token)

        if kind in ("fence", "code_block"):
            language = token.info.strip().split(maxsplit=1)[0] if token.info.strip() else None
            tag = BaseTag(TagKind.CODE_BLOCK, language=language)
            yield Token.start(tag, Span.empty(span.start))
            yield Token.text(token.content, self._locate_block_body(token, span))
            yield Token.end(tag, Span.empty(span.end))
        elif kind == "hr":
            yield Token(TokenType.RULE, span)
        elif kind == "html_block":
            tag = BaseTag(TagKind.HTML_BLOCK)
            yield Token.start(tag, Span.empty(span.start))
            yield Token(TokenType.HTML, span, token.content)
            yield Token.end(tag, Span.empty(span.end))
        elif kind == "front_matter":
            tag = BaseTag(TagKind.METADATA_BLOCK)
            yield Token.start(tag, Span.empty(span.start))
            yield Token.text(token.content, span)
            yield Token.end(tag, Span.empty(span.end))
        else:
            raise UnsupportedFeatureError(kind, span, self._source_file)
        self._cursor = max(self._cursor, span.end)

    def _locate_block_body(self, token: MdToken, span: Span) -> Span:
        """Span of a code block's body; exact where the body is verbatim."""
        body_start = span.start
        if token.type == "fence":
            body_start = min(self._line_start(token.map[0] + 1), span.end) if token.map else span.start
        at = self._source.find(token.content, body_start, span.end + 1) if token.content else -1
        if at >= 0:
            return Span(at, at + len(token.content))
        return Span(body_start, span.end).cap_length(len(token.content))

    # =========================================================================
    # Inline walk
    # =========================================================================

    def _enter_inline(self, token: MdToken) -> None:
        if token.map:
            region = (token.map[0], token.map[1])
            self._limit = self._line_start(region[1])
            # Table cells share their row's line range and continue from the cursor
            if region != self._last_map:
                self._cursor = self._line_start(region[0])
            self._last_map = region
        else:
            self._limit = len(self._source)

    def _inline(self, token: MdToken) -> Iterator[Token]:
        self._enter_inline(token)
        children = list(token.children or ())

        if self._task_candidate:
            self._task_candidate = False
            if children and children[0].type == "text":
                match = _TASK_RE.match(children[0].content)
                if match:
                    yield Token(
                        TokenType.TASK_LIST_MARKER,
                        self._find(match.group(0)),
                        checked=match.group(1) != " ",
                    )
                    rest = children[0].content[match.end() :]
                    yield Token.text(rest, self._find(rest))
                    children = children[1:]

        styles: list[BaseTag] = []
        for child in children:
            yield from self._inline_child(child, styles)
        self._limit = len(self._source)

    def _inline_child(self, child: MdToken, styles: list[BaseTag]) -> Iterator[Token]:
        kind = child.type

        if kind == "text":
            yield Token.text(child.content, self._find(child.content))
        elif kind == "text_special":
            yield Token.text(child.content, self._find(child.markup))
        elif kind == "softbreak":
            yield Token(TokenType.SOFT_BREAK, self._find("\n"))
        elif kind == "hardbreak":
            yield Token(TokenType.HARD_BREAK, self._find("\n"))
        elif kind == "code_inline":
            opening = self._find(child.markup)
            self._find(child.content)
            closing = self._find(child.markup)
            yield Token(TokenType.CODE, Span(opening.start, max(closing.end, opening.end)), child.content)
        elif kind == "html_inline":
            yield Token(TokenType.INLINE_HTML, self._find(child.content), child.content)
        elif kind == "footnote_ref":
            label = _footnote_label(child)
            yield Token(TokenType.FOOTNOTE_REFERENCE, self._find(f"[^{label}]"), label)
        elif kind == "image":
            opening = self._find("![")
            tag = BaseTag(
                TagKind.IMAGE,
                url=str(child.attrGet("src") or ""),
                title=str(child.attrGet("title")) if child.attrGet("title") else None,
                alt=_plain_text(child.children),
            )
            yield Token.start(tag, Span.empty(opening.start))
            self._find("]")
            yield Token.end(tag, Span.empty(self._skip_link_tail()))
        elif kind == "link_open":
            auto = child.markup == "autolink"
            opening = self._find("<" if auto else "[")
            tag = BaseTag(
                TagKind.LINK,
                url=str(child.attrGet("href") or ""),
                title=str(child.attrGet("title")) if child.attrGet("title") else None,
            )
            styles.append(tag)
            yield Token.start(tag, Span.empty(opening.start))
        elif kind == "link_close":
            tag = styles.pop() if styles else BaseTag(TagKind.LINK)
            closing = self._find(">" if child.markup == "autolink" else "]")
            at = closing.end if child.markup == "autolink" else self._skip_link_tail()
            yield Token.end(tag, Span.empty(at))
        elif kind.removesuffix("_open") in _STYLE_PAIRS and child.nesting == 1:
            opening = self._find(child.markup)
            yield Token.start(BaseTag(_STYLE_PAIRS[kind.removesuffix("_open")]), Span.empty(opening.start))
        elif kind.removesuffix("_close") in _STYLE_PAIRS and child.nesting == -1:
            closing = self._find(child.markup)
            yield Token.end(BaseTag(_STYLE_PAIRS[kind.removesuffix("_close")]), Span.empty(closing.end))
        elif kind in _IGNORED:
            pass
        else:
            raise UnsupportedFeatureError(kind, Span.empty(self._cursor), self._source_file)


__all__ = ["BaseTokenizer", "create_markdown", "normalize_source"]
