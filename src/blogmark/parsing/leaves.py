"""Leaf events: text, breaks, code, html, rules and markers."""

from __future__ import annotations

from blogmark.accumulator import push, push_text
from blogmark.nodes import (
    ChainedPart,
    Component,
    EmptyPart,
    HorizontalRule,
    NestedPart,
    NewLinePart,
    Raw,
    RawPart,
    Style,
    StyleKind,
    Text,
)
from blogmark.tokens import Token, TokenType

CHECKBOX_CHECKED = '<input type="checkbox" disabled checked/>'
CHECKBOX_UNCHECKED = '<input type="checkbox" disabled/>'


def code_span(code: str) -> Text:
    """Inline code followed by an empty sentinel.

    The sentinel keeps text written after the code span out of it.
    """
    code_text = Text(Style(StyleKind.CODE), RawPart(code))
    return Text(Style(), ChainedPart([NestedPart(code_text), EmptyPart()]))


def footnote_reference(label: str) -> Text:
    """Link to a footnote definition wrapping a superscript ``[label]``."""
    link = Text.styled(Style.link(f"#footnote-{label}"))
    link.push(Text(Style(StyleKind.SUPERSCRIPT), RawPart(f"[{label}]")))
    return link


def line_breaks(count: int) -> Text:
    if count == 1:
        return Text(Style(), NewLinePart())
    return Text(Style(), ChainedPart([NewLinePart() for _ in range(count)]))


class LeafEventsMixin:
    """Mixin turning leaf tokens into components.

    Required Host Attributes:
        - _stack: list[Component]
        - _soft_break_as_newline: bool
    """

    _stack: list[Component]
    _soft_break_as_newline: bool

    def _fold(self, child: Component) -> Component | None:
        """Merge a finished child into the top of the stack.

        Returns the child itself when nothing is open: it is top-level.
        """
        if not self._stack:
            return child
        self._stack[-1] = push(self._stack[-1], child)
        return None

    def _text(self, value: str) -> Component | None:
        if not value:
            return None
        if not self._stack:
            return Text.plain(value)
        merged = push_text(self._stack[-1], value)
        if merged is None:
            return self._fold(Text.plain(value))
        self._stack[-1] = merged
        return None

    def _leaf(self, token: Token) -> Component | None:
        match token.type:
            case TokenType.TEXT:
                return self._text(token.value)
            case TokenType.SOFT_BREAK:
                if self._soft_break_as_newline:
                    return self._fold(line_breaks(1))
                return self._text(" ")
            case TokenType.HARD_BREAK:
                return self._fold(line_breaks(2 if self._soft_break_as_newline else 1))
            case TokenType.CODE:
                return self._fold(code_span(token.value))
            case TokenType.HTML | TokenType.INLINE_HTML:
                return self._fold(Raw(token.value))
            case TokenType.FOOTNOTE_REFERENCE:
                return self._fold(footnote_reference(token.value))
            case TokenType.TASK_LIST_MARKER:
                return self._fold(Raw(CHECKBOX_CHECKED if token.checked else CHECKBOX_UNCHECKED))
            case TokenType.RULE:
                return self._fold(HorizontalRule())
            case _:
                return None


__all__ = [
    "CHECKBOX_CHECKED",
    "CHECKBOX_UNCHECKED",
    "LeafEventsMixin",
    "code_span",
    "footnote_reference",
    "line_breaks",
]
