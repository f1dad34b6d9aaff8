"""Delimiter matching for the custom inline constructs.

Single-line constructs (``==mark==``, ``$tex$``) must open and close inside
one text token. Multi-line math (``$$ ... $$``) opens in one text token and
may close several tokens later; MultilineContext tracks it in between.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from blogmark.span import Span
from blogmark.tokens import Tag, Token


def find_wrapped(text: str, wrapper: str) -> tuple[int, int] | None:
    """Locate the interior of ``wrapper ... wrapper`` in ``text``.

    Pairs the first occurrence of ``wrapper`` with the last occurrence after
    it. Returns ``(start, end)`` so that ``text[start:end]`` is the interior,
    or None when there is no pair or the interior is blank.

    Examples:
        >>> find_wrapped("a ==b== c", "==")
        (4, 5)
        >>> find_wrapped("====", "==") is None
        True
    """
    first = text.find(wrapper)
    if first < 0:
        return None
    start = first + len(wrapper)
    end = text.rfind(wrapper, start)
    if end < 0 or not text[start:end].strip():
        return None
    return start, end


def find_tag(text: str, tag: Tag) -> tuple[int, int] | None:
    """Interior of a single-line ``tag`` in ``text``.

    An inline math interior that begins or ends with ``$`` is part of a
    ``$$`` sequence and is left for multi-line math.
    """
    found = find_wrapped(text, tag.delimiter)
    if found is None:
        return None
    start, end = found
    if tag is Tag.INLINE_TEX and (text[start] == "$" or text[end - 1] == "$"):
        return None
    return found


@dataclass(slots=True)
class MultilineContext:
    """An opened multi-line construct waiting for its closing delimiter.

    Attributes:
        tag: The construct being captured
        start: Source offset just past the opening delimiter
        open_span: Span of the opening delimiter
        opening: Text from the opening delimiter to the end of its token,
            emitted literally if the construct is never closed
        suspended: Tokens held back since the construct opened
        depth: Net structural depth of the suspended tokens
    """

    tag: Tag
    start: int
    open_span: Span
    opening: Token
    suspended: list[Token] = field(default_factory=list)
    depth: int = 0


__all__ = ["MultilineContext", "find_tag", "find_wrapped"]
