"""Merge rules for folding components into their parent.

Two operations drive the tree builder:

- push(current, child): fold a finished child into the component on top of
  the stack. Returns the component that replaces ``current``.
- push_text(current, text): append a plain string into ``current``. Returns
  the replacement, or None when ``current`` cannot hold text; the caller then
  falls back to ``push`` with a plain Text leaf.

Both mutate ``current`` in place where the merge is an append.
"""

from __future__ import annotations

from blogmark.nodes import (
    BlockQuote,
    Chained,
    CodeBlock,
    Component,
    Footnote,
    Latex,
    List,
    Placeholder,
    Raw,
    Text,
)


def _absorb(text: Text, child: Text | Raw) -> None:
    if isinstance(child, Raw):
        text.push_markup(child.markup)
    else:
        text.push(child)


def push(current: Component, child: Component) -> Component:
    """Fold ``child`` into ``current``.

    Placeholders are replaced by the child. Containers append it. Text absorbs
    text runs (nested) and raw markup (verbatim). Anything else becomes a
    chain of siblings.
    """
    match current:
        case Placeholder():
            return child
        case BlockQuote(children=children):
            children.append(child)
            return current
        case List(items=items):
            items.append(child)
            return current
        case Text() if isinstance(child, Raw) or (
            isinstance(child, Text) and not child.style.is_block
        ):
            _absorb(current, child)
            return current
        case Footnote(text=text) if isinstance(child, Text | Raw):
            _absorb(text, child)
            return current
        case Chained(children=children):
            children.append(child)
            return current
        case _:
            return Chained([current, child])


def _push_into_last(children: list[Component], text: str) -> None:
    last = children[-1] if children else None
    if isinstance(last, Text):
        last.push(text)
    else:
        children.append(Text.plain(text))


def push_text(current: Component, text: str) -> Component | None:
    """Append plain text into ``current``; None when it holds no text."""
    match current:
        case Placeholder():
            return Text.plain(text)
        case Text():
            current.push(text)
            return current
        case BlockQuote(children=children) | Chained(children=children):
            _push_into_last(children, text)
            return current
        case CodeBlock():
            current.content += text
            return current
        case List(items=items):
            merged = push_text(items[-1], text) if items else None
            if merged is None:
                items.append(Text.plain(text))
            else:
                items[-1] = merged
            return current
        case Footnote(text=inner):
            inner.push(text)
            return current
        case Latex():
            current.source += text
            return current
        case _:
            return None


__all__ = ["push", "push_text"]
