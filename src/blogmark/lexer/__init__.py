"""Lexers for blogmark.

lexer/
├── __init__.py          # Re-exports BaseTokenizer, ExtendedLexer
├── base.py              # markdown-it-py adapter producing span-carrying tokens
├── core.py              # ExtendedLexer: highlight and math splicing
└── delimiters.py        # find_wrapped and the multi-line context

Usage:
    >>> from blogmark.lexer import ExtendedLexer
    >>> for token in ExtendedLexer("a ==b=="):
    ...     print(token)
Token(START:PARAGRAPH @0..0)
Token(TEXT 'a ' @0..2)
Token(START:HIGHLIGHT @2..4)
Token(TEXT 'b' @4..5)
Token(END:HIGHLIGHT @5..7)
Token(END:PARAGRAPH @7..7)
"""

from blogmark.lexer.base import BaseTokenizer, create_markdown, normalize_source
from blogmark.lexer.core import ExtendedLexer
from blogmark.lexer.delimiters import MultilineContext, find_tag, find_wrapped

__all__ = [
    "BaseTokenizer",
    "ExtendedLexer",
    "MultilineContext",
    "create_markdown",
    "find_tag",
    "find_wrapped",
]
