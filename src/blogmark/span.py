"""Source ranges.

A Span is a half-open ``[start, end)`` range of offsets into the normalized
source string of one document. Tokens carry spans instead of copies of the
text they cover, so slicing back into the source is always possible.

Thread Safety:
Span is frozen (immutable) and safe to share across threads.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open range of offsets into a source string.

    Examples:
        >>> Span(2, 5).slice("abcdefg")
        'cde'
        >>> Span(2, 5).offset_start(1)
        Span(start=3, end=5)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    @classmethod
    def empty(cls, at: int) -> Span:
        """Zero-width span at an offset."""
        return cls(at, at)

    def slice(self, source: str) -> str:
        """Return the text this span covers."""
        return source[self.start : self.end]

    def cap_length(self, length: int) -> Span:
        """Keep the start, shrink to at most ``length`` characters."""
        return Span(self.start, min(self.end, self.start + max(length, 0)))

    def offset_start(self, delta: int) -> Span:
        """Move the start forward by ``delta``, keeping the end."""
        return Span(min(self.start + max(delta, 0), self.end), self.end)

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


__all__ = ["Span"]
