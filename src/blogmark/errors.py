"""Exception classes for blogmark.

Two families matter to callers:

- ContentError: something in the user's document cannot be handled
  (unsupported construct, broken frontmatter). Callers processing many
  documents catch these per document and move on.
- InvariantError: an internal contract was broken (a table part closed with
  no table open, a placeholder reaching the renderer). These signal a bug and
  are never a ContentError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blogmark.span import Span


class BlogmarkError(Exception):
    """Base exception for all blogmark errors.

    Subclass this for specific error categories.
    """

    pass


class ContentError(BlogmarkError):
    """Error caused by the content of a document.

    Raised when the document uses something blogmark cannot turn into output.
    """

    def __init__(
        self,
        message: str,
        span: Span | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize content error with optional location.

        Args:
            message: Error description
            span: Source range the error refers to (optional)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.span = span
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if span is not None:
            location += f"{span.start}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class UnsupportedFeatureError(ContentError):
    """The document uses a construct with no rendering support.

    Raw html blocks and metadata blocks inside the body are the usual cases.
    """

    def __init__(
        self,
        feature: str,
        span: Span | None = None,
        source_file: str | None = None,
    ) -> None:
        self.feature = feature
        super().__init__(f"Unsupported feature: {feature}", span, source_file)


class FrontmatterError(ContentError):
    """Frontmatter block is opened but never closed."""

    pass


class InvariantError(BlogmarkError):
    """Internal contract violation.

    Raised instead of aborting when the token stream or the component tree
    is in a state the builder or renderer never produces for valid input.
    """

    pass


class TemplateError(BlogmarkError):
    """Unknown template or missing template field."""

    def __init__(self, template: str, message: str) -> None:
        self.template = template
        super().__init__(f"Template '{template}': {message}")


__all__ = [
    "BlogmarkError",
    "ContentError",
    "FrontmatterError",
    "InvariantError",
    "TemplateError",
    "UnsupportedFeatureError",
]
