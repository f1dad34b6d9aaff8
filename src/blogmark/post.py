"""Post metadata and YAML frontmatter.

A post may start with a YAML frontmatter block:

    ---
    title: Hello
    tags: [intro]
    author:
      name: Ada
    ---
    Body text...

split_frontmatter() separates it from the Markdown body. Frontmatter that is
not valid YAML (or not a mapping) yields default metadata; frontmatter that is
opened but never closed is a FrontmatterError.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any

import yaml

from blogmark.errors import FrontmatterError
from blogmark.utils.logger import get_logger

logger = get_logger(__name__)

# Documents this short cannot hold a fence, a line and a fence
_MIN_FRONTMATTER_LENGTH = 8
_OPEN_FENCE = "---\n"
_CLOSE_FENCE_RE = re.compile(r"^---[ \t]*(?:\n|\Z)", re.MULTILINE)


@dataclass(frozen=True, slots=True)
class Author:
    name: str
    email: str | None = None
    web: str | None = None

    @classmethod
    def from_value(cls, value: Any) -> Author | None:
        if isinstance(value, str):
            return cls(value)
        if isinstance(value, dict) and value.get("name"):
            return cls(
                str(value["name"]),
                str(value["email"]) if value.get("email") else None,
                str(value["web"]) if value.get("web") else None,
            )
        return None


@dataclass(frozen=True, slots=True)
class Edit:
    summary: str
    time: datetime | str | None = None


@dataclass(frozen=True, slots=True)
class PostInfo:
    """Metadata of one post.

    Attributes:
        title: Post title
        description: Short summary for listings and meta tags
        tags: Free-form tags
        slug: URL slug, derived from the file name when absent
        authors: One or more authors
        edits: Edit history, oldest first
    """

    title: str | None = None
    description: str | None = None
    tags: tuple[str, ...] = ()
    slug: str | None = None
    authors: tuple[Author, ...] = ()
    edits: tuple[Edit, ...] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PostInfo:
        """Build from parsed YAML, ignoring unknown keys and bad values."""
        author = data.get("author")
        raw_authors = author if isinstance(author, list) else [author] if author else []
        authors = tuple(a for a in map(Author.from_value, raw_authors) if a is not None)

        edits = None
        if isinstance(data.get("edits"), list):
            edits = tuple(
                Edit(str(e.get("summary", "")), e.get("time"))
                for e in data["edits"]
                if isinstance(e, dict)
            )

        tags = data.get("tags") or ()
        if isinstance(tags, str):
            tags = (tags,)

        def text(key: str) -> str | None:
            value = data.get(key)
            return None if value is None else str(value)

        return cls(
            title=text("title"),
            description=text("description"),
            tags=tuple(str(t) for t in tags),
            slug=text("slug"),
            authors=authors,
            edits=edits,
        )

    @classmethod
    def from_yaml(cls, source: str) -> PostInfo:
        try:
            data = yaml.safe_load(source)
        except yaml.YAMLError as e:
            logger.warning("Invalid frontmatter, using defaults: %s", e)
            return cls()
        if data is None:
            return cls()
        if not isinstance(data, dict):
            logger.warning("Frontmatter is not a mapping, using defaults")
            return cls()
        return cls.from_dict(data)

    def merge(self, other: PostInfo) -> PostInfo:
        """Fields set in ``other`` replace the ones in ``self``."""
        changes = {}
        for f in fields(self):
            value = getattr(other, f.name)
            if value is not None and value != ():
                changes[f.name] = value
        return PostInfo(**{f.name: getattr(self, f.name) for f in fields(self)} | changes)

    @property
    def author_names(self) -> list[str]:
        return [a.name for a in self.authors]


def split_frontmatter(text: str, *, source_file: str | None = None) -> tuple[PostInfo, str]:
    """Separate YAML frontmatter from the Markdown body.

    Returns:
        (metadata, body). Without frontmatter the body is ``text`` unchanged.

    Raises:
        FrontmatterError: The opening fence has no closing fence.
    """
    if len(text) <= _MIN_FRONTMATTER_LENGTH:
        return PostInfo(), text

    start = len(text) - len(text.lstrip())
    if not text.startswith(_OPEN_FENCE, start):
        return PostInfo(), text

    body_start = start + len(_OPEN_FENCE)
    close = _CLOSE_FENCE_RE.search(text, body_start)
    if close is None:
        raise FrontmatterError("Unclosed frontmatter", source_file=source_file)

    info = PostInfo.from_yaml(text[body_start : close.start()])
    return info, text[close.end() :]


__all__ = ["Author", "Edit", "PostInfo", "split_frontmatter"]
