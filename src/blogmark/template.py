"""Page templates.

A TemplateEngine is created explicitly by the caller, filled with templates
and frozen; after that it is only read. Templates use ``string.Template``
placeholders (``$title``, ``${content}``).

Usage:
    >>> engine = TemplateEngine.default()
    >>> page = engine.render("redirect", {"target": "/new/"})
"""

from __future__ import annotations

from collections.abc import Mapping
from string import Template
from types import MappingProxyType
from typing import Any

from blogmark.errors import TemplateError
from blogmark.post import PostInfo
from blogmark.renderers.html import html_escape
from blogmark.utils.logger import get_logger

logger = get_logger(__name__)

ARTICLE_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8"/>
<title>$title</title>
<meta name="description" content="$description"/>
<meta name="keywords" content="$tags"/>
<meta name="author" content="$author"/>
</head>
<body>
<article>
$content
</article>
</body>
</html>
"""

REDIRECT_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8"/>
<meta http-equiv="refresh" content="$delay; url=$target"/>
$head
</head>
<body>
<a href="$target">$target</a>
</body>
</html>
"""

REDIRECT_DEFAULTS: Mapping[str, str] = MappingProxyType({"target": "#", "delay": "3", "head": ""})

DEFAULT_TITLE = "Blog article"


class TemplateEngine:
    """Named templates, registered once and then read-only.

    Thread Safety:
        Safe to share between threads once frozen.
    """

    __slots__ = ("_templates", "_frozen")

    def __init__(self) -> None:
        self._templates: dict[str, Template] = {}
        self._frozen = False

    @classmethod
    def default(cls) -> TemplateEngine:
        """Engine with the built-in ``article`` and ``redirect`` templates."""
        engine = cls()
        engine.register("article", ARTICLE_TEMPLATE)
        engine.register("redirect", REDIRECT_TEMPLATE)
        return engine.freeze()

    def register(self, name: str, source: str) -> TemplateEngine:
        if self._frozen:
            raise TemplateError(name, "engine is frozen")
        self._templates[name] = Template(source)
        logger.debug("registered template %s", name)
        return self

    def freeze(self) -> TemplateEngine:
        self._frozen = True
        return self

    @property
    def names(self) -> list[str]:
        return sorted(self._templates)

    def render(self, name: str, fields: Mapping[str, Any]) -> str:
        """Substitute ``fields`` into the template called ``name``.

        Raises:
            TemplateError: Unknown template or a placeholder with no field.
        """
        template = self._templates.get(name)
        if template is None:
            raise TemplateError(name, "no such template")
        if name == "redirect":
            fields = {**REDIRECT_DEFAULTS, **fields}
        try:
            return template.substitute(fields)
        except KeyError as e:
            raise TemplateError(name, f"missing field {e.args[0]!r}") from e
        except ValueError as e:
            raise TemplateError(name, str(e)) from e

    def render_article(self, info: PostInfo, content: str) -> str:
        """Wrap rendered content into the article page."""
        fields = {
            "title": html_escape(info.title or DEFAULT_TITLE),
            "description": html_escape(info.description or ""),
            "tags": html_escape(", ".join(info.tags)),
            "author": html_escape(", ".join(info.author_names)),
            "content": content,
        }
        return self.render("article", fields)

    def render_redirect(self, target: str, delay: str = "3", head: str | None = None) -> str:
        """Redirect page; ``head`` is extra markup for the document head."""
        fields = {"target": html_escape(target), "delay": html_escape(delay), "head": head or ""}
        return self.render("redirect", fields)


__all__ = ["TemplateEngine"]
