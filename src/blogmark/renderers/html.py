"""HTML renderer using the StringBuilder pattern.

Walks a component tree and writes compact HTML (no whitespace between tags).

Escaping:
Plain text runs and code are escaped. ``Raw`` components and markup parts are
pre-rendered and written verbatim.

Table alignment:
HTML tables cannot align a column from one place, so an aligned table gets a
random id and is followed by a ``<style>`` element with one
``td:nth-child(n)`` rule per aligned column.

Thread Safety:
HtmlRenderer holds no per-render state. Multiple threads can share one
instance as long as its id factory is safe to call concurrently.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from blogmark.errors import InvariantError
from blogmark.nodes import (
    BlockQuote,
    Chained,
    ChainedPart,
    CodeBlock,
    Component,
    EmptyPart,
    Footnote,
    HorizontalRule,
    Image,
    Latex,
    List,
    MarkupPart,
    NestedPart,
    NewLinePart,
    Placeholder,
    Raw,
    RawPart,
    StyleKind,
    Table,
    Text,
    TextPart,
)
from blogmark.stringbuilder import StringBuilder
from blogmark.utils.text import escape_html as html_escape
from blogmark.utils.text import random_id

logger = logging.getLogger(__name__)


class HtmlRenderer:
    """Render components to HTML.

    Usage:
        >>> from blogmark.nodes import Style, StyleKind, Text
        >>> HtmlRenderer().render([Text(Style(StyleKind.EMPHASIS)), Text.plain("a<b")])
        '<em></em>a&lt;b'

    Args:
        id_factory: Produces the id that scopes an aligned table's stylesheet
    """

    __slots__ = ("_id_factory",)

    def __init__(self, id_factory: Callable[[], str] | None = None) -> None:
        self._id_factory = id_factory or random_id

    def render(self, components: Iterable[Component]) -> str:
        """Render top-level components in order."""
        sb = StringBuilder()
        for component in components:
            self.render_component(component, sb)
        return sb.build()

    # =========================================================================
    # Components
    # =========================================================================

    def render_component(self, component: Component, sb: StringBuilder) -> None:
        match component:
            case Text():
                self._render_text(component, sb)
            case Raw(markup=markup):
                sb.append(markup)
            case Chained(children=children):
                for child in children:
                    self.render_component(child, sb)
            case BlockQuote(children=children):
                sb.append("<blockquote>")
                for child in children:
                    self.render_component(child, sb)
                sb.append("</blockquote>")
            case List():
                self._render_list(component, sb)
            case Table():
                self._render_table(component, sb)
            case Footnote(id=footnote_id, text=text):
                escaped = html_escape(footnote_id)
                sb.append(f'<aside id="footnote-{escaped}"><span class="fn-id">{escaped}:</span> ')
                self._render_text(text, sb)
                sb.append("</aside>")
            case CodeBlock(language=language, content=content):
                css = f"block language-{html_escape(language)}" if language else "block"
                sb.append(f'<pre><code class="{css}">')
                sb.append(html_escape(content))
                sb.append("</code></pre>")
            case Latex(format=tex_format, source=source):
                sb.append(f'<code data-lang="latex" data-display="{tex_format.value}">')
                sb.append(html_escape(source))
                sb.append("</code>")
            case Image(source=source, alt=alt):
                alt_attr = f' alt="{html_escape(alt)}"' if alt is not None else ""
                sb.append(f'<img src="{html_escape(source)}"{alt_attr}/>')
            case HorizontalRule():
                sb.append("<hr/>")
            case Placeholder():
                raise InvariantError("placeholder reached the renderer")
            case _:
                raise InvariantError(f"cannot render {type(component).__name__}")

    def _render_list(self, component: List, sb: StringBuilder) -> None:
        numbered = component.numbered
        if numbered is None:
            tag = "ul"
            sb.append("<ul>")
        else:
            tag = "ol"
            sb.append(f'<ol start="{numbered}">' if numbered > 0 else "<ol>")
        for item in component.items:
            sb.append("<li>")
            self.render_component(item, sb)
            sb.append("</li>")
        sb.append(f"</{tag}>")

    def _render_table(self, table: Table, sb: StringBuilder) -> None:
        table_id = self._id_factory() if table.is_aligned else None
        sb.append(f'<table id="{table_id}">' if table_id else "<table>")

        sb.append("<thead>")
        for cell in table.headers:
            sb.append("<td>")
            self.render_component(cell, sb)
            sb.append("</td>")
        sb.append("</thead><tbody>")
        for row in table.rows:
            sb.append("<tr>")
            for cell in row:
                sb.append("<td>")
                self.render_component(cell, sb)
                sb.append("</td>")
            sb.append("</tr>")
        sb.append("</tbody></table>")

        if table_id:
            logger.debug("aligned table %s with %d columns", table_id, len(table.alignment))
            sb.append("<style>")
            for index, alignment in enumerate(table.alignment):
                if alignment.css:
                    sb.append(f"table#{table_id} td:nth-child({index + 1}){{text-align:{alignment.css};}}")
            sb.append("</style>")

    # =========================================================================
    # Text
    # =========================================================================

    def _render_text(self, text: Text, sb: StringBuilder) -> None:
        style = text.style
        if style.is_block and isinstance(text.content, EmptyPart):
            # A block whose only content was lifted out, e.g. display math
            return
        if style.kind is StyleKind.NONE:
            self._render_part(text.content, sb)
            return
        if style.kind is StyleKind.LINK:
            sb.append(f'<a href="{html_escape(style.target)}">')
        else:
            sb.append(f"<{style.tag}>")
        self._render_part(text.content, sb)
        sb.append(f"</{style.tag}>")

    def _render_part(self, part: TextPart, sb: StringBuilder) -> None:
        match part:
            case RawPart(text=value):
                sb.append(html_escape(value))
            case MarkupPart(markup=markup):
                sb.append(markup)
            case NewLinePart():
                sb.append("<br/>")
            case ChainedPart(parts=parts):
                for item in parts:
                    self._render_part(item, sb)
            case NestedPart(text=nested):
                self._render_text(nested, sb)
            case EmptyPart():
                pass


__all__ = ["HtmlRenderer", "html_escape"]
