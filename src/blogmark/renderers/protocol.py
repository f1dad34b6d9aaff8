"""ComponentRenderer protocol: the interface for component tree renderers.

Any renderer that implements ``render(components) -> str`` conforms.
The built-in ``HtmlRenderer`` is the reference implementation.

Example:
    from blogmark.renderers.protocol import ComponentRenderer

    def render_page(renderer: ComponentRenderer, source: str) -> str:
        return renderer.render(ComponentParser(source))
"""

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from blogmark.nodes import Component


@runtime_checkable
class ComponentRenderer(Protocol):
    """Protocol for component tree renderers."""

    def render(self, components: Iterable[Component]) -> str:
        """Render top-level components, in order, to a string."""
        ...
