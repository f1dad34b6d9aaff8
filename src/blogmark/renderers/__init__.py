"""Renderers for the blogmark component tree."""

from blogmark.renderers.html import HtmlRenderer, html_escape
from blogmark.renderers.protocol import ComponentRenderer

__all__ = ["ComponentRenderer", "HtmlRenderer", "html_escape"]
