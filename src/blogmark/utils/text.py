"""Text helpers shared by the renderer, post metadata and the CLI."""

from __future__ import annotations

import html as html_module
import re
import secrets
import string

_ID_ALPHABET = string.ascii_letters + string.digits


def slugify(text: str, separator: str = "-") -> str:
    """Convert text to a URL-safe slug, keeping Unicode word characters.

    Examples:
        >>> slugify("Hello World!")
        'hello-world'
        >>> slugify("Café au lait")
        'café-au-lait'
    """
    if not text:
        return ""
    text = html_module.unescape(text).lower().strip()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[-\s]+", separator, text)
    return text.strip(separator)


def escape_html(text: str) -> str:
    """Escape text for html content and double-quoted attributes.

    Escapes ``&``, ``<``, ``>`` and ``"`` but not single quotes.

    Examples:
        >>> escape_html('<a href="x">&</a>')
        '&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;'
    """
    if not text:
        return ""
    return html_module.escape(text, quote=False).replace('"', "&quot;")


def random_id(length: int = 8) -> str:
    """Random identifier of ASCII letters and digits."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))
