"""HTML escaping for values written by compiled templates."""

from typing import Any


def escape_html(value: Any, quote: bool = True) -> str:
    """Escape HTML special characters in ``str(value)``.

    Escapes: & < > and, when ``quote`` is set, " '

    ``None`` renders as the empty string.
    """
    if value is None:
        return ""
    s = str(value).replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    if quote:
        s = s.replace('"', "&quot;").replace("'", "&#x27;")
    return s
