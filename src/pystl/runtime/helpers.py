"""Functions called from compiled template code."""

from typing import Any, Iterable

from pystl.runtime.escape import escape_html


def output(value: Any, default: Any = None, escape: bool = True) -> str:
    """Render a value for <c:out>; ``None`` and ``""`` fall back to ``default``."""
    if value is None or value == "":
        value = default
    if value is None:
        return ""
    return escape_html(value) if escape else str(value)


def iterate(value: Any) -> Iterable[Any]:
    """Iterable for <c:for-each>; ``None`` loops zero times, dicts yield items."""
    if value is None:
        return ()
    if isinstance(value, dict):
        return value.items()
    return value
