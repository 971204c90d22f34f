"""Attribute value classification and code-fragment formatting.

Attribute text is either a literal, emitted as a quoted Python string, or an
expression/reference (leading ``$`` or ``@``) emitted verbatim for the
preprocessor to rewrite later.

Example:
    quote("abc")   -> "'abc'"
    quote("$user") -> "$user"
    quote(None)    -> "None"
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Sequence, Tuple, Union

EXPRESSION_MARKER = "$"
REFERENCE_MARKER = "@"
NULL_LITERAL = "None"


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Expression:
    text: str


@dataclass(frozen=True)
class Absent:
    pass


AttributeValue = Union[Literal, Expression, Absent]

ABSENT = Absent()


def classify(value: Optional[str]) -> AttributeValue:
    """Classify raw attribute text by its leading character."""
    if value is None:
        return ABSENT
    if value[:1] in (EXPRESSION_MARKER, REFERENCE_MARKER):
        return Expression(value)
    # Empty strings have no leading character and stay literal
    return Literal(value)


def needs_quote(value: str) -> bool:
    return isinstance(classify(value), Literal)


def quote_literal(text: str) -> str:
    escaped = (
        text.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"


def quote(value: Optional[str]) -> str:
    """Render an attribute value as a code fragment."""
    kind = classify(value)
    if isinstance(kind, Absent):
        return NULL_LITERAL
    if isinstance(kind, Expression):
        return kind.text
    return quote_literal(kind.text)


def arg_list(values: Sequence[Optional[str]], prune_tail: bool = True) -> str:
    """Format already-rendered values as a call argument list.

    Values are not quoted here; pass the output of :func:`quote` where a
    literal is wanted. ``None`` entries become ``None`` in the output unless
    they trail the list and ``prune_tail`` is set.
    """
    args = list(values)
    if prune_tail:
        while args and args[-1] is None:
            args.pop()
    return ", ".join(NULL_LITERAL if arg is None else arg for arg in args)


def attribute_string(attrs: Dict[str, str]) -> str:
    """Return ``' name="value" ...'`` for splicing into a start tag."""
    return "".join(f' {name}="{value}"' for name, value in attrs.items())


AttributeSpec = Union[str, Tuple[str, Optional[str]]]


def iter_attribute_spec(
    spec: Union[Iterable[AttributeSpec], Dict[str, Optional[str]]],
) -> Iterator[Tuple[str, Optional[str]]]:
    """Yield ``(name, default)`` pairs from a collector spec.

    Bare names default to ``None``; a mapping is read as name -> default.
    """
    if isinstance(spec, dict):
        yield from spec.items()
        return
    for entry in spec:
        if isinstance(entry, str):
            yield entry, None
        else:
            name, default = entry
            yield name, default
