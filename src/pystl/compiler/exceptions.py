"""Compiler errors.

All of these abort the current compilation; nothing in the compiler or the
tag handlers recovers from them.
"""

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from pystl.compiler.ast_nodes import ElementNode


class PySTLCompilerError(Exception):
    """Base class for errors raised while compiling markup."""

    def __init__(self, message: str, file_path: str = "", line: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.file_path = file_path
        self.line = line

    def __str__(self) -> str:
        location = self.file_path or "<string>"
        if self.line:
            location = f"{location}:{self.line}"
        return f"{location}: {self.message}"


class PySTLSyntaxError(PySTLCompilerError):
    """The markup itself could not be parsed."""


class ElementError(PySTLCompilerError):
    """An error pointing at a specific element."""

    def __init__(
        self, message: str, element: Optional["ElementNode"], file_path: str = ""
    ) -> None:
        super().__init__(
            message, file_path=file_path, line=element.line if element else 0
        )
        self.element = element


class MissingRequiredAttribute(ElementError):
    def __init__(self, element: "ElementNode", attr_name: str) -> None:
        super().__init__(
            f"required attribute '{attr_name}' missing from element <{element.tag}>",
            element,
        )
        self.attr_name = attr_name


class UnresolvedHandler(ElementError):
    def __init__(
        self, element: "ElementNode", qualified_name: str, handler_type: Any = None
    ) -> None:
        owner = f"Tag class {handler_type.__name__}" if handler_type else "Tag class"
        super().__init__(
            f"{owner} unable to handle element <{qualified_name}>", element
        )
        self.qualified_name = qualified_name
        self.handler_type = handler_type


class ReservedMethodInvocation(ElementError):
    def __init__(
        self,
        handler_type: Any,
        resolved_name: str,
        element: Optional["ElementNode"] = None,
    ) -> None:
        target = f" for element <{element.tag}>" if element is not None else ""
        super().__init__(
            f"won't call internal {handler_type.__name__} method "
            f"'{resolved_name}'{target}",
            element,
        )
        self.handler_type = handler_type
        self.resolved_name = resolved_name


class InvalidBooleanLiteral(ElementError):
    def __init__(self, element: "ElementNode", attr_name: str, raw_value: str) -> None:
        super().__init__(
            f"invalid boolean attribute {attr_name}={raw_value!r} on <{element.tag}>"
            " (expected true, yes, false or no)",
            element,
        )
        self.attr_name = attr_name
        self.raw_value = raw_value


class UnknownVocabulary(ElementError):
    """A prefixed element whose namespace has no registered tag class."""

    def __init__(self, element: "ElementNode", namespace: Optional[str]) -> None:
        super().__init__(
            f"no tag vocabulary registered for namespace {namespace!r}"
            f" (element <{element.tag}>)",
            element,
        )
        self.namespace = namespace
