"""Tag handler base class.

A vocabulary is a ``Tag`` subclass bound to a namespace URI. For an element
``<ns:name>`` the handler method ``name`` is called, or ``_name`` when the
local name is not usable as a Python identifier on its own (``_if``,
``_for``). Names that are not identifiers at all (``for-each``) are mapped
with :func:`handles`.
"""

from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    ClassVar,
    Dict,
    FrozenSet,
    Iterable,
    Optional,
    TypeVar,
    Union,
)

from pystl.compiler import attributes
from pystl.compiler.ast_nodes import ElementNode
from pystl.compiler.attributes import AttributeSpec
from pystl.compiler.exceptions import (
    InvalidBooleanLiteral,
    MissingRequiredAttribute,
    ReservedMethodInvocation,
    UnresolvedHandler,
)

if TYPE_CHECKING:
    from pystl.compiler.compiler import Compiler

F = TypeVar("F", bound=Callable[..., Any])

TRUE_LITERALS = ("true", "yes")
FALSE_LITERALS = ("false", "no")


def handles(*tag_names: str) -> Callable[[F], F]:
    """Register extra local tag names for a handler method.

    Usage:
        @handles("for-each")
        def for_each(self, element):
            ...
    """

    def decorator(fn: F) -> F:
        existing = getattr(fn, "_pystl_tags", ())
        setattr(fn, "_pystl_tags", tuple(existing) + tag_names)
        return fn

    return decorator


class Tag:
    """Base class for tag vocabularies."""

    # local tag name -> method name, built per subclass
    _handlers: ClassVar[Dict[str, str]] = {}

    def __init__(self, compiler: "Compiler") -> None:
        self.compiler = compiler

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        handlers: Dict[str, str] = {}
        for klass in reversed(cls.__mro__):
            if klass is Tag or not issubclass(klass, Tag):
                continue
            for name, value in vars(klass).items():
                if isinstance(value, (staticmethod, classmethod)):
                    value = value.__func__
                if not callable(value):
                    continue
                if name.startswith("__") or name in BASE_CONTRACT:
                    continue
                handlers[name] = name
                for tag_name in getattr(value, "_pystl_tags", ()):
                    handlers[tag_name] = name
        cls._handlers = handlers

    @classmethod
    def handled_tags(cls) -> FrozenSet[str]:
        return frozenset(cls._handlers)

    def dispatch(self, element: ElementNode) -> Any:
        """Route ``element`` to the handler method for its local name.

        ``name`` is tried before ``_name``; the first one that exists on the
        handler type is used. Existing names outside the handler table (base
        class methods, ``__`` names) raise ReservedMethodInvocation.

        The handler's return value is passed through, usually ``None``.
        """
        if ":" not in element.tag:
            raise UnresolvedHandler(element, element.tag, type(self))

        local_name = element.local_name
        for candidate in (local_name, f"_{local_name}"):
            method_name = self._handlers.get(candidate)
            if method_name is not None:
                return getattr(self, method_name)(element)
            if self._is_reserved(candidate):
                raise ReservedMethodInvocation(type(self), candidate, element)

        raise UnresolvedHandler(element, element.tag, type(self))

    @classmethod
    def _is_reserved(cls, name: str) -> bool:
        if not (name.startswith("__") or name in BASE_CONTRACT):
            return False
        return callable(getattr(cls, name, None))

    def required_attr(
        self, element: ElementNode, attr: str, quote: bool = True
    ) -> str:
        if not element.has_attribute(attr):
            raise MissingRequiredAttribute(element, attr)

        value = element.attributes[attr]
        if quote:
            return self.quote(value)
        return value

    def get_attr(
        self, element: ElementNode, attr: str, default: Optional[str] = None
    ) -> str:
        """Quoted attribute value; a missing attribute quotes ``default``."""
        if element.has_attribute(attr):
            return self.quote(element.attributes[attr])
        return self.quote(default)

    def get_unquoted_attr(
        self, element: ElementNode, attr: str, default: Optional[str] = None
    ) -> Optional[str]:
        if element.has_attribute(attr):
            return element.attributes[attr]
        return default

    def get_boolean_attr(
        self, element: ElementNode, attr: str, default: bool = False
    ) -> bool:
        if not element.has_attribute(attr):
            return default

        value = element.attributes[attr]
        if value in TRUE_LITERALS:
            return True
        if value in FALSE_LITERALS:
            return False
        raise InvalidBooleanLiteral(element, attr, value)

    def get_attributes(
        self,
        element: ElementNode,
        attrs: Union[Iterable[AttributeSpec], Dict[str, Optional[str]]],
        as_array: bool = False,
    ) -> Union[Dict[str, str], str]:
        """Collect raw attribute values.

        ``attrs`` holds names or ``(name, default)`` pairs. Attributes that
        are missing and have no default are skipped. Returns a dict in
        ``attrs`` order when ``as_array`` is set, otherwise a string like
        ``' name="value" name="value"'``.
        """
        opts: Dict[str, str] = {}
        for name, default in attributes.iter_attribute_spec(attrs):
            value = self.get_unquoted_attr(element, name, default)
            if value is not None:
                opts[name] = value

        if as_array:
            return opts
        return self.get_attribute_string(opts)

    def get_attribute_string(self, attrs: Dict[str, str]) -> str:
        return attributes.attribute_string(attrs)

    def process(self, element: ElementNode) -> None:
        """Hand each child back to the compiler, in document order."""
        for child in element.children:
            self.compiler.process(child)

    def quote(self, value: Optional[str]) -> str:
        if value is None:
            return attributes.NULL_LITERAL
        if self.needs_quote(value):
            return attributes.quote_literal(value)
        return value

    def needs_quote(self, value: str) -> bool:
        return attributes.needs_quote(value)

    def arg_list(self, args: Iterable[Optional[str]], prune_tail: bool = True) -> str:
        return attributes.arg_list(list(args), prune_tail)


# Everything the base class declares is infrastructure, never a tag
BASE_CONTRACT: FrozenSet[str] = frozenset(
    name for name in vars(Tag) if not name.startswith("__")
)
