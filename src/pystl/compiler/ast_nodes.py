"""Parsed markup nodes handed to the compiler and tag handlers."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union


@dataclass
class TextNode:
    """Character data between elements."""

    text: str
    parent: Optional["ElementNode"] = field(default=None, repr=False)
    line: int = 0


@dataclass
class ElementNode:
    """A markup element.

    ``tag`` is the qualified name as written (``"c:if"``), ``namespace`` the
    URI its prefix is bound to, or ``None`` for plain elements.
    """

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)
    parent: Optional["ElementNode"] = field(default=None, repr=False)
    namespace: Optional[str] = None
    line: int = 0

    @property
    def prefix(self) -> Optional[str]:
        if ":" not in self.tag:
            return None
        return self.tag.split(":", 1)[0]

    @property
    def local_name(self) -> str:
        """Everything after the first namespace separator."""
        if ":" not in self.tag:
            return self.tag
        return self.tag.split(":", 1)[1]

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def append(self, child: "Node") -> "Node":
        child.parent = self
        self.children.append(child)
        return child


Node = Union[ElementNode, TextNode]
