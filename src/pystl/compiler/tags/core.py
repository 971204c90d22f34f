"""Core tag vocabulary: control flow and output.

    <page xmlns:c="urn:pystl:core">
      <c:if test="$user"><c:out value="$user.name" /></c:if>
    </page>
"""

from pystl.compiler.ast_nodes import ElementNode, TextNode
from pystl.compiler.exceptions import ElementError
from pystl.compiler.tags.base import Tag, handles

CORE_NAMESPACE = "urn:pystl:core"


def _previous_branches(element: ElementNode) -> int:
    """Count the <when> siblings before ``element`` in its <choose>."""
    parent = element.parent
    if (
        parent is None
        or parent.namespace != element.namespace
        or parent.local_name != "choose"
    ):
        raise ElementError(f"<{element.tag}> must be inside <choose>", element)

    count = 0
    for sibling in parent.children:
        if sibling is element:
            break
        if isinstance(sibling, ElementNode) and sibling.local_name == "when":
            count += 1
    return count


class CoreTag(Tag):
    def _if(self, element: ElementNode) -> None:
        test = self.required_attr(element, "test")
        self.compiler.write_code(f"if {test}:")
        with self.compiler.indent():
            self.process(element)

    def choose(self, element: ElementNode) -> None:
        """Only <c:when> and <c:otherwise> children are compiled."""
        otherwise = None
        for child in element.children:
            if isinstance(child, TextNode):
                if child.text.strip():
                    raise ElementError(
                        f"text is not allowed directly inside <{element.tag}>", element
                    )
                continue
            if child.namespace != element.namespace or child.local_name not in (
                "when",
                "otherwise",
            ):
                raise ElementError(
                    f"<{child.tag}> is not allowed inside <{element.tag}>", child
                )
            if otherwise is not None:
                raise ElementError(
                    f"<{child.tag}> cannot follow <{otherwise.tag}> in <{element.tag}>",
                    child,
                )
            if child.local_name == "otherwise":
                otherwise = child
            self.compiler.process(child)

    def when(self, element: ElementNode) -> None:
        keyword = "elif" if _previous_branches(element) else "if"
        test = self.required_attr(element, "test")
        self.compiler.write_code(f"{keyword} {test}:")
        with self.compiler.indent():
            self.process(element)

    def otherwise(self, element: ElementNode) -> None:
        if not _previous_branches(element):
            raise ElementError(
                f"<{element.tag}> must follow a <when> inside <choose>", element
            )
        self.compiler.write_code("else:")
        with self.compiler.indent():
            self.process(element)

    @handles("for-each")
    def foreach(self, element: ElementNode) -> None:
        items = self.required_attr(element, "in")
        var = self.required_attr(element, "var", quote=False)
        index = self.get_unquoted_attr(element, "index")

        if index is not None:
            self.compiler.write_code(
                f"for context[{index!r}], context[{var!r}] in enumerate(@iterate({items})):"
            )
        else:
            self.compiler.write_code(f"for context[{var!r}] in @iterate({items}):")
        with self.compiler.indent():
            self.process(element)

    def out(self, element: ElementNode) -> None:
        value = self.required_attr(element, "value")
        default = self.get_unquoted_attr(element, "default")
        escape = self.get_boolean_attr(element, "escape", True)

        args = self.arg_list(
            [
                value,
                self.quote(default) if default is not None else None,
                None if escape else "False",
            ]
        )
        self.compiler.write_code(f"out.write(@output({args}))")

    def set(self, element: ElementNode) -> None:
        var = self.required_attr(element, "var", quote=False)
        value = self.get_attr(element, "value")
        self.compiler.write_code(f"context[{var!r}] = {value}")

    def comment(self, element: ElementNode) -> None:
        """Drop the element and everything in it."""
