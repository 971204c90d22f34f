"""HTML helper tags.

Literal attributes are written as markup; ``$``/``@`` attributes are
evaluated when the template renders.
"""

from pystl.compiler.ast_nodes import ElementNode
from pystl.compiler.tags.base import Tag
from pystl.runtime.escape import escape_html

HTML_NAMESPACE = "urn:pystl:html"


class HtmlTag(Tag):
    def link(self, element: ElementNode) -> None:
        """<h:link href="..."> -> <a href="...">...</a>"""
        self.required_attr(element, "href", quote=False)
        attrs = self.get_attributes(
            element, ["href", "title", "target", "rel", "class", "id"], as_array=True
        )
        if "target" in attrs and "rel" not in attrs:
            attrs["rel"] = "noopener"

        self.compiler.write_text("<a")
        self.compiler.write_attributes(attrs)
        self.compiler.write_text(">")
        self.process(element)
        self.compiler.write_text("</a>")

    def image(self, element: ElementNode) -> None:
        self.required_attr(element, "src", quote=False)
        attrs = self.get_attributes(
            element, ["src", ("alt", ""), "width", "height", "class", "id"], as_array=True
        )
        self.compiler.write_text("<img")
        self.compiler.write_attributes(attrs)
        self.compiler.write_text(" />")

    def meta(self, element: ElementNode) -> None:
        """Static <meta> tag; attribute values are not evaluated."""
        attrs = self.get_attributes(
            element, ["charset", "name", "http-equiv", "content"], as_array=True
        )
        escaped = {name: escape_html(value) for name, value in attrs.items()}
        self.compiler.write_text(f"<meta{self.get_attribute_string(escaped)} />")
