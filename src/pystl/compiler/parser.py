"""Markup parser: lxml tree -> ElementNode/TextNode tree."""

from pathlib import Path
from typing import Dict, Optional, Union

from lxml import etree

from pystl.compiler.ast_nodes import ElementNode, TextNode
from pystl.compiler.exceptions import PySTLSyntaxError

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


class PySTLParser:
    """Parses template markup into compiler nodes."""

    def __init__(self) -> None:
        self._xml_parser = etree.XMLParser(
            remove_comments=False,
            resolve_entities=False,
            no_network=True,
        )

    def parse_file(self, file_path: Path) -> ElementNode:
        """Parse a template file."""
        with open(file_path, "rb") as f:
            content = f.read()

        return self.parse(content, str(file_path))

    def parse(self, content: Union[str, bytes], file_path: str = "") -> ElementNode:
        """Parse markup text (str or bytes) and return the root element."""
        if isinstance(content, str):
            content = content.encode("utf-8")

        try:
            root = etree.fromstring(content, self._xml_parser)
        except etree.XMLSyntaxError as e:
            line = e.position[0] if e.position else 0
            raise PySTLSyntaxError(f"Parser error: {e.msg}", file_path=file_path, line=line)

        return self._map_element(root, None)

    def _map_element(self, el, parent: Optional[ElementNode]) -> ElementNode:
        """Map an lxml element (and its subtree) to an ElementNode."""
        qname = etree.QName(el)
        tag = f"{el.prefix}:{qname.localname}" if el.prefix else qname.localname

        node = ElementNode(
            tag=tag,
            attributes=self._map_attributes(el),
            parent=parent,
            namespace=qname.namespace if el.prefix else None,
            line=el.sourceline or 0,
        )

        if el.text:
            node.append(TextNode(text=el.text, line=node.line))

        for child in el:
            # Comments, processing instructions and entities have a callable tag
            if not callable(child.tag):
                node.append(self._map_element(child, node))
            if child.tail:
                node.append(TextNode(text=child.tail, line=child.sourceline or 0))

        return node

    def _map_attributes(self, el) -> Dict[str, str]:
        """Attribute dict keyed by qualified names, in document order."""
        prefixes = {uri: prefix for prefix, uri in el.nsmap.items() if prefix}
        prefixes[XML_NAMESPACE] = "xml"
        attrs: Dict[str, str] = {}
        for name, value in el.attrib.items():
            qname = etree.QName(name)
            if qname.namespace and qname.namespace in prefixes:
                name = f"{prefixes[qname.namespace]}:{qname.localname}"
            attrs[name] = value
        return attrs
