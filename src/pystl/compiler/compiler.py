"""Template compiler: walks the node tree and builds a Python render function."""

import importlib
import io
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Type, Union

from pystl.compiler.ast_nodes import ElementNode, Node, TextNode
from pystl.compiler.attributes import arg_list, needs_quote
from pystl.compiler.exceptions import PySTLCompilerError, UnknownVocabulary
from pystl.compiler.module_renderer import render_template
from pystl.compiler.parser import PySTLParser
from pystl.compiler.preprocessor import preprocess_python_code
from pystl.compiler.tags.base import Tag
from pystl.compiler.tags.core import CORE_NAMESPACE, CoreTag
from pystl.compiler.tags.html import HTML_NAMESPACE, HtmlTag
from pystl.runtime.escape import escape_html

log = logging.getLogger(__name__)

CLASS_SCHEME = "class://"
INDENT = "    "


@dataclass
class CompiledTemplate:
    """Generated module source plus helpers to execute it."""

    source: str
    file_path: str = ""
    function_name: str = "render"
    _render_fn: Optional[Callable[..., None]] = field(
        default=None, init=False, repr=False
    )

    def load(self, globals: Optional[Dict[str, Any]] = None) -> Callable[..., None]:
        """Execute the module source and return its render function."""
        namespace: Dict[str, Any] = {"__name__": "pystl_template"}
        if globals:
            namespace.update(globals)
        code = compile(self.source, self.file_path or "<pystl>", "exec")
        exec(code, namespace)
        return namespace[self.function_name]

    def render(
        self,
        context: Optional[Dict[str, Any]] = None,
        globals: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Run the template against ``context`` and return the output text.

        ``globals`` are module-level names visible to ``@name`` references;
        passing them reloads the module.
        """
        if globals:
            render_fn = self.load(globals)
        else:
            if self._render_fn is None:
                self._render_fn = self.load()
            render_fn = self._render_fn

        out = io.StringIO()
        render_fn(dict(context or {}), out)
        return out.getvalue()


class Compiler:
    """Compiles template markup into Python source.

    Elements whose namespace is bound to a tag vocabulary are dispatched to
    an instance of that vocabulary's Tag class; unprefixed elements are
    written through as markup. A prefix bound to any other namespace is an
    error.
    """

    # HTML void elements that don't have closing tags
    VOID_ELEMENTS = {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }

    BUILTIN_VOCABULARIES: Dict[str, Type[Tag]] = {
        CORE_NAMESPACE: CoreTag,
        HTML_NAMESPACE: HtmlTag,
    }

    def __init__(
        self,
        vocabularies: Optional[Dict[str, Type[Tag]]] = None,
        debug: bool = False,
        strip_whitespace: bool = False,
        function_name: str = "render",
    ) -> None:
        self.parser = PySTLParser()
        self.vocabularies: Dict[str, Type[Tag]] = dict(self.BUILTIN_VOCABULARIES)
        if vocabularies:
            self.vocabularies.update(vocabularies)
        self.debug = debug
        self.strip_whitespace = strip_whitespace
        self.function_name = function_name
        self._reset_state()

    def _reset_state(self) -> None:
        self.file_path = ""
        self._lines: List[str] = []
        self._pending_text: List[str] = []
        self._level = 0
        self._handlers: Dict[Type[Tag], Tag] = {}

    def register_vocabulary(self, namespace: str, tag_class: Type[Tag]) -> None:
        self.vocabularies[namespace] = tag_class

    def compile(
        self, content: Union[str, bytes], file_path: str = ""
    ) -> CompiledTemplate:
        """Parse and compile template markup."""
        root = self.parser.parse(content, file_path)
        return self.compile_node(root, file_path)

    def compile_file(self, file_path: Path) -> CompiledTemplate:
        root = self.parser.parse_file(file_path)
        return self.compile_node(root, str(file_path))

    def compile_node(self, root: Node, file_path: str = "") -> CompiledTemplate:
        """Compile an already parsed node tree."""
        log.debug("Compiling %s", file_path or "<string>")
        self._reset_state()
        self.file_path = file_path
        try:
            self.process(root)
            self._flush_text()
        except PySTLCompilerError as e:
            if not e.file_path:
                e.file_path = file_path
            raise
        body = self._lines
        self._reset_state()

        source = render_template(
            "module.py.j2",
            {
                "file_path": file_path,
                "function_name": self.function_name,
                "body": body,
            },
        )
        source = preprocess_python_code(source)
        if self.debug:
            log.debug("Generated source for %s:\n%s", file_path or "<string>", source)
        return CompiledTemplate(
            source=source, file_path=file_path, function_name=self.function_name
        )

    def process(self, node: Node) -> Any:
        """Compile one node; tag handlers call back here for their children."""
        if isinstance(node, TextNode):
            if self.strip_whitespace and not node.text.strip():
                return None
            self.write_text(escape_html(node.text, quote=False))
            return None

        tag_class = self.resolve_vocabulary(node)
        if tag_class is None:
            self._write_element(node)
            return None
        return self.handler_for(tag_class).dispatch(node)

    def resolve_vocabulary(self, element: ElementNode) -> Optional[Type[Tag]]:
        """Tag class for the element's namespace, or None for unprefixed markup."""
        namespace = element.namespace
        if namespace is None:
            return None
        if namespace in self.vocabularies:
            return self.vocabularies[namespace]
        if namespace.startswith(CLASS_SCHEME):
            tag_class = self._import_vocabulary(element, namespace)
            self.vocabularies[namespace] = tag_class
            return tag_class
        raise UnknownVocabulary(element, namespace)

    def _import_vocabulary(self, element: ElementNode, namespace: str) -> Type[Tag]:
        """Import ``class://package.module:ClassName``."""
        target = namespace[len(CLASS_SCHEME) :]
        if ":" not in target:
            raise UnknownVocabulary(element, namespace)

        module_name, class_name = target.split(":", 1)
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise UnknownVocabulary(element, namespace) from e

        tag_class = getattr(module, class_name, None)
        if not (isinstance(tag_class, type) and issubclass(tag_class, Tag)):
            raise UnknownVocabulary(element, namespace)
        log.debug("Loaded tag vocabulary %s for %s", tag_class.__name__, namespace)
        return tag_class

    def handler_for(self, tag_class: Type[Tag]) -> Tag:
        """Handler instance for this compilation, created on first use."""
        handler = self._handlers.get(tag_class)
        if handler is None:
            handler = tag_class(self)
            self._handlers[tag_class] = handler
        return handler

    def _write_element(self, element: ElementNode) -> None:
        self.write_text(f"<{element.tag}")
        self.write_attributes(element.attributes)
        if not element.children and element.local_name in self.VOID_ELEMENTS:
            self.write_text(" />")
            return
        self.write_text(">")
        for child in element.children:
            self.process(child)
        self.write_text(f"</{element.tag}>")

    # Output buffer

    def write_text(self, text: str) -> None:
        """Queue literal output; consecutive text becomes one write call."""
        self._pending_text.append(text)

    def write_code(self, line: str) -> None:
        self._flush_text()
        self._lines.append(INDENT * self._level + line)

    def write_expression(self, code: str, escape: bool = True) -> None:
        """Emit code writing the value of ``code`` to the output."""
        args = arg_list([code, None, None if escape else "False"])
        self.write_code(f"out.write(@output({args}))")

    def write_attributes(self, attrs: Dict[str, str]) -> None:
        """Write ``name="value"`` pairs; ``$``/``@`` values are evaluated at render time."""
        for name, value in attrs.items():
            if needs_quote(value):
                self.write_text(f' {name}="{escape_html(value)}"')
            else:
                self.write_text(f' {name}="')
                self.write_expression(value)
                self.write_text('"')

    @contextmanager
    def indent(self) -> Iterator[None]:
        """Indent code written inside the block; an empty block gets ``pass``."""
        self._flush_text()
        start = len(self._lines)
        self._level += 1
        try:
            yield
            self._flush_text()
            if len(self._lines) == start:
                self._lines.append(INDENT * self._level + "pass")
        finally:
            self._level -= 1

    def _flush_text(self) -> None:
        if not self._pending_text:
            return
        text = "".join(self._pending_text)
        self._pending_text = []
        if text:
            self._lines.append(INDENT * self._level + f"out.write({text!r})")
