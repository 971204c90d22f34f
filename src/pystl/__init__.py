try:
    from ._version import __version__
except ImportError:
    from importlib.metadata import version, PackageNotFoundError

    try:
        __version__ = version("pystl")
    except PackageNotFoundError:
        __version__ = "unknown"

from pystl.compiler.compiler import CompiledTemplate, Compiler
from pystl.compiler.exceptions import (
    InvalidBooleanLiteral,
    MissingRequiredAttribute,
    PySTLCompilerError,
    PySTLSyntaxError,
    ReservedMethodInvocation,
    UnknownVocabulary,
    UnresolvedHandler,
)
from pystl.compiler.tags.base import Tag, handles

__all__ = [
    "Compiler",
    "CompiledTemplate",
    "Tag",
    "handles",
    "PySTLCompilerError",
    "PySTLSyntaxError",
    "MissingRequiredAttribute",
    "UnresolvedHandler",
    "ReservedMethodInvocation",
    "InvalidBooleanLiteral",
    "UnknownVocabulary",
]
