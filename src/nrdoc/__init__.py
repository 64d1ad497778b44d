"""nrdoc - Documentation extraction for Noir source files."""

from nrdoc.errors import (
    DocError,
    ModuleCycleError,
    ModuleReadError,
    StructuralError,
    TokenizeError,
)
from nrdoc.extractors import build_tree, extract_file, extract_source, find_implementations
from nrdoc.lexer import tokenize
from nrdoc.models import (
    DocNode,
    DocStyle,
    Function,
    Implementation,
    Keyword,
    Kind,
    Token,
    TokenKind,
)
from nrdoc.modules import ModuleLoader

__all__ = [
    "DocError",
    "ModuleCycleError",
    "ModuleReadError",
    "StructuralError",
    "TokenizeError",
    "build_tree",
    "extract_file",
    "extract_source",
    "find_implementations",
    "tokenize",
    "DocNode",
    "DocStyle",
    "Function",
    "Implementation",
    "Keyword",
    "Kind",
    "Token",
    "TokenKind",
    "ModuleLoader",
]
