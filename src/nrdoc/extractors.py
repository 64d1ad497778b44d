"""Documentation tree extraction from a token stream.

The tree builder walks the tokens once, left to right. On a declaration
keyword it hands off to the signature, comment and module helpers, appends
one ``DocNode`` and moves its cursor past everything that declaration
consumed. ``impl`` blocks never become nodes of their own; they are linked
to the struct or trait they name, wherever in the stream they appear.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence

from .comments import body_doc, doc, outer_doc
from .config import Config
from .errors import MalformedDeclaration, StructuralError
from .lexer import tokenize
from .models import (
    BlankDetail,
    DocNode,
    DocStyle,
    Function,
    FunctionDetail,
    Implementation,
    Keyword,
    Kind,
    ModuleDetail,
    StructDetail,
    Token,
    TokenKind,
    TraitDetail,
)
from .modules import ModuleLoader, load_tokens
from .scanner import capture_scope, declaration_end, scope_end, skip_scope
from .signatures import (
    fn_signature,
    iter_methods,
    method_name,
    render,
    struct_signature,
    trait_info,
)

log = logging.getLogger(__name__)

# A handler returns the node it built (None for impl blocks) and the index
# of the first token after the declaration.
Handler = Callable[[Sequence[Token], int, ModuleLoader], tuple[Optional[DocNode], int]]


def _declaration_name(tokens: Sequence[Token], index: int) -> str:
    if index + 1 < len(tokens) and tokens[index + 1].kind is TokenKind.IDENT:
        return tokens[index + 1].text
    raise MalformedDeclaration(
        f"'{tokens[index].text}' on line {tokens[index].line} is not followed by a name"
    )


# -- implementation linking ---------------------------------------------------


def _impl_names(header: Sequence[Token]) -> tuple[str | None, str]:
    """Return ``(trait_name, type_name)`` from the tokens after ``impl``."""
    before: list[str] = []
    after: list[str] = []
    seen_for = False
    depth = 0
    for token in header:
        if token.is_punct("<"):
            depth += 1
        elif token.is_punct(">"):
            depth -= 1
        elif depth:
            continue
        elif token.kind is TokenKind.KEYWORD and token.text == "for":
            seen_for = True
        elif token.kind is TokenKind.KEYWORD and token.text == "where":
            break
        elif token.kind is TokenKind.IDENT:
            (after if seen_for else before).append(token.text)

    # Paths such as std::ops::Add name the item by their last segment
    if seen_for:
        return (before[-1] if before else None), (after[-1] if after else "")
    return None, (before[-1] if before else "")


def implementation_at(tokens: Sequence[Token], index: int) -> Implementation:
    """Build the implementation record for the ``impl`` at ``index``."""
    open_index = declaration_end(tokens, index)
    if not tokens[open_index].is_punct("{"):
        raise StructuralError(f"impl at token {index} has no body", index=index)

    trait_name, type_name = _impl_names(tokens[index + 1 : open_index])
    methods = []
    for fn_index, _ in iter_methods(tokens, open_index):
        name = method_name(tokens, fn_index)
        if name is None:
            continue
        methods.append(
            Function(
                name=name,
                doc=doc(tokens, fn_index),
                signature=fn_signature(tokens, fn_index),
                is_method=True,
                line=tokens[fn_index].line,
            )
        )

    return Implementation(
        signature=render(tokens[index:open_index]),
        type_name=type_name,
        trait_name=trait_name,
        doc=doc(tokens, index),
        methods=tuple(methods),
        line=tokens[index].line,
    )


def find_implementations(
    tokens: Sequence[Token], name: str, trait: bool = False
) -> tuple[Implementation, ...]:
    """Find every ``impl`` block in the stream that implements ``name``.

    Args:
        tokens: The whole token stream, not just the neighbourhood of the
            declaration; impls may come before the item they implement.
        name: Exact struct or trait name.
        trait: Match impls *of* the trait ``name`` rather than impls *for*
            the type ``name``.

    Returns:
        Matching implementations in source order.
    """
    found = []
    for i, token in enumerate(tokens):
        if not token.is_keyword(Keyword.IMPLEMENTATION):
            continue
        implementation = implementation_at(tokens, i)
        target = implementation.trait_name if trait else implementation.type_name
        if target == name:
            log.debug("Linked '%s' to %s", implementation.signature, name)
            found.append(implementation)
    return tuple(found)


# -- module resolution --------------------------------------------------------


def module_content(
    tokens: Sequence[Token], index: int, loader: ModuleLoader
) -> tuple[list[DocNode], int]:
    """Extract the content of the module declared at ``index``.

    ``mod name;`` loads ``name`` from a file through ``loader``; ``mod name
    { ... }`` extracts the enclosed tokens. Either way the full tree builder
    runs again on the module's own tokens.

    Returns:
        The module's nodes and the index of its terminating ``;`` or ``}``.
    """
    for i in range(index + 1, len(tokens)):
        token = tokens[i]
        if token.is_punct(";"):
            name = tokens[i - 1].text
            with loader.tracking(loader.path_for(name)):
                return build_tree(loader.load(name), loader), i
        if token.is_punct("{"):
            inner, end = capture_scope(tokens, i)
            return build_tree(inner, loader), end
    raise StructuralError(
        f"Module at token {index} has neither ';' nor a body", index=index
    )


# -- tree building ------------------------------------------------------------


def _function(tokens, index, loader):
    name = _declaration_name(tokens, index)
    stop = declaration_end(tokens, index)
    node = DocNode(
        kind=Kind.FUNCTION,
        name=name,
        doc=doc(tokens, index),
        detail=FunctionDetail(signature=fn_signature(tokens, index)),
        line=tokens[index].line,
    )
    if tokens[stop].is_punct("{"):
        return node, scope_end(tokens, stop) + 1
    return node, stop + 1


def _struct(tokens, index, loader):
    name = _declaration_name(tokens, index)
    signature, end = struct_signature(tokens, index)
    extra = "" if tokens[end].is_punct(";") else body_doc(tokens, declaration_end(tokens, index))
    node = DocNode(
        kind=Kind.STRUCT,
        name=name,
        doc=doc(tokens, index),
        detail=StructDetail(
            signature=signature,
            additional_doc=extra,
            implementations=find_implementations(tokens, name),
        ),
        line=tokens[index].line,
    )
    return node, end + 1


def _trait(tokens, index, loader):
    name = _declaration_name(tokens, index)
    skip = skip_scope(tokens, index)
    shape = trait_info(tokens, index)
    node = DocNode(
        kind=Kind.TRAIT,
        name=name,
        doc=doc(tokens, index),
        detail=TraitDetail(
            signature=shape.signature,
            additional_doc=body_doc(tokens, declaration_end(tokens, index)),
            required_methods=shape.required_methods,
            provided_methods=shape.provided_methods,
            implementations=find_implementations(tokens, name, trait=True),
        ),
        line=tokens[index].line,
    )
    return node, index + skip + 1


def _module(tokens, index, loader):
    name = _declaration_name(tokens, index)
    content, end = module_content(tokens, index, loader)
    node = DocNode(
        kind=Kind.MODULE,
        name=name,
        doc=doc(tokens, index),
        detail=ModuleDetail(content=tuple(content)),
        line=tokens[index].line,
    )
    return node, end + 1


def _implementation(tokens, index, loader):
    return None, index + skip_scope(tokens, index) + 1


_HANDLERS: dict[Keyword, Handler] = {
    Keyword.FUNCTION: _function,
    Keyword.STRUCT: _struct,
    Keyword.TRAIT: _trait,
    Keyword.MODULE: _module,
    Keyword.IMPLEMENTATION: _implementation,
}


def _leading_comment(
    tokens: Sequence[Token], index: int, is_first: bool
) -> tuple[DocNode, int, bool]:
    """Build the node for the inner doc run starting at ``index``.

    Only the first run of a scope keeps its text; later runs become blank
    nodes. A later run of a single comment re-arms the first-run state, so
    the next run keeps its text again.

    Returns:
        The node, the index after the run, and the new first-run state.
    """
    text, last = outer_doc(tokens, index)
    if is_first:
        is_first = False
    else:
        is_first = last == index
        text = ""
    node = DocNode(
        kind=Kind.LEADING_COMMENT,
        name="",
        doc=text,
        detail=BlankDetail(),
        line=tokens[index].line,
    )
    return node, last + 1, is_first


def build_tree(tokens: Sequence[Token], loader: ModuleLoader | None = None) -> list[DocNode]:
    """Build the documentation tree for a token stream.

    Args:
        tokens: Tokens of one file or one inline module body.
        loader: Resolves ``mod name;`` declarations. Defaults to a loader
            rooted at ``Config.MODULE_DIR``.

    Returns:
        Top-level nodes in source order; modules own their children.

    Raises:
        StructuralError: If a scope is unbalanced or the stream ends mid-item.
        ModuleReadError, TokenizeError, ModuleCycleError: If an external
            module cannot be loaded.
    """
    tokens = tuple(tokens)
    if loader is None:
        loader = ModuleLoader()

    nodes: list[DocNode] = []
    is_first = True
    # Braces no handler consumed, innermost last
    open_scopes: list[int] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token.is_comment and token.style is DocStyle.INNER:
            node, i, is_first = _leading_comment(tokens, i, is_first)
            nodes.append(node)
            continue

        handler = _HANDLERS.get(token.keyword) if token.keyword else None
        if handler is None:
            if token.is_punct("{"):
                open_scopes.append(i)
            elif token.is_punct("}"):
                if not open_scopes:
                    raise StructuralError(
                        f"Unmatched '}}' on line {token.line}", index=i
                    )
                open_scopes.pop()
            i += 1
            continue

        try:
            node, next_index = handler(tokens, i, loader)
        except MalformedDeclaration as e:
            log.debug("Skipping malformed declaration: %s", e)
            i += 1
            continue

        if node is not None:
            nodes.append(node)
        i = next_index

    if open_scopes:
        raise StructuralError(
            f"Scope opened at token {open_scopes[-1]} is never closed", index=open_scopes[-1]
        )
    return nodes


def extract_file(path: str | Path, loader: ModuleLoader | None = None) -> list[DocNode]:
    """Extract the documentation tree of a source file.

    Without an explicit loader, ``mod name;`` files are looked up next to
    ``path`` unless ``NRDOC_MODULE_DIR`` is set.
    """
    path = Path(path)
    if loader is None:
        loader = ModuleLoader(Config.MODULE_DIR if Config.MODULE_DIR_IS_SET else path.parent)
    with loader.tracking(path):
        return build_tree(load_tokens(path), loader)


def extract_source(source: str, loader: ModuleLoader | None = None) -> list[DocNode]:
    """Extract the documentation tree of source text."""
    return build_tree(tokenize(source), loader)
